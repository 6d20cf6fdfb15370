#!/usr/bin/env python3
"""
FASTA-backed sequence provider.
"""
import logging
import os
from typing import List, Sequence

from Bio import SeqIO

from pamatch.exceptions import FileOperationError
from pamatch.models.sequence import SequenceCollection

logger = logging.getLogger(__name__)


def read_fasta_collection(path: str, name: str = "") -> SequenceCollection:
    """Read a FASTA file into a collection with 1-based ids in file order.

    Labels are the full header line (identifier and description).

    Args:
        path: FASTA file path
        name: Collection name (defaults to the file name)

    Raises:
        FileOperationError: If the file is missing or cannot be parsed
    """
    if not os.path.exists(path):
        raise FileOperationError(f"FASTA file not found: {path}", {'path': path})

    try:
        with open(path, 'r') as handle:
            pairs = [(record.description, str(record.seq)) for record in SeqIO.parse(handle, 'fasta')]
    except (OSError, ValueError) as e:
        raise FileOperationError(f"Error reading FASTA file {path}: {str(e)}", {'path': path}) from e

    collection = SequenceCollection.from_pairs(name or os.path.basename(path), pairs)
    if collection.is_empty:
        logger.warning(f"No sequences in {path}")
    else:
        logger.debug(f"Read {len(collection)} sequences from {path}")
    return collection


def read_subject_collections(paths: Sequence[str], name: str = "subjects") -> SequenceCollection:
    """Read one FASTA per genome and combine them into one subject collection"""
    collections: List[SequenceCollection] = [read_fasta_collection(path) for path in paths]
    combined = SequenceCollection.combine(collections, name=name)
    logger.info(f"Loaded {len(combined)} subject sequences from {len(paths)} files")
    return combined
