#!/usr/bin/env python3
"""
Identity normalization of alignment records.
"""
import logging
from typing import Iterable, List, Tuple

from pamatch.exceptions import DegenerateAlignment
from pamatch.models.alignment import AlignmentRecord

logger = logging.getLogger(__name__)


def normalize_alignment(record: AlignmentRecord) -> AlignmentRecord:
    """Attach score_pid and match_pid, both divided by alignment length.

    Raises:
        DegenerateAlignment: If the alignment has zero length
    """
    if record.alignment_length == 0:
        raise DegenerateAlignment(
            f"Alignment of query {record.query_id} to subject {record.subject_id} has zero length",
            {'query_id': record.query_id, 'subject_id': record.subject_id}
        )
    length = float(record.alignment_length)
    return record.with_identity(score_pid=record.score / length,
                                match_pid=record.matches / length)


def normalize_records(records: Iterable[AlignmentRecord]) -> List[AlignmentRecord]:
    return [normalize_alignment(record) for record in records]


def drop_degenerate(records: Iterable[AlignmentRecord]) -> Tuple[List[AlignmentRecord], int]:
    """Remove zero-length alignments ahead of normalization

    Returns:
        Tuple of (kept records, number dropped)
    """
    kept = []
    dropped = 0
    for record in records:
        if record.is_degenerate:
            dropped += 1
            logger.warning(f"Dropping zero-length alignment of query {record.query_id} "
                           f"to subject {record.subject_id}")
        else:
            kept.append(record)
    return kept, dropped
