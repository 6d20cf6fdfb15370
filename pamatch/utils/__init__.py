#!/usr/bin/env python3
"""
Sequence input and result output helpers
"""
from .fasta import read_fasta_collection, read_subject_collections
from .writer import ResultWriter

__all__ = ['read_fasta_collection', 'read_subject_collections', 'ResultWriter']
