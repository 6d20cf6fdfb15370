#!/usr/bin/env python3
"""
Search/alignment engines consumed by the pipeline
"""
from .base import SearchEngine
from .kmer import KmerSearchEngine

__all__ = ['SearchEngine', 'KmerSearchEngine']
