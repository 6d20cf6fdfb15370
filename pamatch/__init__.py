#!/usr/bin/env python3
"""
pyPAMatch - anchored-alignment presence/absence pipeline

Post-processes k-mer seed searches and anchored global alignments into
per-query match statistics and a query x genome presence/absence matrix.
"""

__version__ = '0.1.0'
__author__ = 'pyPAMatch Team'
__email__ = 'example@example.org'
__license__ = 'MIT'

from .exceptions import PAMatchError
from .error_handlers import handle_exceptions

__all__ = ['PAMatchError', 'handle_exceptions']
