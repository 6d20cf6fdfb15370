#!/usr/bin/env python3
"""
Contract for the external seed-search / anchored-alignment engine.
"""
import logging
from abc import ABC, abstractmethod
from typing import Callable, List, Sequence, TypeVar

from pamatch.core.output import suppress_output
from pamatch.exceptions import PAMatchError, SearchEngineError
from pamatch.models.alignment import AlignmentRecord, AnchoredPair, SeedPair
from pamatch.models.sequence import SequenceCollection

T = TypeVar('T')


class SearchEngine(ABC):
    """
    Base class for engines producing seed pairs and alignment records.

    Subclasses implement _find_seeds and _align. The public calls silence
    the engine's own diagnostic output when quiet is set and wrap
    unexpected failures in SearchEngineError, which aborts the pass.
    """

    def __init__(self, quiet: bool = True):
        self.quiet = quiet
        self.logger = logging.getLogger(f"pamatch.engines.{self.__class__.__name__.lower()}")

    def find_seeds(self, queries: SequenceCollection,
                   subjects: SequenceCollection, k: int) -> List[SeedPair]:
        """Seed pairs for every (query, subject) with at least one k-mer match"""
        if queries.is_empty or subjects.is_empty:
            self.logger.warning("Seed search skipped: empty query or subject collection")
            return []
        return self._call("seed search", self._find_seeds, queries, subjects, k)

    def align(self, pairs: Sequence[AnchoredPair],
              queries: SequenceCollection,
              subjects: SequenceCollection) -> List[AlignmentRecord]:
        """One alignment record per anchored pair, in input order"""
        if not pairs:
            return []
        return self._call("alignment", self._align, pairs, queries, subjects)

    def _call(self, stage: str, func: Callable[..., T], *args) -> T:
        try:
            if self.quiet:
                with suppress_output():
                    return func(*args)
            return func(*args)
        except PAMatchError:
            raise
        except Exception as e:
            self.logger.error(f"{stage} failed: {str(e)}", exc_info=True)
            raise SearchEngineError(f"{stage} failed: {str(e)}",
                                    {'engine': self.__class__.__name__, 'stage': stage}) from e

    @abstractmethod
    def _find_seeds(self, queries: SequenceCollection,
                    subjects: SequenceCollection, k: int) -> List[SeedPair]:
        raise NotImplementedError("Subclasses must implement _find_seeds")

    @abstractmethod
    def _align(self, pairs: Sequence[AnchoredPair],
               queries: SequenceCollection,
               subjects: SequenceCollection) -> List[AlignmentRecord]:
        raise NotImplementedError("Subclasses must implement _align")
