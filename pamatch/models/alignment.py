#!/usr/bin/env python3
"""
Seed matches and alignment records exchanged with the search engine.
"""
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from pamatch.exceptions import ValidationError

# (query_start, query_end, subject_start, subject_end), 1-based inclusive
Segment = Tuple[int, int, int, int]


def _as_segment(values) -> Segment:
    segment = tuple(int(v) for v in values)
    if len(segment) != 4:
        raise ValidationError(f"Segments have four coordinates, got {len(segment)}",
                              {'segment': segment})
    return segment


@dataclass(frozen=True)
class SeedPair:
    """Local seed-match segments between one query and one subject"""
    query_id: int
    subject_id: int
    positions: Tuple[Segment, ...]

    def __post_init__(self):
        object.__setattr__(self, 'positions', tuple(_as_segment(s) for s in self.positions))


@dataclass(frozen=True)
class AnchoredPair(SeedPair):
    """Seed pair bracketed by synthetic start and end anchors"""
    query_length: int = 0
    subject_length: int = 0

    @property
    def seeds(self) -> Tuple[Segment, ...]:
        """Segments between the two anchors"""
        return self.positions[1:-1]


@dataclass(frozen=True)
class AlignmentRecord:
    """Result of aligning one anchored pair end to end.

    score_pid and match_pid stay None until the record is normalized.
    """
    query_id: int
    subject_id: int
    score: float
    matches: int
    mismatches: int
    gap_columns: int
    alignment_length: int
    query_length: int
    subject_length: int
    score_pid: Optional[float] = None
    match_pid: Optional[float] = None

    @property
    def is_degenerate(self) -> bool:
        return self.alignment_length == 0

    @property
    def is_normalized(self) -> bool:
        return self.match_pid is not None

    def with_identity(self, score_pid: float, match_pid: float) -> 'AlignmentRecord':
        return replace(self, score_pid=score_pid, match_pid=match_pid)

    def to_dict(self) -> dict:
        return {
            'query_id': self.query_id,
            'subject_id': self.subject_id,
            'score': self.score,
            'matches': self.matches,
            'mismatches': self.mismatches,
            'gap_columns': self.gap_columns,
            'alignment_length': self.alignment_length,
            'query_length': self.query_length,
            'subject_length': self.subject_length,
            'score_pid': self.score_pid,
            'match_pid': self.match_pid,
        }
