#!/usr/bin/env python3
"""
Artifacts derived during one pipeline pass.

All of these are built once by a pipeline stage and only read afterwards.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple

import numpy as np
import pandas as pd

from pamatch.models.alignment import AlignmentRecord
from pamatch.models.sequence import SequenceRef


class GroupStatus(Enum):
    """Why a query group is empty (or not)"""
    NO_DATA = "no_data"
    FILTERED_OUT = "filtered_out"
    RETAINED = "retained"


@dataclass(frozen=True)
class QueryGroups:
    """
    Records partitioned by query id and filtered by match_pid.

    Key order is first appearance of the query id in the record stream.
    Every query seen (or declared) keeps a key, even when nothing survives.
    """
    threshold: float
    groups: Dict[int, Tuple[AlignmentRecord, ...]] = field(default_factory=dict)
    total_counts: Dict[int, int] = field(default_factory=dict)

    def __getitem__(self, query_id: int) -> Tuple[AlignmentRecord, ...]:
        return self.groups[query_id]

    def __contains__(self, query_id: int) -> bool:
        return query_id in self.groups

    def __iter__(self) -> Iterator[int]:
        return iter(self.groups)

    def __len__(self) -> int:
        return len(self.groups)

    def items(self):
        return self.groups.items()

    @property
    def query_ids(self) -> List[int]:
        return list(self.groups)

    def size(self, query_id: int) -> int:
        return len(self.groups[query_id])

    def mean_match_pid(self, query_id: int) -> float:
        records = self.groups[query_id]
        if not records:
            return 0.0
        return float(np.mean([r.match_pid for r in records]))

    def status(self, query_id: int) -> GroupStatus:
        if self.groups[query_id]:
            return GroupStatus.RETAINED
        if self.total_counts.get(query_id, 0) == 0:
            return GroupStatus.NO_DATA
        return GroupStatus.FILTERED_OUT

    @property
    def retained_count(self) -> int:
        return sum(len(records) for records in self.groups.values())

    @property
    def total_count(self) -> int:
        return sum(self.total_counts.values())

    def non_empty(self) -> Dict[int, Tuple[AlignmentRecord, ...]]:
        return {q: records for q, records in self.groups.items() if records}


@dataclass(frozen=True, eq=False)
class PresenceMatrix:
    """
    Query x genome hit counts with a breadth-based presentation order.

    counts keeps rows in grouping order; row_order holds positional
    indices into those rows, sorted ascending by breadth (stable).
    """
    counts: pd.DataFrame
    row_order: Tuple[int, ...] = ()

    @property
    def query_ids(self) -> List[int]:
        return [int(q) for q in self.counts.index]

    @property
    def genome_ids(self) -> List[str]:
        return list(self.counts.columns)

    @property
    def is_empty(self) -> bool:
        return self.counts.shape[0] == 0

    def row_sums(self) -> pd.Series:
        return self.counts.sum(axis=1)

    def column_totals(self) -> pd.Series:
        return self.counts.sum(axis=0)

    def breadth(self) -> pd.Series:
        """Number of genomes with at least one hit, per query"""
        return (self.counts > 0).sum(axis=1)

    @property
    def ordered_query_ids(self) -> List[int]:
        ids = self.query_ids
        return [ids[i] for i in self.row_order]

    def ordered(self) -> pd.DataFrame:
        """Counts with rows permuted into row_order"""
        return self.counts.iloc[list(self.row_order)]


@dataclass(frozen=True)
class QueryHitSummary:
    """One retained hit of a query, reduced for persistence"""
    query_id: int
    subject_id: int
    accession: str
    genome_id: str
    score_pid: float
    match_pid: float

    def as_triple(self) -> Tuple[str, float, float]:
        return (self.accession, self.score_pid, self.match_pid)


@dataclass(frozen=True)
class RepresentativeSample:
    """
    Display sample of one qualifying query group.

    members[0] is always the query itself; member_indices point into the
    full member list (query followed by the group's subjects).
    """
    query_id: int
    group_size: int
    mean_match_pid: float
    members: Tuple[SequenceRef, ...]
    member_indices: Tuple[int, ...]
    seed: int

    @property
    def is_subsampled(self) -> bool:
        return len(self.member_indices) < self.group_size + 1


@dataclass
class PipelineResult:
    """Everything one pipeline pass hands to the persistence layer"""
    records: List[AlignmentRecord]
    groups: QueryGroups
    matrix: PresenceMatrix
    summaries: Dict[int, List[QueryHitSummary]]
    representative: Optional[RepresentativeSample] = None
    representative_error: Optional[str] = None
    stats: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        """True when no record survived to the presence matrix"""
        return self.matrix.is_empty

    @property
    def has_representative(self) -> bool:
        return self.representative is not None
