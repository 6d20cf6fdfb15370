#!/usr/bin/env python3
"""
Reference k-mer seed search and anchored global alignment.

Seeds are exact k-mer matches merged along diagonals into ungapped
segments and chained co-linearly. Alignment scores the seed segments
without gaps and fills every region between consecutive segments
(anchors included) with a global PairwiseAligner alignment.
"""
from collections import defaultdict
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from Bio.Align import PairwiseAligner

from pamatch.config.defaults import DEFAULT_CONFIG
from pamatch.exceptions import SearchEngineError
from pamatch.models.alignment import AlignmentRecord, AnchoredPair, SeedPair, Segment
from pamatch.models.sequence import SequenceCollection

from .base import SearchEngine

# (query_pos, subject_pos), 1-based start of a matching k-mer
Hit = Tuple[int, int]


@dataclass
class RegionStats:
    """Column counts for one aligned stretch"""
    score: float = 0.0
    matches: int = 0
    mismatches: int = 0
    gaps: int = 0
    columns: int = 0

    def add(self, other: 'RegionStats') -> None:
        self.score += other.score
        self.matches += other.matches
        self.mismatches += other.mismatches
        self.gaps += other.gaps
        self.columns += other.columns


def merge_hits(hits: Sequence[Hit], k: int) -> List[Segment]:
    """Merge k-mer hits that overlap or abut on the same diagonal into segments"""
    segments = []
    current = None
    for q, s in sorted(hits, key=lambda h: (h[1] - h[0], h[0])):
        if current is not None and s - q == current[2] - current[0] and q <= current[1] + 1:
            new_end = max(current[1], q + k - 1)
            current = (current[0], new_end, current[2], current[2] + (new_end - current[0]))
        else:
            if current is not None:
                segments.append(current)
            current = (q, q + k - 1, s, s + k - 1)
    if current is not None:
        segments.append(current)
    return segments


def chain_segments(segments: Sequence[Segment]) -> List[Segment]:
    """Highest-coverage chain of segments strictly increasing in both sequences"""
    if not segments:
        return []

    ordered = sorted(segments, key=lambda seg: (seg[0], seg[2]))
    best = [seg[1] - seg[0] + 1 for seg in ordered]
    previous: List[Optional[int]] = [None] * len(ordered)

    for i, seg in enumerate(ordered):
        for j in range(i):
            before = ordered[j]
            if before[1] < seg[0] and before[3] < seg[2]:
                candidate = best[j] + seg[1] - seg[0] + 1
                if candidate > best[i]:
                    best[i] = candidate
                    previous[i] = j

    end = max(range(len(ordered)), key=lambda i: (best[i], -i))
    chain = []
    while end is not None:
        chain.append(ordered[end])
        end = previous[end]
    return chain[::-1]


def build_aligner(scoring: Dict[str, float]) -> PairwiseAligner:
    aligner = PairwiseAligner()
    aligner.mode = 'global'
    aligner.match_score = scoring['match_score']
    aligner.mismatch_score = scoring['mismatch_score']
    aligner.open_gap_score = scoring['open_gap_score']
    aligner.extend_gap_score = scoring['extend_gap_score']
    return aligner


def gap_score(length: int, scoring: Dict[str, float]) -> float:
    if length == 0:
        return 0.0
    return scoring['open_gap_score'] + (length - 1) * scoring['extend_gap_score']


def score_columns(query_row: str, subject_row: str, scoring: Dict[str, float]) -> RegionStats:
    """Count matches, mismatches and gap columns of two equal-length aligned rows"""
    stats = RegionStats(columns=len(query_row))
    for a, b in zip(query_row, subject_row):
        if a == '-' or b == '-':
            stats.gaps += 1
        elif a == b:
            stats.matches += 1
        else:
            stats.mismatches += 1
    stats.score = stats.matches * scoring['match_score'] + stats.mismatches * scoring['mismatch_score']
    return stats


def align_region(aligner: PairwiseAligner, query_part: str, subject_part: str,
                 scoring: Dict[str, float]) -> RegionStats:
    """Global alignment of the residues between two consecutive segments"""
    if not query_part and not subject_part:
        return RegionStats()
    if not query_part or not subject_part:
        n = len(query_part) + len(subject_part)
        return RegionStats(score=gap_score(n, scoring), gaps=n, columns=n)

    alignment = aligner.align(query_part, subject_part)[0]
    stats = score_columns(alignment[0], alignment[1], scoring)
    stats.score = float(alignment.score)
    return stats


def align_anchored(pair: AnchoredPair, query_seq: str, subject_seq: str,
                   scoring: Dict[str, float]) -> AlignmentRecord:
    """
    Align an anchored pair end to end.

    Raises:
        SearchEngineError: If segments are out of order or not ungapped
    """
    aligner = build_aligner(scoring)
    query_seq = query_seq.upper()
    subject_seq = subject_seq.upper()
    total = RegionStats()

    positions = pair.positions
    for index, (prev, cur) in enumerate(zip(positions, positions[1:]), start=1):
        q_from, q_to = prev[1], cur[0] - 1
        s_from, s_to = prev[3], cur[2] - 1
        if q_to < q_from or s_to < s_from:
            raise SearchEngineError(
                f"Segments out of order for query {pair.query_id} / subject {pair.subject_id}",
                {'previous': prev, 'current': cur}
            )
        total.add(align_region(aligner, query_seq[q_from:q_to], subject_seq[s_from:s_to], scoring))

        if index == len(positions) - 1:
            break  # cur is the end anchor

        q_start, q_end, s_start, s_end = cur
        query_row = query_seq[q_start - 1:q_end]
        subject_row = subject_seq[s_start - 1:s_end]
        if len(query_row) != len(subject_row):
            raise SearchEngineError(
                f"Seed segment {cur} is not ungapped for query {pair.query_id} / subject {pair.subject_id}",
                {'segment': cur}
            )
        total.add(score_columns(query_row, subject_row, scoring))

    return AlignmentRecord(
        query_id=pair.query_id,
        subject_id=pair.subject_id,
        score=total.score,
        matches=total.matches,
        mismatches=total.mismatches,
        gap_columns=total.gaps,
        alignment_length=total.columns,
        query_length=len(query_seq),
        subject_length=len(subject_seq),
    )


def _align_worker(args) -> AlignmentRecord:
    return align_anchored(*args)


class KmerSearchEngine(SearchEngine):
    """In-process engine: k-mer index seeds plus anchored gap filling"""

    def __init__(self, scoring: Optional[Dict[str, float]] = None,
                 threads: int = 1, quiet: bool = True):
        super().__init__(quiet=quiet)
        self.scoring = {**DEFAULT_CONFIG['alignment'], **(scoring or {})}
        self.threads = threads

    def build_index(self, subjects: SequenceCollection, k: int) -> Dict[str, List[Hit]]:
        """Map every subject k-mer to its (subject_id, position) occurrences"""
        index = defaultdict(list)
        for ref in subjects:
            seq = ref.sequence.upper()
            for i in range(len(seq) - k + 1):
                index[seq[i:i + k]].append((ref.id, i + 1))
        return index

    def _find_seeds(self, queries: SequenceCollection,
                    subjects: SequenceCollection, k: int) -> List[SeedPair]:
        index = self.build_index(subjects, k)
        self.logger.debug(f"Indexed {len(index)} distinct {k}-mers from {len(subjects)} subjects")

        pairs = []
        for query in queries:
            seq = query.sequence.upper()
            hits = defaultdict(list)
            for i in range(len(seq) - k + 1):
                for subject_id, s_pos in index.get(seq[i:i + k], ()):
                    hits[subject_id].append((i + 1, s_pos))

            for subject_id in sorted(hits):
                chain = chain_segments(merge_hits(hits[subject_id], k))
                pairs.append(SeedPair(query.id, subject_id, tuple(chain)))

        self.logger.info(f"Seed search (k={k}): {len(pairs)} query/subject pairs")
        return pairs

    def _align(self, pairs: Sequence[AnchoredPair],
               queries: SequenceCollection,
               subjects: SequenceCollection) -> List[AlignmentRecord]:
        jobs = [
            (pair, queries.get(pair.query_id).sequence, subjects.get(pair.subject_id).sequence, self.scoring)
            for pair in pairs
        ]

        if self.threads > 1 and len(jobs) > 1:
            self.logger.debug(f"Aligning {len(jobs)} pairs with {self.threads} workers")
            with ProcessPoolExecutor(max_workers=self.threads) as executor:
                records = list(executor.map(_align_worker, jobs))
        else:
            records = [_align_worker(job) for job in jobs]

        self.logger.info(f"Aligned {len(records)} anchored pairs")
        return records
