#!/usr/bin/env python3
"""
Threshold filtering and grouping of normalized records by query.
"""
import logging
from typing import Dict, Iterable, List, Mapping, Optional

from pamatch.exceptions import ValidationError
from pamatch.models.alignment import AlignmentRecord
from pamatch.models.results import QueryGroups, QueryHitSummary
from pamatch.models.sequence import SubjectLabel

logger = logging.getLogger(__name__)


def group_by_query(records: Iterable[AlignmentRecord],
                   threshold: float,
                   query_ids: Optional[Iterable[int]] = None) -> QueryGroups:
    """
    Partition records by query id, keeping those with match_pid >= threshold.

    Args:
        records: Normalized records, in engine output order
        threshold: Minimum match_pid retained
        query_ids: Queries that must get a key even without any record;
            they are appended after the keys seen in the records

    Returns:
        QueryGroups keyed in first-appearance order
    """
    kept: Dict[int, List[AlignmentRecord]] = {}
    totals: Dict[int, int] = {}

    for record in records:
        if record.match_pid is None:
            raise ValidationError(
                f"Record for query {record.query_id} / subject {record.subject_id} is not normalized")
        bucket = kept.setdefault(record.query_id, [])
        totals[record.query_id] = totals.get(record.query_id, 0) + 1
        if record.match_pid >= threshold:
            bucket.append(record)

    for query_id in query_ids or ():
        if query_id not in kept:
            kept[query_id] = []
            totals[query_id] = 0

    groups = QueryGroups(
        threshold=threshold,
        groups={q: tuple(bucket) for q, bucket in kept.items()},
        total_counts=totals,
    )
    logger.info(f"Grouped {groups.total_count} records into {len(groups)} queries; "
                f"{groups.retained_count} pass match_pid >= {threshold}")
    return groups


def summarize_groups(groups: QueryGroups,
                     labels: Mapping[int, SubjectLabel]) -> Dict[int, List[QueryHitSummary]]:
    """Reduce each retained record to accession, genome and identity scores"""
    summaries = {}
    for query_id, records in groups.items():
        summaries[query_id] = [
            QueryHitSummary(
                query_id=query_id,
                subject_id=record.subject_id,
                accession=labels[record.subject_id].accession,
                genome_id=labels[record.subject_id].genome_id,
                score_pid=record.score_pid,
                match_pid=record.match_pid,
            )
            for record in records
        ]
    return summaries
