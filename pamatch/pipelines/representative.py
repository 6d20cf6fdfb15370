#!/usr/bin/env python3
"""
Representative group selection and reproducible sub-sampling for display.
"""
import logging
from typing import Tuple

import numpy as np

from pamatch.exceptions import NoQualifyingGroup
from pamatch.models.results import QueryGroups, RepresentativeSample
from pamatch.models.sequence import SequenceCollection

logger = logging.getLogger(__name__)


def select_representative(groups: QueryGroups,
                          min_mean_pid: float = 0.5,
                          min_size: int = 10) -> int:
    """
    First query, in group order, whose retained records number at least
    min_size and average match_pid of at least min_mean_pid.

    Raises:
        NoQualifyingGroup: If no group satisfies both predicates
    """
    for query_id in groups:
        size = groups.size(query_id)
        if size >= min_size and groups.mean_match_pid(query_id) >= min_mean_pid:
            return query_id

    raise NoQualifyingGroup(
        f"No query group has >= {min_size} records with mean match_pid >= {min_mean_pid}",
        {'min_size': min_size, 'min_mean_pid': min_mean_pid, 'groups': len(groups)}
    )


def subsample_indices(group_size: int, sample_size: int, seed: int) -> Tuple[int, ...]:
    """
    Indices of members kept for display.

    Members are the query (index 0) followed by the group's group_size
    subjects. Groups of at most sample_size records are kept whole;
    larger groups keep member 0 plus sample_size - 1 subjects drawn
    without replacement from a generator seeded with seed. Indices come
    back in ascending order.
    """
    if group_size <= sample_size:
        return tuple(range(group_size + 1))

    rng = np.random.default_rng(seed)
    drawn = rng.choice(np.arange(1, group_size + 1), size=sample_size - 1, replace=False)
    return (0,) + tuple(sorted(int(i) for i in drawn))


class RepresentativeSelector:
    """Picks a qualifying query group and samples it for the alignment viewer"""

    def __init__(self, min_mean_pid: float = 0.5, min_size: int = 10,
                 sample_size: int = 10, seed: int = 42):
        self.min_mean_pid = min_mean_pid
        self.min_size = min_size
        self.sample_size = sample_size
        self.seed = seed

    def select(self, groups: QueryGroups,
               queries: SequenceCollection,
               subjects: SequenceCollection) -> RepresentativeSample:
        """
        Build the display sample for the first qualifying group.

        Members are the query followed by the group's subjects in record order.

        Raises:
            NoQualifyingGroup: Propagated from select_representative
        """
        query_id = select_representative(groups, self.min_mean_pid, self.min_size)
        records = groups[query_id]

        members = [queries.get(query_id)] + [subjects.get(r.subject_id) for r in records]
        indices = subsample_indices(len(records), self.sample_size, self.seed)

        sample = RepresentativeSample(
            query_id=query_id,
            group_size=len(records),
            mean_match_pid=groups.mean_match_pid(query_id),
            members=tuple(members[i] for i in indices),
            member_indices=indices,
            seed=self.seed,
        )
        logger.info(f"Representative query {query_id}: {len(indices)} of {len(members)} members "
                    f"(mean match_pid {sample.mean_match_pid:.3f})")
        return sample
