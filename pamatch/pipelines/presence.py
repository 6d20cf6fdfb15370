#!/usr/bin/env python3
"""
Presence/absence aggregation across subject genomes.

Columns are fixed from the full subject collection (not only from hits), so
runs at different thresholds produce comparable matrices. Counting is a
single pass over the retained records keyed by (query_id, genome_id).
"""
import logging
from collections import Counter
from typing import Dict, List, Tuple

import numpy as np
import pandas as pd

from pamatch.exceptions import ValidationError
from pamatch.models.results import PresenceMatrix, QueryGroups
from pamatch.models.sequence import SequenceCollection, SubjectLabel


def breadth_order(counts: np.ndarray) -> Tuple[int, ...]:
    """Row indices sorted ascending by number of non-zero columns, ties by position"""
    counts = np.asarray(counts)
    if counts.shape[0] == 0:
        return ()
    breadth = (counts > 0).sum(axis=1)
    return tuple(int(i) for i in np.argsort(breadth, kind='stable'))


class PresenceAggregator:
    """
    Builds the query x genome hit-count matrix.

    Subject labels are parsed once on construction; a label that does not
    split into genome id and accession aborts with MalformedLabel.
    """

    def __init__(self, subjects: SequenceCollection):
        self.logger = logging.getLogger("pamatch.pipelines.presence")
        self.subjects = subjects
        self.labels: Dict[int, SubjectLabel] = subjects.subject_labels()

        # dict preserves first-occurrence order of genome ids
        self.genome_ids: List[str] = list(dict.fromkeys(
            self.labels[ref.id].genome_id for ref in subjects
        ))
        self.logger.debug(f"{len(self.genome_ids)} genome columns from {len(subjects)} subjects")

    def genome_of(self, subject_id: int) -> str:
        try:
            return self.labels[subject_id].genome_id
        except KeyError:
            raise ValidationError(f"Record refers to unknown subject id {subject_id}",
                                  {'subject_id': subject_id}) from None

    def tabulate(self, groups: QueryGroups) -> Counter:
        """Count retained records per (query_id, genome_id)"""
        tally = Counter()
        for query_id, records in groups.items():
            for record in records:
                tally[(query_id, self.genome_of(record.subject_id))] += 1
        return tally

    def aggregate(self, groups: QueryGroups) -> PresenceMatrix:
        """
        Materialize the dense matrix, drop empty rows and compute row order.

        Args:
            groups: Filtered query groups

        Returns:
            PresenceMatrix with rows in grouping order and a breadth row order
        """
        tally = self.tabulate(groups)

        row_ids = list(groups.query_ids)
        row_index = {q: i for i, q in enumerate(row_ids)}
        col_index = {g: j for j, g in enumerate(self.genome_ids)}

        dense = np.zeros((len(row_ids), len(self.genome_ids)), dtype=np.int64)
        for (query_id, genome_id), count in tally.items():
            dense[row_index[query_id], col_index[genome_id]] = count

        keep = dense.sum(axis=1) > 0
        kept_ids = [q for q, k in zip(row_ids, keep) if k]
        dense = dense[keep]

        counts = pd.DataFrame(
            dense,
            index=pd.Index(kept_ids, name='query_id', dtype='int64'),
            columns=pd.Index(self.genome_ids, name='genome_id', dtype='object'),
        )
        matrix = PresenceMatrix(counts=counts, row_order=breadth_order(dense))

        self.logger.info(f"Presence matrix: {counts.shape[0]} queries x {counts.shape[1]} genomes "
                         f"({len(row_ids) - counts.shape[0]} empty rows dropped)")
        return matrix
