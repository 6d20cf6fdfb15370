#!/usr/bin/env python3
"""
Pipeline stages: anchoring, normalization, grouping, aggregation,
representative selection, and the orchestrator tying them together.
"""
from .anchoring import inject_anchors, anchor_pairs, START_ANCHOR, end_anchor
from .normalization import normalize_alignment, normalize_records, drop_degenerate
from .grouping import group_by_query, summarize_groups
from .presence import PresenceAggregator, breadth_order
from .representative import RepresentativeSelector, select_representative, subsample_indices
from .orchestrator import PresenceAbsencePipeline

__all__ = [
    'inject_anchors', 'anchor_pairs', 'START_ANCHOR', 'end_anchor',
    'normalize_alignment', 'normalize_records', 'drop_degenerate',
    'group_by_query', 'summarize_groups',
    'PresenceAggregator', 'breadth_order',
    'RepresentativeSelector', 'select_representative', 'subsample_indices',
    'PresenceAbsencePipeline',
]
