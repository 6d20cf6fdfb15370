#!/usr/bin/env python3
"""
Data models for the presence/absence pipeline
"""
from .sequence import SequenceRef, SequenceCollection, SubjectLabel
from .alignment import Segment, SeedPair, AnchoredPair, AlignmentRecord
from .results import (
    GroupStatus, QueryGroups, PresenceMatrix, QueryHitSummary,
    RepresentativeSample, PipelineResult
)
from .options import PipelineOptions

__all__ = [
    'SequenceRef', 'SequenceCollection', 'SubjectLabel',
    'Segment', 'SeedPair', 'AnchoredPair', 'AlignmentRecord',
    'GroupStatus', 'QueryGroups', 'PresenceMatrix', 'QueryHitSummary',
    'RepresentativeSample', 'PipelineResult',
    'PipelineOptions',
]
