#!/usr/bin/env python3
"""
Anchor injection.

Brackets the seed segments of a pair with a zero-width anchor before the
first residue of both sequences and another one past the last residue, so
the aligner fills every gap between anchors and produces an end-to-end
alignment instead of a local fragment.
"""
import logging
from typing import List, Sequence

from pamatch.models.alignment import AnchoredPair, SeedPair, Segment
from pamatch.models.sequence import SequenceCollection

logger = logging.getLogger(__name__)

START_ANCHOR: Segment = (0, 0, 0, 0)


def end_anchor(query_length: int, subject_length: int) -> Segment:
    """Anchor sitting one past the end of both sequences"""
    return (query_length + 1, query_length + 1, subject_length + 1, subject_length + 1)


def inject_anchors(pair: SeedPair, query_length: int, subject_length: int) -> AnchoredPair:
    """Return the pair with start and end anchors around its segments.

    Segment order between the anchors is kept as is; monotonicity is the
    search engine's responsibility.
    """
    positions = (START_ANCHOR,) + tuple(pair.positions) + (end_anchor(query_length, subject_length),)
    return AnchoredPair(
        query_id=pair.query_id,
        subject_id=pair.subject_id,
        positions=positions,
        query_length=query_length,
        subject_length=subject_length,
    )


def anchor_pairs(pairs: Sequence[SeedPair],
                 queries: SequenceCollection,
                 subjects: SequenceCollection) -> List[AnchoredPair]:
    """Anchor every pair using the lengths recorded in the collections"""
    anchored = [
        inject_anchors(pair, queries.length_of(pair.query_id), subjects.length_of(pair.subject_id))
        for pair in pairs
    ]
    logger.debug(f"Anchored {len(anchored)} seed pairs")
    return anchored
