#!/usr/bin/env python3
"""
Shared fixtures for pyPAMatch tests.

Builds small in-memory collections and alignment records so the core
stages can be exercised without any external engine.
"""
import pytest

from pamatch.core.context import ApplicationContext
from pamatch.engines.base import SearchEngine
from pamatch.models.alignment import AlignmentRecord, SeedPair
from pamatch.models.sequence import SequenceCollection


def make_record(query_id, subject_id, matches, alignment_length=20, score=None, **extra):
    """Alignment record with consistent column counts"""
    mismatches = extra.pop('mismatches', alignment_length - matches)
    return AlignmentRecord(
        query_id=query_id,
        subject_id=subject_id,
        score=float(matches if score is None else score),
        matches=matches,
        mismatches=mismatches,
        gap_columns=extra.pop('gap_columns', 0),
        alignment_length=alignment_length,
        query_length=extra.pop('query_length', alignment_length),
        subject_length=extra.pop('subject_length', alignment_length),
        **extra
    )


class StubEngine(SearchEngine):
    """Engine returning canned seed pairs and records

    Without explicit seeds, one empty seed pair per record is reported.
    """

    def __init__(self, seeds=None, records=None, quiet=True):
        super().__init__(quiet=quiet)
        self.records = list(records or [])
        if seeds is None:
            seeds = [SeedPair(r.query_id, r.subject_id, ()) for r in self.records]
        self.seeds = list(seeds)
        self.anchored = []

    def _find_seeds(self, queries, subjects, k):
        return list(self.seeds)

    def _align(self, pairs, queries, subjects):
        self.anchored = list(pairs)
        return list(self.records)


@pytest.fixture(autouse=True)
def reset_context():
    """Keep the application context singleton from leaking between tests"""
    ApplicationContext.reset()
    yield
    ApplicationContext.reset()


@pytest.fixture
def queries():
    return SequenceCollection.from_pairs('queries', [
        ('query_one hypothetical protein', 'ACGTACGTACGTACGTACGT'),
        ('query_two transporter', 'TTGACCATGGCATTGACCAA'),
    ])


@pytest.fixture
def subjects():
    """Five subjects from three genomes; G2 appears again after G3"""
    return SequenceCollection.from_pairs('subjects', [
        ('G1 A1 first subject', 'ACGTACGTACGTACGTACGT'),
        ('G1 A2 second subject', 'ACGTACGAACGTACGTACGT'),
        ('G2 B1 third subject', 'TTGACCATGGCATTGACCAA'),
        ('G3 C1 fourth subject', 'TTGACCATGGCATTGACCTT'),
        ('G2 B2 fifth subject', 'GGGGCCCCGGGGCCCCGGGG'),
    ])


@pytest.fixture
def scenario_records():
    """Four records with match_pid 0.6, 0.3, 0.45 and 0.8"""
    return [
        make_record(1, 1, 12),
        make_record(1, 2, 6),
        make_record(1, 3, 9),
        make_record(2, 4, 16),
    ]


@pytest.fixture
def scenario_seeds():
    return [
        SeedPair(1, 1, ((1, 4, 1, 4),)),
        SeedPair(1, 2, ((1, 4, 1, 4),)),
        SeedPair(1, 3, ((5, 8, 5, 8),)),
        SeedPair(2, 4, ((1, 4, 1, 4), (9, 12, 9, 12))),
    ]


@pytest.fixture
def stub_engine(scenario_seeds, scenario_records):
    return StubEngine(seeds=scenario_seeds, records=scenario_records)
