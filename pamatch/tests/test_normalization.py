#!/usr/bin/env python3
"""
Tests for identity normalization
"""
import pytest

from pamatch.exceptions import DegenerateAlignment, PipelineError
from pamatch.pipelines.normalization import drop_degenerate, normalize_alignment, normalize_records

from .conftest import make_record


class TestNormalizeAlignment:

    def test_identity_fields(self):
        record = normalize_alignment(make_record(1, 2, matches=15, alignment_length=20, score=10))

        assert record.match_pid == pytest.approx(0.75)
        assert record.score_pid == pytest.approx(0.5)
        assert record.is_normalized

    @pytest.mark.parametrize("matches,length", [(0, 1), (1, 1), (7, 9), (33, 100), (100, 100)])
    def test_match_pid_bounds(self, matches, length):
        record = normalize_alignment(make_record(1, 1, matches=matches, alignment_length=length))
        assert 0.0 <= record.match_pid <= 1.0

    def test_score_pid_may_exceed_one(self):
        """Weighted scores are not bounded by alignment length"""
        record = normalize_alignment(make_record(1, 1, matches=10, alignment_length=10, score=50))
        assert record.score_pid == pytest.approx(5.0)
        assert record.match_pid == pytest.approx(1.0)

    def test_zero_length_rejected(self):
        with pytest.raises(DegenerateAlignment) as exc_info:
            normalize_alignment(make_record(4, 9, matches=0, alignment_length=0))

        assert isinstance(exc_info.value, PipelineError)
        assert exc_info.value.details == {'query_id': 4, 'subject_id': 9}

    def test_original_record_unchanged(self):
        raw = make_record(1, 1, matches=5, alignment_length=10)
        normalize_alignment(raw)
        assert raw.match_pid is None
        assert raw.score_pid is None


def test_normalize_records_keeps_order():
    records = [make_record(2, 1, 5), make_record(1, 1, 10)]
    normalized = normalize_records(records)
    assert [(r.query_id, r.match_pid) for r in normalized] == [(2, 0.25), (1, 0.5)]


def test_drop_degenerate():
    records = [make_record(1, 1, 5), make_record(1, 2, 0, alignment_length=0), make_record(2, 1, 3)]
    kept, dropped = drop_degenerate(records)

    assert dropped == 1
    assert [(r.query_id, r.subject_id) for r in kept] == [(1, 1), (2, 1)]
