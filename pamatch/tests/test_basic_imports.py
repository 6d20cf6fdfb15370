#!/usr/bin/env python3
"""
Basic import and functionality tests.

Quick smoke tests that the package wires together.
"""


def test_package_imports():
    """Top-level exports resolve"""
    import pamatch
    from pamatch import PAMatchError, handle_exceptions

    assert pamatch.__version__
    assert issubclass(PAMatchError, Exception)
    assert callable(handle_exceptions)


def test_model_imports():
    """Record models import and normalize"""
    from pamatch.models import AlignmentRecord
    from pamatch.pipelines import normalize_alignment

    record = AlignmentRecord(query_id=1, subject_id=2, score=8.0, matches=9, mismatches=1,
                             gap_columns=0, alignment_length=10, query_length=10, subject_length=12)
    assert not record.is_normalized
    assert normalize_alignment(record).match_pid == 0.9


def test_pipeline_imports():
    """Pipeline stages and default engine construct"""
    from pamatch.engines.kmer import KmerSearchEngine
    from pamatch.pipelines import PresenceAbsencePipeline

    pipeline = PresenceAbsencePipeline()
    assert isinstance(pipeline.engine, KmerSearchEngine)
    assert pipeline.options.k == 5


def test_cli_imports():
    """CLI parser builds"""
    from pamatch.cli.main import build_parser

    assert build_parser().parse_args([]).command is None
