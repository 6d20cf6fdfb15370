#!/usr/bin/env python3
"""
Tests for the exception hierarchy and error handling helpers
"""
import logging

import pytest

from pamatch.error_handlers import (
    EXIT_INTERRUPTED, EXIT_PIPELINE_ERROR, EXIT_UNEXPECTED,
    describe_details, format_error, handle_exceptions, hint_for, log_exception
)
from pamatch.exceptions import (
    DegenerateAlignment, FileOperationError, MalformedLabel, NoQualifyingGroup,
    PAMatchError, PipelineError, SearchEngineError, ValidationError
)


class TestHierarchy:

    @pytest.mark.parametrize("cls", [DegenerateAlignment, MalformedLabel, NoQualifyingGroup, SearchEngineError])
    def test_pipeline_errors(self, cls):
        error = cls("boom", {'key': 'value'})
        assert isinstance(error, PipelineError)
        assert isinstance(error, PAMatchError)
        assert error.message == "boom"
        assert error.details == {'key': 'value'}

    def test_details_default_empty(self):
        assert ValidationError("bad").details == {}


class TestFormatError:

    def test_plain_pipeline_error(self):
        assert format_error(DegenerateAlignment("zero length")) == "DegenerateAlignment: zero length"

    def test_hint_and_details(self):
        error = MalformedLabel("cannot parse", {'label': 'x'})

        brief = format_error(error)
        assert brief.splitlines()[0] == "MalformedLabel: cannot parse"
        assert brief.splitlines()[1].startswith("Hint: Subject FASTA headers")
        assert "Details" not in brief

        assert "Details: label='x'" in format_error(error, verbose=True)

    def test_unexpected_error(self):
        assert format_error(RuntimeError("oops")) == "Unexpected Error: oops"

    def test_hint_lookup_follows_hierarchy(self):
        class MissingGenome(FileOperationError):
            pass

        assert hint_for(MissingGenome("gone")) == hint_for(FileOperationError("gone"))
        assert hint_for(NoQualifyingGroup("none")) is None

    def test_describe_details_sorted(self):
        assert describe_details({'b': 2, 'a': 'x'}) == "a='x', b=2"


class TestHandleExceptions:

    def test_passes_through_result(self):
        @handle_exceptions()
        def ok():
            return 0
        assert ok() == 0

    def test_known_error(self, capsys):
        @handle_exceptions()
        def fails():
            raise SearchEngineError("engine died")

        assert fails() == EXIT_PIPELINE_ERROR == 1
        assert "SearchEngineError: engine died" in capsys.readouterr().err

    def test_unexpected_error(self):
        @handle_exceptions()
        def crashes():
            raise RuntimeError("bug")
        assert crashes() == EXIT_UNEXPECTED == 2

    def test_keyboard_interrupt(self):
        @handle_exceptions()
        def interrupted():
            raise KeyboardInterrupt()
        assert interrupted() == EXIT_INTERRUPTED == 130

    def test_exit_on_error(self):
        @handle_exceptions(exit_on_error=True)
        def fails():
            raise ValidationError("bad")

        with pytest.raises(SystemExit) as info:
            fails()
        assert info.value.code == 1


class TestLogException:

    def test_details_attached(self, caplog):
        logger = logging.getLogger("pamatch.tests")
        error = NoQualifyingGroup("nothing qualifies", {'groups': 3})

        with caplog.at_level(logging.WARNING, logger="pamatch.tests"):
            log_exception(logger, error, level=logging.WARNING, context={'run': 'a'})

        record = caplog.records[0]
        assert record.levelno == logging.WARNING
        assert record.context == {'groups': 3, 'run': 'a'}
        assert not record.exc_info
        assert "NoQualifyingGroup: nothing qualifies (groups=3, run='a')" in caplog.text

    def test_unexpected_error_logged_with_traceback(self, caplog):
        logger = logging.getLogger("pamatch.tests")
        try:
            raise ValueError("broken")
        except ValueError as e:
            with caplog.at_level(logging.ERROR, logger="pamatch.tests"):
                log_exception(logger, e)

        assert caplog.records[0].exc_info
        assert "Unexpected error: broken" in caplog.text


class TestVerboseOutput:

    def test_details_printed_at_debug(self, caplog, capsys):
        caplog.set_level(logging.DEBUG)

        @handle_exceptions()
        def fails():
            raise MalformedLabel("cannot parse", {'label': 'x'})

        assert fails() == 1
        assert "Details: label='x'" in capsys.readouterr().err

    def test_details_hidden_otherwise(self, caplog, capsys):
        caplog.set_level(logging.INFO)

        @handle_exceptions()
        def fails():
            raise MalformedLabel("cannot parse", {'label': 'x'})

        assert fails() == 1
        assert "Details" not in capsys.readouterr().err

    def test_verbose_suggestion_only_when_quiet(self, caplog, capsys):
        @handle_exceptions()
        def crashes():
            raise RuntimeError("bug")

        caplog.set_level(logging.INFO)
        crashes()
        assert "Run with --verbose" in capsys.readouterr().err

        caplog.set_level(logging.DEBUG)
        crashes()
        err = capsys.readouterr().err
        assert "Run with --verbose" not in err
        assert "Unexpected Error (RuntimeError): bug" in err
