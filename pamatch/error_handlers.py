#!/usr/bin/env python3
"""
Error reporting for the command line.

Maps pipeline exceptions to exit codes and short operator-facing messages;
the full traceback goes to the log only.
"""
import sys
import traceback
import logging
from functools import wraps
from typing import Callable, TypeVar, Any, Dict, Optional, Union

from .exceptions import (
    PAMatchError, ConfigurationError, FileOperationError, MalformedLabel,
    SearchEngineError
)

T = TypeVar('T')

EXIT_INTERRUPTED = 130
EXIT_PIPELINE_ERROR = 1
EXIT_UNEXPECTED = 2

# Shown under the message for errors an operator can usually fix from the input side
HINTS = {
    MalformedLabel: "Subject FASTA headers must start with '<genome_id> <accession>'.",
    ConfigurationError: "Check the configuration file, PAMATCH_* variables and command-line flags.",
    FileOperationError: "Check that the path exists and is readable/writable.",
    SearchEngineError: "The search engine aborted; no partial result was written.",
}


def hint_for(error: Exception) -> Optional[str]:
    for cls in type(error).__mro__:
        if cls in HINTS:
            return HINTS[cls]
    return None


def describe_details(details: Dict[str, Any]) -> str:
    """Render error details as sorted key=value pairs"""
    return ", ".join(f"{key}={details[key]!r}" for key in sorted(details))


def debug_enabled() -> bool:
    """True when the root logger is at DEBUG, which is what --verbose sets"""
    return logging.getLogger().isEnabledFor(logging.DEBUG)


def format_error(error: Exception, verbose: bool = False) -> str:
    """Format an error message for display

    Args:
        error: Exception object
        verbose: Include details (and a traceback for unexpected errors)

    Returns:
        Formatted error message
    """
    if not isinstance(error, PAMatchError):
        if verbose:
            return f"Unexpected Error ({error.__class__.__name__}): {error}\n{traceback.format_exc()}"
        return f"Unexpected Error: {error}"

    lines = [f"{error.__class__.__name__}: {error.message}"]
    if verbose and error.details:
        lines.append(f"Details: {describe_details(error.details)}")
    hint = hint_for(error)
    if hint:
        lines.append(f"Hint: {hint}")
    return "\n".join(lines)


def handle_exceptions(exit_on_error: bool = False) -> Callable[[Callable[..., T]], Callable[..., Union[T, int]]]:
    """Turn exceptions raised by a command into exit codes

    PAMatchError gives 1, anything else 2 and Ctrl-C 130. Error details
    are printed when the root logger is at DEBUG (--verbose).

    Args:
        exit_on_error: Call sys.exit with the code instead of returning it
    """
    def decorator(func: Callable[..., T]) -> Callable[..., Union[T, int]]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> Union[T, int]:
            logger = logging.getLogger(func.__module__)
            try:
                return func(*args, **kwargs)
            except KeyboardInterrupt:
                logger.info("Run cancelled by user")
                print("\nRun cancelled by user", file=sys.stderr)
                code = EXIT_INTERRUPTED
            except PAMatchError as e:
                log_exception(logger, e)
                print(format_error(e, verbose=debug_enabled()), file=sys.stderr)
                code = EXIT_PIPELINE_ERROR
            except Exception as e:
                logger.error(f"Unexpected error: {e}", exc_info=True)
                verbose = debug_enabled()
                print(format_error(e, verbose=verbose), file=sys.stderr)
                if not verbose:
                    print("See log for details. Run with --verbose for more information.", file=sys.stderr)
                code = EXIT_UNEXPECTED

            if exit_on_error:
                sys.exit(code)
            return code
        return wrapper
    return decorator


def log_exception(logger: logging.Logger,
                  error: Exception,
                  level: int = logging.ERROR,
                  context: Optional[Dict[str, Any]] = None) -> None:
    """Log an exception, attaching its details as the record's ``context``

    Tracebacks are only attached at ERROR and above.
    """
    ctx = dict(context or {})
    if isinstance(error, PAMatchError):
        ctx = {**error.details, **ctx}
        message = f"{error.__class__.__name__}: {error.message}"
    else:
        message = f"Unexpected error: {error}"

    if ctx:
        message = f"{message} ({describe_details(ctx)})"
    logger.log(level, message, extra={"context": ctx}, exc_info=level >= logging.ERROR)
