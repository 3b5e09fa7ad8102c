"""
Error types and error handling helpers for turnscope.

Parsing free text and computing analytics never raise; the error types here
cover the few hard failures (an unrecognized annotation table, an input file
the loader cannot dispatch) plus the categorisation the CLI uses to turn an
exception into a user-facing message.
"""

import sys
from contextlib import contextmanager
from enum import Enum

import typer

from turnscope.core.utils.logger import log_error


class TurnscopeError(Exception):
    """Base class for turnscope errors surfaced to callers."""


class CodeFileFormatError(TurnscopeError):
    """Raised when an annotation table matches no known code-file layout."""

    def __init__(self, message: str = "Unrecognized code file format", fields=None):
        self.fields = list(fields or [])
        if self.fields:
            message = f"{message} (columns: {', '.join(self.fields)})"
        super().__init__(message)


class TranscriptFormatError(TurnscopeError):
    """Raised when an input file cannot be interpreted as a transcript."""


class ErrorCategory(Enum):
    """Error categories for better organization."""

    VALIDATION = "VALIDATION"
    FORMAT = "FORMAT"
    PROCESSING = "PROCESSING"
    RESOURCE = "RESOURCE"
    SECURITY = "SECURITY"
    UNKNOWN = "UNKNOWN"


def categorize_error(error: Exception) -> ErrorCategory:
    """
    Categorize an exception into an ErrorCategory.

    Args:
        error: The exception to categorize

    Returns:
        The appropriate ErrorCategory for the exception
    """
    if isinstance(error, TurnscopeError):
        return ErrorCategory.FORMAT

    # PermissionError is an OSError, so it is checked first
    if isinstance(error, PermissionError):
        return ErrorCategory.SECURITY

    if isinstance(error, (FileNotFoundError, IsADirectoryError, OSError, MemoryError)):
        return ErrorCategory.RESOURCE

    if isinstance(error, (ValueError, TypeError, KeyError)):
        return ErrorCategory.VALIDATION

    if isinstance(error, (RuntimeError, NotImplementedError)):
        return ErrorCategory.PROCESSING

    return ErrorCategory.UNKNOWN


def get_user_friendly_message(error: Exception, category: ErrorCategory) -> str:
    """
    Build a message suitable for printing to an end user.

    Args:
        error: The exception that occurred
        category: Category returned by categorize_error()
    """
    if category == ErrorCategory.FORMAT:
        return f"Could not read input: {error}"
    if category == ErrorCategory.SECURITY:
        return f"Permission denied: {error}"
    if category == ErrorCategory.RESOURCE:
        if isinstance(error, FileNotFoundError):
            return f"File not found: {error.filename or error}"
        return f"File system error: {error}"
    if category == ErrorCategory.VALIDATION:
        return f"Invalid input: {error}"
    if category == ErrorCategory.PROCESSING:
        return f"Processing failed: {error}"
    return f"Unexpected error: {error}"


@contextmanager
def graceful_exit(module: str = "cli"):
    """
    Context manager that turns errors into a logged message and exit code 1.

    typer.Exit (and CliExit, which extends it) passes through untouched so
    commands can choose their own exit codes.
    """
    try:
        yield
    except KeyboardInterrupt:
        print("\nOperation interrupted by user.", file=sys.stderr)
        raise typer.Exit(130)
    except typer.Exit:
        raise
    except Exception as e:
        category = categorize_error(e)
        message = get_user_friendly_message(e, category)
        log_error(module, message, context=category.value)
        print(message, file=sys.stderr)
        raise typer.Exit(1) from e
