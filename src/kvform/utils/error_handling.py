"""
Error types and error reporting helpers for kvform.

The planner and reader never raise for well-formed input: missing data
degrades to empty strings or verbatim values. Errors surface at the edges:
- decoding schema descriptors (SchemaDefinitionError)
- coercing raw form input (FormInputError)
- applying a plan to a store (StoreConflictError)
"""

import sys
from collections.abc import Iterable
from contextlib import contextmanager
from enum import Enum

import typer

from kvform.cli.exit_codes import EXIT_USER_CANCEL
from kvform.core.utils.logger import log_error


class ErrorCategory(Enum):
    """Error categories for better organization."""

    VALIDATION = "VALIDATION"
    CONFLICT = "CONFLICT"
    RESOURCE = "RESOURCE"
    UNKNOWN = "UNKNOWN"


class KvformError(Exception):
    """Base class for kvform errors."""

    category = ErrorCategory.UNKNOWN


class SchemaDefinitionError(KvformError):
    """A schema descriptor could not be decoded."""

    category = ErrorCategory.VALIDATION

    def __init__(self, where: str, message: str):
        self.where = where
        self.message = message
        super().__init__(f"{where}: {message}")


class FormInputError(KvformError):
    """Raw form input could not be converted to an edited value."""

    category = ErrorCategory.VALIDATION

    def __init__(self, field_id: str, message: str):
        self.field_id = field_id
        self.message = message
        super().__init__(f"{field_id}: {message}")


class StoreConflictError(KvformError):
    """An insert asked for empty targets but some keys already exist."""

    category = ErrorCategory.CONFLICT

    def __init__(self, keys: Iterable[str]):
        self.keys = sorted(keys)
        super().__init__(f"Keys already exist: {', '.join(self.keys)}")


def categorize_error(error: Exception) -> ErrorCategory:
    """
    Categorize an exception into an ErrorCategory.

    Args:
        error: The exception to categorize

    Returns:
        The appropriate ErrorCategory for the exception
    """
    if isinstance(error, KvformError):
        return error.category
    if isinstance(error, (ValueError, TypeError, KeyError)):
        return ErrorCategory.VALIDATION
    if isinstance(error, OSError):
        return ErrorCategory.RESOURCE
    return ErrorCategory.UNKNOWN


def get_user_friendly_message(error: Exception, category: ErrorCategory) -> str:
    """
    Generate a user-friendly error message from an exception.

    Args:
        error: The exception that occurred
        category: The error category

    Returns:
        A user-friendly error message
    """
    error_message = str(error)

    category_messages = {
        ErrorCategory.VALIDATION: "Invalid input provided",
        ErrorCategory.CONFLICT: "The entry already exists",
        ErrorCategory.RESOURCE: "Could not access a required file",
        ErrorCategory.UNKNOWN: "An unexpected error occurred",
    }

    base_message = category_messages.get(category, "An error occurred")

    if (
        error_message
        and len(error_message) < 200
        and not any(
            tech_term in error_message.lower()
            for tech_term in ["traceback", "exception", "error at", "line"]
        )
    ):
        return f"{base_message}: {error_message}"

    return base_message


@contextmanager
def graceful_exit():
    """
    Context manager for graceful exit handling in CLI commands.

    typer.Exit (and CliExit, which extends it) passes through untouched.
    """
    try:
        yield
    except KeyboardInterrupt:
        typer.echo("\nOperation interrupted by user.", err=True)
        sys.exit(EXIT_USER_CANCEL)
    except typer.Exit:
        raise
    except Exception as e:
        log_error("cli", "Unexpected error", exception=e)
        raise
