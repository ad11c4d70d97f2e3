"""
Standardized error handling and exit codes for the todoln CLI.

This module maps the core error kinds to user-readable messages with
actionable guidance and to standardized exit codes.
"""

from enum import IntEnum

from rich.console import Console
from rich.markup import escape

from todoln.core.tasks.errors import (
    CorruptStoreError,
    IndexOutOfRangeError,
    InvalidInputError,
    StoreFileNotFoundError,
    StoreIOError,
    TodolnError,
)

console = Console()


class ExitCode(IntEnum):
    """Standard exit codes for todoln operations."""

    SUCCESS = 0
    """Operation completed successfully."""

    GENERAL_ERROR = 1
    """Generic error, including failed file reads and writes."""

    USER_ERROR = 2
    """Bad input from the user: blank text, bad index, missing file."""

    CORRUPT_STORE = 3
    """A task or backup file could not be parsed."""


def print_error(
    problem: str,
    *,
    reason: str | None = None,
    solution: str | None = None,
) -> None:
    """
    Print a standardized error message with actionable guidance.

    Args:
        problem: Brief description of what went wrong
        reason: Optional explanation of why it happened
        solution: Optional command or action to fix it

    Example:
        >>> print_error(
        ...     "Invalid index 7: valid range is 1-3",
        ...     solution="todoln list  # to see task numbers",
        ... )
    """
    console.print(f"[red]Error:[/red] {escape(problem)}")

    if reason:
        console.print(f"[dim]{escape(reason)}[/dim]")

    if solution:
        console.print(f"[cyan]→ Try:[/cyan] {escape(solution)}")


def exit_code_for(error: TodolnError) -> ExitCode:
    """Pick the exit code for a core error."""
    if isinstance(error, CorruptStoreError):
        return ExitCode.CORRUPT_STORE
    if isinstance(error, (InvalidInputError, IndexOutOfRangeError, StoreFileNotFoundError)):
        return ExitCode.USER_ERROR
    return ExitCode.GENERAL_ERROR


def print_task_error(error: TodolnError) -> None:
    """Print a core error with guidance matched to its kind."""
    if isinstance(error, IndexOutOfRangeError):
        print_error(str(error), solution="todoln list  # to see task numbers")
    elif isinstance(error, InvalidInputError):
        print_error(str(error))
    elif isinstance(error, CorruptStoreError):
        print_error(
            "Task file is corrupt",
            reason=str(error),
            solution="todoln restore <backup-file>  # or fix the file by hand",
        )
    elif isinstance(error, StoreFileNotFoundError):
        print_error(
            str(error),
            reason="Relative paths are resolved against the current directory",
        )
    elif isinstance(error, StoreIOError):
        print_error(str(error), reason="Check file permissions and free disk space")
    else:
        print_error(str(error))


def print_invalid_option_error(option: str, valid_options: list[str]) -> None:
    """Print error when an invalid option value is provided."""
    valid_str = ", ".join(valid_options)
    print_error(
        f"Invalid option: {option}",
        reason=f"Valid options are: {valid_str}",
        solution=f"Use one of: {valid_str}",
    )


__all__ = [
    "ExitCode",
    "exit_code_for",
    "print_error",
    "print_invalid_option_error",
    "print_task_error",
]
