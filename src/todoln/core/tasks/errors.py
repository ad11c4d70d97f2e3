"""
Typed exceptions for the task store and its file.

Every failure a command can hit maps to exactly one of these classes, so the
CLI can pick a message and exit code without inspecting message text.
"""

from pathlib import Path


class TodolnError(Exception):
    """Base exception for all task list errors."""

    kind = "Error"


class InvalidInputError(TodolnError):
    """A description or index spec is empty or malformed."""

    kind = "InvalidInput"


class IndexOutOfRangeError(TodolnError):
    """One or more 1-based indices do not resolve within the list."""

    kind = "IndexOutOfRange"

    # Offending spans named in the message before the rest are summarised
    MAX_SHOWN = 5

    def __init__(
        self, spans: list[tuple[int, int]], length: int, *, upper: int | None = None
    ) -> None:
        self.spans = list(spans)
        self.length = length
        upper = length if upper is None else upper

        labels = [str(start) if start == end else f"{start}-{end}" for start, end in self.spans]
        shown = ", ".join(labels[: self.MAX_SHOWN])
        if len(labels) > self.MAX_SHOWN:
            shown = f"{shown} and {len(labels) - self.MAX_SHOWN} more"
        single = len(self.spans) == 1 and self.spans[0][0] == self.spans[0][1]
        noun = "index" if single else "indices"

        if upper < 1:
            detail = "the task list is empty"
        else:
            detail = f"valid range is 1-{upper}"
        super().__init__(f"Invalid {noun} {shown}: {detail}")


class CorruptStoreError(TodolnError):
    """A store or backup file exists but does not hold valid task records."""

    kind = "CorruptStore"

    def __init__(self, message: str, path: Path | None = None, line_num: int | None = None):
        self.path = path
        self.line_num = line_num
        location = str(path) if path is not None else "<input>"
        if line_num is not None:
            location = f"{location}, line {line_num}"
        super().__init__(f"{location}: {message}")


class StoreFileNotFoundError(TodolnError):
    """A file named for restore does not exist."""

    kind = "FileNotFound"

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"File not found: {path}")


class StoreIOError(TodolnError):
    """Reading or writing a task file failed at the OS level."""

    kind = "IOError"

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        super().__init__(message)
