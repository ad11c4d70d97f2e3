"""
Parsing and validation of 1-based task index selections.

Commands that act on several tasks accept any mix of plain integers and
index specs such as ``"3"``, ``"1,4"``, ``"2-5"`` or ``"1, 3-4"``. Every
index is checked against the current list length before anything is
mutated, so a batch either applies completely or not at all.

Ranges stay as ``(start, end)`` spans until they have been checked, so a
spec like ``"1-1000000000"`` fails at once instead of being expanded.
"""

import re
from collections.abc import Iterable
from typing import Union

from .errors import IndexOutOfRangeError, InvalidInputError

IndexSelection = Union[int, str, Iterable[Union[int, str]]]

Span = tuple[int, int]

_ITEM_RE = re.compile(r"^\s*(\d+)\s*(?:-\s*(\d+)\s*)?$")


def parse_index_spec(spec: str) -> list[Span]:
    """
    Parse a comma-separated index spec into inclusive 1-based spans.

    Args:
        spec: Spec string, e.g. "2", "1,4" or "2-5"

    Returns:
        ``(start, end)`` pairs in the order written; a single index is a
        span with ``start == end``

    Raises:
        InvalidInputError: If an item is not a number or an ascending range

    Example:
        >>> parse_index_spec("1, 3-5")
        [(1, 1), (3, 5)]
    """
    if not spec.strip():
        raise InvalidInputError("Empty task index")

    spans: list[Span] = []
    for item in spec.split(","):
        match = _ITEM_RE.match(item)
        if match is None:
            raise InvalidInputError(f"Invalid task index '{item.strip()}' in '{spec}'")
        start = int(match.group(1))
        end = int(match.group(2)) if match.group(2) is not None else start
        if end < start:
            raise InvalidInputError(f"Invalid range '{item.strip()}': start is after end")
        spans.append((start, end))
    return spans


def _flatten(selection: IndexSelection) -> list[Span]:
    if isinstance(selection, bool):
        raise InvalidInputError(f"Invalid task index: {selection!r}")
    if isinstance(selection, int):
        return [(selection, selection)]
    if isinstance(selection, str):
        return parse_index_spec(selection)

    spans: list[Span] = []
    for item in selection:
        spans.extend(_flatten(item))
    return spans


def _out_of_range(spans: list[Span], length: int) -> list[Span]:
    """Parts of ``spans`` outside [1, length], merged and sorted."""
    bad: list[Span] = []
    for start, end in spans:
        if start < 1:
            bad.append((start, min(end, 0)))
        if end > length:
            bad.append((max(start, length + 1), end))

    merged: list[Span] = []
    for start, end in sorted(bad):
        if merged and start <= merged[-1][1] + 1:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
        else:
            merged.append((start, end))
    return merged


def resolve_indices(selection: IndexSelection, length: int) -> list[int]:
    """
    Validate a selection against a list of ``length`` tasks.

    Args:
        selection: An index, an index spec, or an iterable of either
        length: Current number of tasks

    Returns:
        Sorted, de-duplicated 0-based positions

    Raises:
        InvalidInputError: If the selection is empty or malformed
        IndexOutOfRangeError: If any index is outside [1, length]; names
            every offending index or range
    """
    spans = _flatten(selection)
    if not spans:
        raise InvalidInputError("No task indices given")

    invalid = _out_of_range(spans, length)
    if invalid:
        raise IndexOutOfRangeError(invalid, length)

    positions: set[int] = set()
    for start, end in spans:
        positions.update(range(start - 1, end))
    return sorted(positions)
