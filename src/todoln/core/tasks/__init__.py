"""
Task list models, storage and persistence.

This module provides the Task model and display filters, the in-memory
TaskStore with its list operations, the JSONL TaskFile adapter that loads,
saves, backs up and restores the store, and the typed errors they raise.
"""

from .errors import (
    CorruptStoreError,
    IndexOutOfRangeError,
    InvalidInputError,
    StoreFileNotFoundError,
    StoreIOError,
    TodolnError,
)
from .indices import parse_index_spec, resolve_indices
from .jsonl import TaskFile
from .models import Task, TaskFilter
from .store import TaskStore, TaskView

__all__ = [
    # Models
    "Task",
    "TaskFilter",
    # Store and persistence
    "TaskStore",
    "TaskView",
    "TaskFile",
    "parse_index_spec",
    "resolve_indices",
    # Errors
    "TodolnError",
    "InvalidInputError",
    "IndexOutOfRangeError",
    "CorruptStoreError",
    "StoreFileNotFoundError",
    "StoreIOError",
]
