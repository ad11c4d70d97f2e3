"""
Task service: the load → operate → save cycle behind every command.

Wraps the in-memory TaskStore and the JSONL TaskFile into one call per
command, so any interface (CLI, scripts, tests) gets the same persistence
behaviour. Each method loads the store fresh and performs exactly one store
operation. Mutations always save, except `clear` when no task was done;
queries never save. A failed operation raises before anything is saved.

Usage:
    >>> from todoln.core.services.tasks import TaskService
    >>> service = TaskService.from_config(load_config())
    >>> service.add("buy milk")
    >>> for index, task in service.list("todo"):
    ...     print(index, task.description)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

from todoln.core.config.models import TodolnConfig
from todoln.core.tasks.indices import IndexSelection
from todoln.core.tasks.jsonl import TaskFile
from todoln.core.tasks.models import Task, TaskFilter
from todoln.core.tasks.store import TaskStore, TaskView

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TaskService:
    """
    Stateless orchestrator over a single task file.

    Nothing is cached between calls; the file is the only state.

    Example:
        >>> service = TaskService(TaskFile(Path("tasks.jsonl")))
        >>> service.add("buy milk", "walk dog")
        >>> service.mark_done("2")
        >>> service.sort()
    """

    def __init__(self, task_file: TaskFile) -> None:
        self.task_file = task_file

    @classmethod
    def from_config(cls, config: TodolnConfig, store_path: Path | None = None) -> TaskService:
        """
        Build a service from configuration.

        Args:
            config: Loaded configuration
            store_path: Explicit store path, overriding the configured one
        """
        path = store_path or config.store_path
        if path is None:
            raise ValueError("No task store path configured")
        return cls(
            TaskFile(
                Path(path).expanduser(),
                backup_prefix=config.backup.prefix,
                timestamp_format=config.backup.timestamp_format,
            )
        )

    @property
    def store_path(self) -> Path:
        return self.task_file.store_path

    def _mutate(self, name: str, operation: Callable[[TaskStore], T]) -> T:
        store = self.task_file.load()
        result = operation(store)
        self.task_file.save(store)
        logger.info("%s: %d task(s) now in %s", name, len(store), self.store_path)
        return result

    def load(self) -> TaskStore:
        """Load the current store without changing it."""
        return self.task_file.load()

    # ---- mutations ----

    def add(self, *descriptions: str) -> list[Task]:
        return self._mutate("add", lambda store: store.add(*descriptions))

    def insert(self, index: int, *descriptions: str) -> list[Task]:
        return self._mutate("insert", lambda store: store.insert(index, *descriptions))

    def modify(self, index: int, description: str) -> Task:
        return self._mutate("modify", lambda store: store.modify(index, description))

    def mark_done(self, selection: IndexSelection) -> list[Task]:
        return self._mutate("done", lambda store: store.mark_done(selection))

    def remove(self, selection: IndexSelection) -> list[Task]:
        return self._mutate("remove", lambda store: store.remove(selection))

    def sort(self) -> None:
        self._mutate("sort", lambda store: store.sort())

    def clear(self) -> list[Task]:
        """Remove done tasks; the file is only rewritten if something was removed."""
        store = self.task_file.load()
        cleared = store.clear()
        if cleared:
            self.task_file.save(store)
            logger.info("clear: removed %d done task(s)", len(cleared))
        return cleared

    def reset(self) -> int:
        return self._mutate("reset", lambda store: store.reset())

    # ---- queries ----

    def list(self, show: TaskFilter | str = TaskFilter.ALL) -> TaskView:
        return self.task_file.load().list(show)

    def raw(self, show: TaskFilter | str = TaskFilter.ALL) -> TaskView:
        return self.task_file.load().raw(show)

    def find(self, term: str) -> list[tuple[int, Task]]:
        return self.task_file.load().find(term)

    # ---- backup / restore ----

    def backup(self, destination: Path | str | None = None, directory: Path | None = None) -> Path:
        """Write a backup of the persisted store; see TaskFile.backup."""
        return self.task_file.backup(destination, directory)

    def restore(self, source: Path | str, directory: Path | None = None) -> TaskStore:
        """Replace the live store with a validated backup; see TaskFile.restore."""
        return self.task_file.restore(source, directory)
