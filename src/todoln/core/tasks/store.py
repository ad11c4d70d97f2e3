"""
In-memory task store.

The store is an ordered list of tasks plus every operation a command can
perform on it. It never reads or writes files; persistence is a separate
step (see ``todoln.core.tasks.jsonl``) taken only after an operation
succeeds.

All index arguments are 1-based, matching the numbers shown to the user.
Every operation validates its whole input before touching the list.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from pydantic import ValidationError

from .errors import IndexOutOfRangeError, InvalidInputError
from .indices import IndexSelection, resolve_indices
from .models import Task, TaskFilter

logger = logging.getLogger(__name__)


def _new_tasks(descriptions: Iterable[str]) -> list[Task]:
    """Build tasks for a batch, rejecting the whole batch on any blank entry."""
    tasks: list[Task] = []
    for description in descriptions:
        try:
            tasks.append(Task(description=description))
        except ValidationError:
            raise InvalidInputError("Task description cannot be empty or whitespace-only") from None
    if not tasks:
        raise InvalidInputError("No task description given")
    return tasks


def _parse_filter(show: TaskFilter | str) -> TaskFilter:
    try:
        return TaskFilter.parse(show)
    except ValueError as e:
        raise InvalidInputError(str(e)) from None


class TaskView:
    """
    Read-only, restartable view over a store's tasks.

    Iterating walks the live list each time, so the view reflects the store
    as it is when iteration starts. With ``numbered=True`` it yields
    ``(index, task)`` pairs carrying each task's 1-based store position,
    which stays correct when a filter hides some tasks.
    """

    def __init__(self, tasks: list[Task], show: TaskFilter = TaskFilter.ALL, numbered: bool = True):
        self._tasks = tasks
        self.show = show
        self.numbered = numbered

    def __iter__(self) -> Iterator:
        for index, task in enumerate(self._tasks, start=1):
            if not self.show.matches(task):
                continue
            yield (index, task) if self.numbered else task

    def __len__(self) -> int:
        return sum(1 for task in self._tasks if self.show.matches(task))

    def __bool__(self) -> bool:
        return any(self.show.matches(task) for task in self._tasks)


class TaskStore:
    """
    Ordered collection of tasks.

    Example:
        >>> store = TaskStore()
        >>> _ = store.add("buy milk", "walk dog")
        >>> _ = store.mark_done(2)
        >>> store.sort()
        >>> [t.description for t in store]
        ['buy milk', 'walk dog']
    """

    def __init__(self, tasks: Iterable[Task] | None = None):
        self._tasks: list[Task] = list(tasks or [])

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TaskStore):
            return NotImplemented
        return self._tasks == other._tasks

    def __repr__(self) -> str:
        return f"TaskStore({self._tasks!r})"

    def get(self, index: int) -> Task:
        """Return the task at a 1-based index."""
        return self._tasks[self._position(index)]

    def _position(self, index: int, *, allow_end: bool = False) -> int:
        upper = len(self._tasks) + 1 if allow_end else len(self._tasks)
        if isinstance(index, bool) or not isinstance(index, int) or not 1 <= index <= upper:
            raise IndexOutOfRangeError([(index, index)], len(self._tasks), upper=upper)
        return index - 1

    # ---- mutations ----

    def add(self, *descriptions: str) -> list[Task]:
        """
        Append new tasks to the end of the list.

        Raises:
            InvalidInputError: If no description is given or any is blank
        """
        new = _new_tasks(descriptions)
        self._tasks.extend(new)
        logger.debug("Added %d task(s); total=%d", len(new), len(self._tasks))
        return new

    def insert(self, index: int, *descriptions: str) -> list[Task]:
        """
        Insert new tasks starting at ``index``, shifting later tasks down.

        ``index`` may be one past the last task, which appends.

        Raises:
            IndexOutOfRangeError: If index is outside [1, len + 1]
            InvalidInputError: If no description is given or any is blank
        """
        position = self._position(index, allow_end=True)
        new = _new_tasks(descriptions)
        self._tasks[position:position] = new
        logger.debug("Inserted %d task(s) at %d", len(new), index)
        return new

    def modify(self, index: int, description: str) -> Task:
        """
        Replace a task's description, keeping its position and done state.

        Raises:
            IndexOutOfRangeError: If index is invalid
            InvalidInputError: If the new description is blank
        """
        position = self._position(index)
        (replacement,) = _new_tasks([description])
        task = self._tasks[position]
        task.description = replacement.description
        logger.debug("Modified task %d", index)
        return task

    def mark_done(self, selection: IndexSelection) -> list[Task]:
        """
        Mark the selected tasks as done.

        All indices are checked first; one bad index rejects the call.

        Returns:
            The selected tasks, in store order
        """
        positions = resolve_indices(selection, len(self._tasks))
        marked = [self._tasks[p] for p in positions]
        for task in marked:
            task.mark_done()
        logger.debug("Marked done: %s", [p + 1 for p in positions])
        return marked

    def remove(self, selection: IndexSelection) -> list[Task]:
        """
        Remove the selected tasks.

        Indices refer to positions before the call; removing ``"2,4"`` from a
        five-task list drops the tasks originally at 2 and 4.

        Returns:
            The removed tasks, in their original order
        """
        positions = resolve_indices(selection, len(self._tasks))
        removed = [self._tasks[p] for p in positions]
        for position in reversed(positions):
            del self._tasks[position]
        logger.debug("Removed: %s", [p + 1 for p in positions])
        return removed

    def sort(self) -> None:
        """Move done tasks after todo tasks, keeping order within each group."""
        todo = [t for t in self._tasks if not t.done]
        done = [t for t in self._tasks if t.done]
        self._tasks[:] = todo + done

    def clear(self) -> list[Task]:
        """Remove every done task and return them."""
        cleared = [t for t in self._tasks if t.done]
        self._tasks[:] = [t for t in self._tasks if not t.done]
        logger.debug("Cleared %d done task(s)", len(cleared))
        return cleared

    def reset(self) -> int:
        """Remove all tasks; returns how many there were."""
        count = len(self._tasks)
        self._tasks.clear()
        return count

    # ---- queries ----

    def list(self, show: TaskFilter | str = TaskFilter.ALL) -> TaskView:
        """Numbered view of the tasks, optionally filtered by done state."""
        return TaskView(self._tasks, _parse_filter(show), numbered=True)

    def raw(self, show: TaskFilter | str = TaskFilter.ALL) -> TaskView:
        """Plain view yielding bare tasks in store order."""
        return TaskView(self._tasks, _parse_filter(show), numbered=False)

    def find(self, term: str) -> list[tuple[int, Task]]:
        """
        Find tasks whose description contains ``term``, ignoring case.

        An empty term is a substring of every description and matches all
        tasks.

        Returns:
            ``(index, task)`` pairs in store order; empty if nothing matches
        """
        return [(i, t) for i, t in enumerate(self._tasks, start=1) if t.matches(term)]
