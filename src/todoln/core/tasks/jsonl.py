"""
JSONL task file (tasks.jsonl).

Reads and writes the task store as JSON Lines: one task object per line,
in list order. Writes are atomic so an interrupted save never leaves a
half-written file in place of a valid one. Backup and restore are built on
the same codec, so a backup is always a valid store file.

File format:
    {"description": "buy milk", "done": false}
    {"description": "walk dog", "done": true}
"""

import json
import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path

from pydantic import ValidationError

from .errors import CorruptStoreError, StoreFileNotFoundError, StoreIOError
from .models import Task
from .store import TaskStore

logger = logging.getLogger(__name__)

BACKUP_SUFFIX = ".jsonl"


def _describe_validation_error(error: ValidationError) -> str:
    first = error.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or "task"
    return f"invalid '{field}': {first.get('msg', 'validation failed')}"


def parse(text: str, source: Path | None = None) -> TaskStore:
    """
    Parse JSONL text into a task store.

    Blank lines are skipped. Any other line must be a JSON object with a
    non-blank string ``description`` and an optional boolean ``done``; the
    first bad line fails the whole parse.

    Args:
        text: File contents
        source: Path used in error messages

    Returns:
        TaskStore holding the parsed tasks in file order

    Raises:
        CorruptStoreError: If any line is not a valid task record
    """
    tasks: list[Task] = []
    # JSON strings may hold raw U+2028, U+2029 or U+0085; only "\n" ends a record
    for line_num, line in enumerate(text.split("\n"), start=1):
        line = line.strip()
        if not line:
            continue
        try:
            data = json.loads(line)
        except json.JSONDecodeError as e:
            raise CorruptStoreError(f"invalid JSON - {e}", source, line_num) from e
        if not isinstance(data, dict):
            type_name = type(data).__name__
            raise CorruptStoreError(f"expected JSON object, got {type_name}", source, line_num)
        try:
            tasks.append(Task.model_validate(data))
        except ValidationError as e:
            raise CorruptStoreError(_describe_validation_error(e), source, line_num) from e
    return TaskStore(tasks)


def serialize(store: TaskStore) -> str:
    """Render a store as JSONL text, one task per line, with a trailing newline."""
    lines = [
        json.dumps(task.model_dump(mode="json"), ensure_ascii=False) for task in store
    ]
    return "".join(f"{line}\n" for line in lines)


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise CorruptStoreError(f"not UTF-8 text - {e}", path) from e
    except OSError as e:
        raise StoreIOError(f"Failed to read {path}: {e}", path) from e


def _atomic_write(path: Path, text: str) -> None:
    """
    Write text to ``path`` atomically.

    Uses a temporary file in the same directory and an atomic rename, so
    readers see either the old contents or the new ones.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=".todoln_", suffix=".tmp")
    except OSError as e:
        raise StoreIOError(f"Failed to write {path}: {e}", path) from e

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())

        # Atomic rename (replaces existing file)
        os.replace(temp_path, path)
    except OSError as e:
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise StoreIOError(f"Failed to write {path}: {e}", path) from e


class TaskFile:
    """
    Persistence adapter for one task store file.

    The store path is fixed at construction; nothing here looks it up from
    global state.

    Example:
        >>> task_file = TaskFile(Path("~/.local/share/todoln/tasks.jsonl").expanduser())
        >>> store = task_file.load()
        >>> new = store.add("call mom")
        >>> task_file.save(store)
    """

    def __init__(
        self,
        store_path: Path,
        *,
        backup_prefix: str = "todoln_backup",
        timestamp_format: str = "%Y%m%d-%H%M%S",
    ):
        """
        Initialize the task file.

        Args:
            store_path: Location of the live store file
            backup_prefix: File name prefix for generated backup names
            timestamp_format: strftime format used in generated backup names
        """
        self.store_path = Path(store_path)
        self.backup_prefix = backup_prefix
        self.timestamp_format = timestamp_format

    def exists(self) -> bool:
        """Return True if the store file has been created."""
        return self.store_path.exists()

    def load(self) -> TaskStore:
        """
        Load the store file.

        Returns:
            The stored tasks; an empty store if the file does not exist yet

        Raises:
            CorruptStoreError: If the file is malformed
            StoreIOError: If the file cannot be read
        """
        if not self.store_path.exists():
            logger.debug("No store file at %s; starting empty", self.store_path)
            return TaskStore()

        store = parse(_read_text(self.store_path), self.store_path)
        logger.debug("Loaded %d task(s) from %s", len(store), self.store_path)
        return store

    def save(self, store: TaskStore) -> None:
        """
        Replace the store file with the given store.

        Raises:
            StoreIOError: If the file cannot be written; the previous file is
                left untouched
        """
        _atomic_write(self.store_path, serialize(store))
        logger.debug("Saved %d task(s) to %s", len(store), self.store_path)

    def _backup_path(self, directory: Path, now: datetime | None = None) -> Path:
        """Pick a timestamped backup name in ``directory`` that is not taken yet."""
        stamp = (now or datetime.now()).strftime(self.timestamp_format)
        stem = f"{self.backup_prefix}_{stamp}"
        candidate = directory / f"{stem}{BACKUP_SUFFIX}"
        counter = 1
        while candidate.exists():
            candidate = directory / f"{stem}_{counter}{BACKUP_SUFFIX}"
            counter += 1
        return candidate

    def backup(self, destination: Path | str | None = None, directory: Path | None = None) -> Path:
        """
        Copy the current persisted store to a new backup file.

        The live file is read and validated but never written.

        Args:
            destination: Explicit backup file name; relative names are placed
                in ``directory``
            directory: Where to write the backup (defaults to the current
                working directory)

        Returns:
            Path of the backup file written

        Raises:
            CorruptStoreError: If the live store is malformed
            StoreIOError: If the destination already exists or cannot be written
        """
        directory = Path(directory) if directory is not None else Path.cwd()

        if destination is None:
            target = self._backup_path(directory)
        else:
            target = Path(destination).expanduser()
            if not target.is_absolute():
                target = directory / target
            if target.exists():
                raise StoreIOError(f"Backup file already exists: {target}", target)

        if target.resolve() == self.store_path.resolve():
            raise StoreIOError(f"Backup cannot overwrite the live store: {target}", target)

        store = self.load()
        _atomic_write(target, serialize(store))
        logger.info("Backed up %d task(s) to %s", len(store), target)
        return target

    def restore(self, source: Path | str, directory: Path | None = None) -> TaskStore:
        """
        Replace the live store with the contents of a backup file.

        The backup is fully parsed and validated before the live file is
        touched; on any error the live store is unchanged.

        Args:
            source: Backup file; relative paths resolve against ``directory``
            directory: Base for relative paths (defaults to the current
                working directory)

        Returns:
            The restored store

        Raises:
            StoreFileNotFoundError: If the backup file does not exist
            CorruptStoreError: If the backup file is malformed
            StoreIOError: If either file cannot be read or written
        """
        path = Path(source).expanduser()
        if not path.is_absolute():
            path = (Path(directory) if directory is not None else Path.cwd()) / path

        if not path.is_file():
            raise StoreFileNotFoundError(path)

        store = parse(_read_text(path), path)
        self.save(store)
        logger.info("Restored %d task(s) from %s", len(store), path)
        return store

