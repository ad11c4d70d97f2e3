"""
Pytest configuration and shared fixtures.

Provides fixtures for an isolated environment (XDG dirs, TODOLN_* vars and
the config cache), temporary store files and sample tasks.
"""

from pathlib import Path

import pytest

from todoln.core.config.loader import clear_cache
from todoln.core.tasks.jsonl import TaskFile
from todoln.core.tasks.models import Task
from todoln.core.tasks.store import TaskStore

# ==============================================================================
# Environment Fixtures
# ==============================================================================


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point XDG dirs at a temp tree and drop any TODOLN_* overrides."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv("TODOLN_STORE", raising=False)
    monkeypatch.delenv("TODOLN_BACKUP_PREFIX", raising=False)
    clear_cache()
    yield
    clear_cache()


@pytest.fixture
def work_dir(tmp_path, monkeypatch):
    """Provide an empty working directory and chdir into it."""
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    return work


# ==============================================================================
# Store Fixtures
# ==============================================================================


@pytest.fixture
def store_path(tmp_path) -> Path:
    """Path of a task file that does not exist yet."""
    return tmp_path / "store" / "tasks.jsonl"


@pytest.fixture
def task_file(store_path) -> TaskFile:
    """TaskFile bound to the temporary store path."""
    return TaskFile(store_path)


@pytest.fixture
def sample_tasks() -> list[Task]:
    """Five tasks, the second and fourth done."""
    return [
        Task(description="buy milk"),
        Task(description="walk dog", done=True),
        Task(description="call mom"),
        Task(description="pay rent", done=True),
        Task(description="water plants"),
    ]


@pytest.fixture
def sample_store(sample_tasks) -> TaskStore:
    """TaskStore holding the sample tasks."""
    return TaskStore(sample_tasks)

