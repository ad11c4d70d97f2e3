"""
Configuration data models for todoln.

These models define the structure of ~/.config/todoln/config.json, with
validation and type safety via Pydantic.
"""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BackupConfig(BaseModel):
    """
    How generated backup files are named.

    Backups are written to the current directory as
    ``<prefix>_<timestamp>.jsonl``.
    """

    model_config = ConfigDict(extra="ignore")

    prefix: str = Field(
        default="todoln_backup",
        description="File name prefix for backups"
    )
    timestamp_format: str = Field(
        default="%Y%m%d-%H%M%S",
        description="strftime format for the timestamp part of backup names"
    )

    @field_validator("prefix")
    @classmethod
    def validate_prefix(cls, v: str) -> str:
        """Ensure the prefix is a plain, non-empty file name part."""
        v = v.strip()
        if not v:
            raise ValueError("backup prefix cannot be empty")
        if "/" in v or "\\" in v:
            raise ValueError(f"backup prefix must not contain path separators: {v!r}")
        return v


class TodolnConfig(BaseModel):
    """
    Top-level todoln configuration.

    Loaded from defaults, the user config file and env vars, then resolved
    once at startup.

    Example:
        >>> config = TodolnConfig(store_path="/tmp/tasks.jsonl")
        >>> config.store_path
        PosixPath('/tmp/tasks.jsonl')
        >>> config.backup.prefix
        'todoln_backup'
    """

    model_config = ConfigDict(extra="ignore")

    store_path: Optional[Path] = Field(
        default=None,
        description="Task store file (defaults to $XDG_DATA_HOME/todoln/tasks.jsonl)"
    )
    backup: BackupConfig = Field(
        default_factory=BackupConfig,
        description="Backup file naming"
    )

    @field_validator("store_path")
    @classmethod
    def expand_store_path(cls, v: Optional[Path]) -> Optional[Path]:
        """Expand ``~`` in a configured store path."""
        return v.expanduser() if v is not None else None
