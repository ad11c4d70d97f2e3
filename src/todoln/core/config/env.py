"""
.env support for the TODOLN_* variables.

``TODOLN_STORE`` and ``TODOLN_BACKUP_PREFIX`` (see loader.py) may be kept in a
``.env`` file in the current directory or in ``~/.config/todoln/.env``.
Precedence is shell environment > project ``.env`` > user ``.env``.
"""

import logging
from pathlib import Path

from dotenv import load_dotenv

from .loader import APP_NAME, get_xdg_config_home

logger = logging.getLogger(__name__)


def get_env_files(project_dir: Path | None = None) -> list[Path]:
    """Return the .env files to read, highest precedence first."""
    project_dir = Path.cwd() if project_dir is None else project_dir
    return [project_dir / ".env", get_xdg_config_home() / APP_NAME / ".env"]


def load_env_files(env_files: list[Path] | None = None) -> list[Path]:
    """
    Load .env files into the process environment without overriding it.

    Files are read in precedence order with ``override=False``, so a key
    set by the shell or an earlier file is never replaced.

    Args:
        env_files: Files to read, highest precedence first (defaults to
            get_env_files())

    Returns:
        The files that existed and were read
    """
    loaded = []
    for path in get_env_files() if env_files is None else env_files:
        if path.is_file():
            load_dotenv(path, override=False)
            logger.debug("Loaded environment from %s", path)
            loaded.append(path)
    return loaded
