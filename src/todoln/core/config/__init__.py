"""
Configuration models and loading.

This module provides Pydantic models for todoln configuration
with multi-layer merging: defaults < user config < env vars.
"""

from .env import get_env_files, load_env_files
from .loader import (
    clear_cache,
    get_default_store_path,
    get_user_config_path,
    get_xdg_config_home,
    get_xdg_data_home,
    load_config,
)
from .models import BackupConfig, TodolnConfig

__all__ = [
    # Models
    "BackupConfig",
    "TodolnConfig",
    # Loader functions
    "clear_cache",
    "get_env_files",
    "get_default_store_path",
    "get_user_config_path",
    "get_xdg_config_home",
    "get_xdg_data_home",
    "load_config",
    "load_env_files",
]
