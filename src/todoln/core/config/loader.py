"""
Configuration loading with multi-layer merging.

Implements the configuration precedence chain:
    defaults < user config < env vars

The CLI's --store option is applied on top by the caller.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .models import TodolnConfig

logger = logging.getLogger(__name__)

# Global cache to avoid reloading config multiple times per process
_config_cache: TodolnConfig | None = None

APP_NAME = "todoln"
STORE_FILE_NAME = "tasks.jsonl"


def get_xdg_config_home() -> Path:
    """
    Get XDG config home directory.

    Returns:
        Path to config directory (defaults to ~/.config)
    """
    if xdg_home := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_home)
    return Path.home() / ".config"


def get_xdg_data_home() -> Path:
    """
    Get XDG data home directory.

    Returns:
        Path to data directory (defaults to ~/.local/share)
    """
    if xdg_home := os.environ.get("XDG_DATA_HOME"):
        return Path(xdg_home)
    return Path.home() / ".local" / "share"


def get_user_config_path() -> Path:
    """
    Get path to user configuration file.

    Returns:
        Path to ~/.config/todoln/config.json (or XDG equivalent)
    """
    return get_xdg_config_home() / APP_NAME / "config.json"


def get_default_store_path() -> Path:
    """
    Get the default task store location.

    Returns:
        Path to ~/.local/share/todoln/tasks.jsonl (or XDG equivalent)
    """
    return get_xdg_data_home() / APP_NAME / STORE_FILE_NAME


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge two dictionaries.

    Values in `override` take precedence over values in `base`; nested
    dicts are merged, not replaced.

    Example:
        >>> deep_merge({"backup": {"prefix": "a"}}, {"backup": {"timestamp_format": "%Y"}})
        {'backup': {'prefix': 'a', 'timestamp_format': '%Y'}}
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_json_file(path: Path) -> dict[str, Any] | None:
    """
    Load a JSON file, returning None if it doesn't exist or is invalid.

    Args:
        path: Path to JSON file

    Returns:
        Parsed JSON as dict, or None if file doesn't exist or can't be parsed
    """
    if not path.exists():
        return None

    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Failed to parse config at %s: %s", path, e)
        return None

    if isinstance(data, dict):
        return data
    logger.warning("Ignoring config at %s: expected a JSON object", path)
    return None


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Supported env vars:
        TODOLN_STORE - overrides store_path
        TODOLN_BACKUP_PREFIX - overrides backup.prefix

    Args:
        config_dict: Configuration dictionary to override

    Returns:
        Configuration dictionary with env var overrides applied
    """
    result = config_dict.copy()

    if store := os.environ.get("TODOLN_STORE"):
        result["store_path"] = store

    if prefix := os.environ.get("TODOLN_BACKUP_PREFIX"):
        result["backup"] = {**result.get("backup", {}), "prefix": prefix}

    return result


def get_default_config() -> dict[str, Any]:
    """
    Get hardcoded default configuration.

    Returns:
        Dictionary with default configuration values
    """
    return {
        "store_path": None,
        "backup": {"prefix": "todoln_backup", "timestamp_format": "%Y%m%d-%H%M%S"},
    }


def load_config(use_cache: bool = True) -> TodolnConfig:
    """
    Load configuration with multi-layer merging.

    Configuration precedence (highest to lowest):
        1. Environment variables (TODOLN_*)
        2. User config (~/.config/todoln/config.json)
        3. Hardcoded defaults

    A user config that fails validation is ignored with a warning rather
    than blocking every command.

    Args:
        use_cache: If True, return cached config from previous load

    Returns:
        Validated TodolnConfig instance

    Raises:
        ValidationError: If env var overrides fail validation
    """
    global _config_cache

    if use_cache and _config_cache is not None:
        return _config_cache

    defaults = get_default_config()
    merged = defaults

    user_config_path = get_user_config_path()
    if user_config := load_json_file(user_config_path):
        candidate = deep_merge(defaults, user_config)
        try:
            TodolnConfig(**candidate)
            merged = candidate
        except ValidationError as e:
            logger.warning("Ignoring invalid config at %s: %s", user_config_path, e)

    merged = apply_env_overrides(merged)

    config = TodolnConfig(**merged)
    if config.store_path is None:
        config.store_path = get_default_store_path()

    _config_cache = config

    return config


def clear_cache() -> None:
    """
    Clear the cached configuration.

    Useful for testing or when config files change during execution.
    """
    global _config_cache
    _config_cache = None
