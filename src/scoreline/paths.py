"""XDG-compliant path helpers for scoreline."""

from __future__ import annotations

import os
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir


def get_config_dir() -> Path:
    """Get the config directory (config.toml)."""
    override = os.environ.get("SCORELINE_CONFIG_DIR")
    if override:
        return Path(override)
    return Path(user_config_dir("scoreline"))


def get_data_dir() -> Path:
    """Get the data directory (exported debug logs)."""
    override = os.environ.get("SCORELINE_DATA_DIR")
    if override:
        return Path(override)
    return Path(user_data_dir("scoreline"))


def get_config_path() -> Path:
    return get_config_dir() / "config.toml"


def get_debug_log_path() -> Path:
    return get_data_dir() / "debug.log"


def ensure_directories() -> None:
    """Create the config and data directories if they don't exist."""
    get_config_dir().mkdir(parents=True, exist_ok=True)
    get_data_dir().mkdir(parents=True, exist_ok=True)
