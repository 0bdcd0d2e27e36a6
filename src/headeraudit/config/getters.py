"""Configuration getter functions."""

import os
from pathlib import Path
from typing import Any

from .env_loader import load_global_config, load_local_config


def get_config(key: str, directory: Path | None = None, default: Any = None) -> Any:
    """
    Get configuration value with priority:
    1. Environment variable
    2. .env file in the working directory
    3. Global config file
    4. Default value

    Args:
        key: Configuration key
        directory: Directory holding the .env file (defaults to the cwd)
        default: Default value if not found

    Returns:
        Configuration value or default
    """
    env_value = os.environ.get(key)
    if env_value:
        return env_value

    local_config = load_local_config(directory)
    if key in local_config:
        return local_config[key]

    global_config = load_global_config()
    if key in global_config:
        return global_config[key]

    return default


def get_config_source(key: str, directory: Path | None = None) -> str:
    """Name the source :func:`get_config` would read ``key`` from."""
    if os.environ.get(key):
        return "environment"
    if key in load_local_config(directory):
        return ".env"
    if key in load_global_config():
        return "global config"
    return "default"
