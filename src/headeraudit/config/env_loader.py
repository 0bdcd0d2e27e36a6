"""Environment variable and configuration file loading."""

from pathlib import Path
from typing import Any

import yaml

from headeraudit.errors import ConfigError


def global_config_path() -> Path:
    return Path.home() / ".headeraudit" / "config.yml"


def load_env_file(env_path: Path) -> dict[str, str]:
    """Load environment variables from .env file."""
    env_vars = {}
    if env_path.exists():
        with open(env_path) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, value = line.split("=", 1)
                    value = value.strip().strip("\"'")
                    env_vars[key.strip()] = value
    return env_vars


def load_global_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load global configuration from ~/.headeraudit/config.yml."""
    config_path = config_path or global_config_path()
    if not config_path.exists():
        return {}
    with open(config_path) as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a mapping of settings")
    return data


def load_local_config(directory: Path | None = None) -> dict[str, str]:
    """Load the .env file of the working directory."""
    return load_env_file((directory or Path.cwd()) / ".env")
