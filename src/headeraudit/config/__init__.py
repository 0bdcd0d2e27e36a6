"""
Configuration management for headeraudit.

Supports multiple configuration sources in order of priority:
1. Command-line options (highest priority)
2. Environment variables
3. .env file in the working directory
4. Global config file (~/.headeraudit/config.yml)
5. Default values (lowest priority)
"""

from .env_loader import (
    global_config_path,
    load_env_file,
    load_global_config,
    load_local_config,
)
from .getters import get_config, get_config_source
from .settings import ENV_KEYS, OUTPUT_FORMATS, AuditSettings, load_settings

__all__ = [
    # env_loader
    "global_config_path",
    "load_env_file",
    "load_global_config",
    "load_local_config",
    # getters
    "get_config",
    "get_config_source",
    # settings
    "ENV_KEYS",
    "OUTPUT_FORMATS",
    "AuditSettings",
    "load_settings",
]
