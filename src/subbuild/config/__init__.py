"""
Configuration management for the subbuild package.

This module provides a clean interface for loading, validating, and accessing
the helper configuration from an optional TOML file.
"""

# Main configuration interface
from .manager import (
    CONFIG_ENV_VAR,
    clear_config_cache,
    get_config,
    get_config_path,
    is_config_loaded,
    set_config_path,
)

# For advanced usage - direct access to loaders and validators
from .loader import load_helper_config, load_toml_file
from .validators import validate_helper_config

__all__ = [
    # Main interface
    "get_config",
    "set_config_path",
    "get_config_path",
    "clear_config_cache",
    "is_config_loaded",
    "CONFIG_ENV_VAR",
    # Advanced interface
    "load_toml_file",
    "load_helper_config",
    "validate_helper_config",
]
