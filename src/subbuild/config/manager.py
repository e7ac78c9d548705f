"""
Configuration management and singleton pattern.

This module provides the main configuration loading interface, ensuring the
configuration is loaded only once per process.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from ..models.config import HelperConfig
from ..validation import handle_config_error, ErrorSeverity
from .loader import load_helper_config
from .validators import validate_helper_config

logger = logging.getLogger(__name__)

# --- Global Singleton for Configuration ---

# This global variable will hold the single instance of the loaded HelperConfig.
_CONFIG: Optional[HelperConfig] = None

# Explicit configuration file, set by the CLI (--config) or by tests.
_CONFIG_FILE_PATH: Optional[Path] = None

# Consulted when no explicit path was set.
CONFIG_ENV_VAR = "SUBBUILD_CONFIG"


def set_config_path(config_path: Optional[Path]) -> None:
    """
    Set a custom configuration file path.

    Passing None goes back to the SUBBUILD_CONFIG variable or the
    built-in defaults. The cached configuration is dropped either way.
    """
    global _CONFIG_FILE_PATH, _CONFIG
    _CONFIG_FILE_PATH = Path(config_path) if config_path is not None else None
    _CONFIG = None
    logger.info(f"Configuration path set to: {config_path}")


def clear_config_cache() -> None:
    """Clear the cached configuration, forcing a reload on next access."""
    global _CONFIG
    _CONFIG = None
    logger.debug("Configuration cache cleared")


def get_config_path() -> Optional[Path]:
    """Return the configuration file that get_config() would load, if any."""
    if _CONFIG_FILE_PATH is not None:
        return _CONFIG_FILE_PATH
    env_path = os.environ.get(CONFIG_ENV_VAR)
    return Path(env_path) if env_path else None


def _load_config(config_path: Optional[Path]) -> HelperConfig:
    """
    Load and validate the helper configuration.

    Raises:
        FileNotFoundError: If an explicit configuration file is missing
        ValidationError: If configuration validation fails
        tomllib.TOMLDecodeError: If the TOML file is malformed
    """
    if config_path is None:
        logger.debug("No configuration file given, using built-in defaults")
        return HelperConfig()

    try:
        config = validate_helper_config(load_helper_config(config_path))
    except FileNotFoundError as e:
        handle_config_error(
            error=e,
            context="loading configuration file",
            severity=ErrorSeverity.CRITICAL,
            reraise=True,
            logger=logger
        )
        raise

    logger.info(f"Successfully loaded configuration from {config_path}")
    return config


def get_config() -> HelperConfig:
    """
    Get the global helper configuration, loading it if necessary.

    Returns:
        The singleton HelperConfig instance
    """
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = _load_config(get_config_path())
    return _CONFIG


def is_config_loaded() -> bool:
    """Check if configuration has been loaded and cached."""
    return _CONFIG is not None
