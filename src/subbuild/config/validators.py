"""
Configuration validation utilities.

This module turns raw TOML data into a validated HelperConfig, filling
in defaults for every key that is absent.
"""

import logging
from typing import Any, Dict

from ..models.config import HelperConfig
from ..validation import (
    ValidationError,
    validate_command,
    validate_non_empty_string,
    validate_relative_name,
    validate_string,
)

logger = logging.getLogger(__name__)

_HELPER_KEYS = {
    "build_command",
    "output_prefix",
    "directive_prefix",
    "default_display_name",
    "timestamp_format",
    "source_dir_name",
    "manifest_file_name",
    "lock_file_name",
    "skip_notice",
}

_ENVIRONMENT_KEYS = {
    "anchor_root_var",
    "program_dir_var",
    "skip_signal_var",
    "skip_signal_marker",
    "compiler_override_var",
}


def _reject_unknown_keys(section: Dict[str, Any], allowed: set, section_name: str) -> None:
    unknown = sorted(set(section) - allowed)
    if unknown:
        raise ValidationError(
            f"Unknown keys in [{section_name}]: {', '.join(unknown)}",
            field_name=section_name,
            value=unknown
        )


def validate_helper_config(config_data: Dict[str, Any]) -> HelperConfig:
    """
    Validate and create a HelperConfig from raw configuration data.

    Args:
        config_data: Raw configuration from TOML with optional [helper]
            and [environment] tables

    Returns:
        Validated HelperConfig instance

    Raises:
        ValidationError: If validation fails
    """
    defaults = HelperConfig()
    helper = config_data.get("helper", {})
    environment = config_data.get("environment", {})

    for name, section in (("helper", helper), ("environment", environment)):
        if not isinstance(section, dict):
            raise ValidationError(f"[{name}] must be a table", field_name=name, value=section)

    _reject_unknown_keys(helper, _HELPER_KEYS, "helper")
    _reject_unknown_keys(environment, _ENVIRONMENT_KEYS, "environment")

    build_command = validate_command(
        helper.get("build_command", defaults.build_command),
        field_name="helper.build_command",
    )
    # An empty prefix is allowed: lines are then relayed verbatim.
    output_prefix = validate_string(
        helper.get("output_prefix", defaults.output_prefix),
        field_name="helper.output_prefix",
    )

    relative_names = {
        key: validate_relative_name(helper.get(key, getattr(defaults, key)), field_name=f"helper.{key}")
        for key in ("source_dir_name", "manifest_file_name", "lock_file_name")
    }
    strings = {
        key: validate_non_empty_string(helper.get(key, getattr(defaults, key)), field_name=f"helper.{key}")
        for key in ("directive_prefix", "default_display_name", "timestamp_format", "skip_notice")
    }
    variables = {
        key: validate_non_empty_string(environment.get(key, getattr(defaults, key)), field_name=f"environment.{key}")
        for key in sorted(_ENVIRONMENT_KEYS)
    }

    config = HelperConfig(
        build_command=build_command,
        output_prefix=output_prefix,
        **relative_names,
        **strings,
        **variables,
    )
    logger.debug(f"Validated helper configuration: {config}")
    return config
