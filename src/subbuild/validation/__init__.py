"""
Validation and error handling for the subbuild package.

This module provides the error hierarchy raised while building a program,
consistent error logging helpers, and input validators for configuration.
"""

from .exceptions import (
    BuildFailedError,
    BuildHelperError,
    ErrorSeverity,
    MetadataLookupError,
    ResolutionError,
    SpawnError,
    StreamReadError,
    ValidationError,
    handle_cli_error,
    handle_config_error,
    handle_error,
    handle_subprocess_error,
)
from .validators import (
    validate_command,
    validate_non_empty_string,
    validate_relative_name,
    validate_string,
)

__all__ = [
    # Errors
    "BuildHelperError",
    "ResolutionError",
    "MetadataLookupError",
    "SpawnError",
    "StreamReadError",
    "BuildFailedError",
    "ValidationError",
    "ErrorSeverity",
    # Handlers
    "handle_error",
    "handle_config_error",
    "handle_subprocess_error",
    "handle_cli_error",
    # Validators
    "validate_command",
    "validate_non_empty_string",
    "validate_relative_name",
    "validate_string",
]
