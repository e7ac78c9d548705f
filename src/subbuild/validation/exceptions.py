"""
Exception types and error handling helpers.

This module defines the error hierarchy raised while building a program
and the small set of handlers used to log errors consistently before
deciding whether to re-raise them.
"""

import logging
import sys
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Severity levels for error handling."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ValidationError(Exception):
    """
    Exception raised when validation fails.

    Used for configuration values and command-line input.
    """

    def __init__(self, message: str, field_name: Optional[str] = None,
                 value: Any = None, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message)
        self.field_name = field_name
        self.value = value
        self.severity = severity


class BuildHelperError(Exception):
    """Base class for every error raised while building a program."""

    fatal = True


class ResolutionError(BuildHelperError):
    """The program location does not name an existing directory."""

    def __init__(self, location: str, reason: Optional[str] = None):
        message = f"Failed to get the absolute path of the program directory `{location}`."
        if reason:
            message = f"{message} {reason}"
        super().__init__(message)
        self.location = location


class MetadataLookupError(BuildHelperError):
    """The manifest could not be read. Callers fall back to a placeholder name."""

    fatal = False

    def __init__(self, manifest_path: Path, reason: str):
        super().__init__(f"Could not read package metadata from {manifest_path}: {reason}")
        self.manifest_path = manifest_path


class SpawnError(BuildHelperError):
    """The external build tool could not be started."""

    def __init__(self, display_name: str, reason: str):
        super().__init__(f"Failed to build `{display_name}`. Could not start build tool: {reason}")
        self.display_name = display_name


class StreamReadError(BuildHelperError):
    """Relaying a line from one of the build tool's output streams failed."""

    def __init__(self, stream_name: str, reason: str, display_name: Optional[str] = None):
        subject = f"`{display_name}`" if display_name else "the build tool"
        super().__init__(f"Failed to relay {stream_name} of {subject}: {reason}")
        self.stream_name = stream_name
        self.reason = reason
        self.display_name = display_name


class BuildFailedError(BuildHelperError):
    """The build tool exited unsuccessfully, or waiting for it failed."""

    def __init__(self, display_name: str, return_code: Optional[int] = None):
        super().__init__(f"Failed to build `{display_name}`.")
        self.display_name = display_name
        self.return_code = return_code


def handle_error(
    error: Exception,
    context: str,
    severity: Union[ErrorSeverity, str] = ErrorSeverity.ERROR,
    reraise: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Handle errors with consistent logging and optional re-raising.

    Args:
        error: The exception that occurred
        context: Context description of where the error occurred
        severity: Severity level for logging
        reraise: Whether to re-raise the exception after logging
        logger: Logger instance to use (defaults to module logger)
    """
    effective_logger = logger or globals()['logger']

    error_msg = f"Error in {context}: {error}"

    if isinstance(severity, str):
        severity_str = severity.lower()
    else:
        severity_str = severity.value

    if severity_str == "debug":
        effective_logger.debug(error_msg, exc_info=True)
    elif severity_str == "info":
        effective_logger.info(error_msg)
    elif severity_str == "warning":
        effective_logger.warning(error_msg)
    elif severity_str == "error":
        effective_logger.error(error_msg)
    elif severity_str == "critical":
        effective_logger.critical(error_msg, exc_info=True)

    if reraise:
        raise error


def handle_config_error(error: Exception, context: str, **kwargs) -> None:
    """Handle configuration-related errors."""
    handle_error(error, f"config {context}", **kwargs)


def handle_subprocess_error(error: Exception, command: str, **kwargs) -> None:
    """Handle subprocess-related errors."""
    handle_error(error, f"subprocess command '{command}'", **kwargs)


def handle_cli_error(error: Exception, context: str, **kwargs) -> None:
    """Log an error at the CLI boundary and exit the process."""
    exit_code = kwargs.pop('exit_code', 1)
    include_traceback = kwargs.pop('include_traceback', False)
    severity = kwargs.pop('severity', ErrorSeverity.ERROR)

    if include_traceback:
        severity = ErrorSeverity.CRITICAL
    handle_error(error, f"CLI {context}", severity=severity, reraise=False, **kwargs)

    sys.exit(exit_code)
