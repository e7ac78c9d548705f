"""
Validation functions for configuration values.

Each validator returns the normalized value or raises ValidationError
naming the offending field.
"""

import shlex
from pathlib import PurePath
from typing import Any, List, Union

from .exceptions import ValidationError


def validate_non_empty_string(value: Any, field_name: str = "value") -> str:
    """
    Validate that a value is a non-empty string.

    Args:
        value: Value to validate
        field_name: Name of the field being validated

    Returns:
        The validated string

    Raises:
        ValidationError: If value is not a string or is empty/whitespace
    """
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(
            f"{field_name} must be a non-empty string, got {value!r}",
            field_name=field_name,
            value=value
        )
    return value


def validate_string(value: Any, field_name: str = "value") -> str:
    """Validate that a value is a string (empty allowed)."""
    if not isinstance(value, str):
        raise ValidationError(
            f"{field_name} must be a string, got {type(value).__name__}",
            field_name=field_name,
            value=value
        )
    return value


def validate_relative_name(value: Any, field_name: str = "name") -> str:
    """
    Validate a path component that is joined onto the program directory.

    The name must be relative and must not climb out of the directory,
    so every trigger path stays a descendant of the program directory.

    Raises:
        ValidationError: If the name is empty, absolute, names the directory
            itself, or contains '..'
    """
    name = validate_non_empty_string(value, field_name)
    path = PurePath(name)
    if path.is_absolute() or not path.parts or ".." in path.parts:
        raise ValidationError(
            f"{field_name} must be a relative path inside the program directory: {name}",
            field_name=field_name,
            value=value
        )
    return name


def validate_command(value: Union[str, List[str]], field_name: str = "command") -> List[str]:
    """
    Validate a command given either as an argument list or a shell-style string.

    Args:
        value: ["cargo", "prove", "build"] or "cargo prove build"
        field_name: Name of the field being validated

    Returns:
        The command as a list of arguments

    Raises:
        ValidationError: If the command is empty or has non-string parts
    """
    if isinstance(value, str):
        try:
            parts = shlex.split(value)
        except ValueError as e:
            raise ValidationError(
                f"{field_name} could not be parsed: {e}",
                field_name=field_name,
                value=value
            )
    elif isinstance(value, (list, tuple)):
        parts = list(value)
    else:
        raise ValidationError(
            f"{field_name} must be a string or a list of strings",
            field_name=field_name,
            value=value
        )

    if not parts:
        raise ValidationError(f"{field_name} cannot be empty", field_name=field_name, value=value)

    for index, part in enumerate(parts):
        if not isinstance(part, str) or not part:
            raise ValidationError(
                f"{field_name}[{index}] must be a non-empty string, got {part!r}",
                field_name=field_name,
                value=value
            )
    return parts
