"""
Manifest metadata lookup.

The program's display name only feeds diagnostics, so every failure here
degrades to a placeholder instead of failing the build.
"""

import logging
import tomllib
from pathlib import Path
from typing import Optional

from ..validation import ErrorSeverity, MetadataLookupError, handle_error

logger = logging.getLogger(__name__)


def read_package_name(manifest_path: Path) -> Optional[str]:
    """Read `[package].name` from a TOML manifest.

    Returns:
        The package name, or None when the manifest declares no package
        (for example a workspace root manifest).

    Raises:
        MetadataLookupError: If the manifest cannot be read or parsed.
    """
    try:
        with open(manifest_path, "rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        raise MetadataLookupError(manifest_path, f"{type(e).__name__}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise MetadataLookupError(manifest_path, f"malformed TOML: {e}") from e

    package = data.get("package")
    if not isinstance(package, dict):
        return None
    name = package.get("name")
    if isinstance(name, str) and name.strip():
        return name
    return None


def lookup_display_name(manifest_path: Path, default: str) -> str:
    """Return the package name from the manifest, or `default` if there is none."""
    try:
        name = read_package_name(manifest_path)
    except MetadataLookupError as e:
        handle_error(
            error=e,
            context="reading program metadata",
            severity=ErrorSeverity.WARNING,
            reraise=False,
            logger=logger
        )
        return default

    if name is None:
        logger.debug(f"No package name in {manifest_path}, using '{default}'")
        return default
    return name
