"""
Program directory resolution.

Relative program locations are interpreted against the anchor root (the
directory of the build that requested the helper), never against the
process's current working directory.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from ..validation import ResolutionError

logger = logging.getLogger(__name__)


def resolve_program_dir(location: Union[str, Path], anchor_root: Optional[Path]) -> Path:
    """Resolve a program location to an absolute, canonical directory.

    Args:
        location: Relative or absolute path of the program directory.
        anchor_root: Directory that relative locations are joined onto.

    Returns:
        The absolute, symlink-resolved directory.

    Raises:
        ResolutionError: If a relative location has no anchor root, or the
            path does not exist, cannot be canonicalized, or is not a directory.
    """
    candidate = Path(location)
    if not candidate.is_absolute():
        if anchor_root is None:
            raise ResolutionError(str(location), "No anchor root is available for a relative path.")
        candidate = Path(anchor_root) / candidate

    try:
        resolved = candidate.resolve(strict=True)
    except (OSError, RuntimeError) as e:
        # RuntimeError is raised for symlink loops on older interpreters.
        raise ResolutionError(str(location), f"{type(e).__name__}: {e}") from e

    if not resolved.is_dir():
        raise ResolutionError(str(location), f"{resolved} is not a directory.")

    logger.debug(f"Resolved program location '{location}' to {resolved}")
    return resolved
