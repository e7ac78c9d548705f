"""
Result data models.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class BuildOutcome:
    """
    Summary of one successful (or skipped) build.

    Only line counts are kept; the tool's output itself is relayed to the
    console and never stored.
    """

    display_name: str
    program_dir: Path
    skipped: bool = False
    return_code: Optional[int] = 0
    stdout_lines: int = 0
    stderr_lines: int = 0
    duration_seconds: float = 0.0
    # CPU seconds consumed by the build tool and its children.
    child_cpu_user: float = 0.0
    child_cpu_system: float = 0.0

    @property
    def total_lines(self) -> int:
        return self.stdout_lines + self.stderr_lines
