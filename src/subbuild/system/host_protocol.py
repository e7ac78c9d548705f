"""
Directives for the host build.

The host build reads the helper's standard output line by line and treats
lines of the form `<prefix><key>=<value>` as instructions, e.g.
`cargo:rerun-if-changed=/path` or `cargo:warning=message`.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

from ..models.config import HelperConfig

logger = logging.getLogger(__name__)


class HostProtocol:
    """Writes declarative directives to the host build's stdout protocol."""

    def __init__(self, directive_prefix: str = "cargo:", stream: Optional[TextIO] = None):
        self.directive_prefix = directive_prefix
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Looked up on every write so a replaced sys.stdout is honored.
        return self._stream if self._stream is not None else sys.stdout

    def _emit(self, key: str, value: str) -> None:
        stream = self.stream
        stream.write(f"{self.directive_prefix}{key}={value}\n")
        stream.flush()

    def rerun_if_changed(self, path: Path) -> None:
        self._emit("rerun-if-changed", str(path))

    def warning(self, message: str) -> None:
        # The protocol is line based; a newline would end the directive early.
        self._emit("warning", " ".join(message.splitlines()))


def emit_triggers(program_dir: Path, config: HelperConfig, protocol: HostProtocol) -> None:
    """
    Declare the paths whose changes must make the host rerun the helper.

    Exactly three directives are written: the source directory, the
    manifest and the lock file of the program.
    """
    for name in config.trigger_names:
        protocol.rerun_if_changed(program_dir / name)
    logger.debug(f"Declared {len(config.trigger_names)} rerun triggers under {program_dir}")
