"""
Entry point used by a host build to compile an external program.

`build_program` resolves the program directory, declares the rerun
triggers, announces the build and hands over to the executor. Every error
it raises except a metadata lookup failure is fatal for the host build.
"""

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO, Union

from ..config import get_config
from ..executor.build_process import BuildProcessRunner
from ..models.config import HelperConfig
from ..models.results import BuildOutcome
from ..models.runtime import BuildEnvironment
from ..system import HostProtocol, emit_triggers, lookup_display_name, resolve_program_dir

logger = logging.getLogger(__name__)


def build_program(
    path: Union[str, Path],
    config: Optional[HelperConfig] = None,
    environment: Optional[BuildEnvironment] = None,
    protocol: Optional[HostProtocol] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> BuildOutcome:
    """
    Build the program at `path` with the external build tool.

    Args:
        path: Program directory, relative to the anchor root or absolute.
        config: Helper configuration; loaded with get_config() when omitted.
        environment: Environment inputs; read from os.environ when omitted.
        protocol: Host directive writer; writes to sys.stdout when omitted.
        stdout: Sink for the tool's relayed stdout (defaults to sys.stdout).
        stderr: Sink for the tool's relayed stderr (defaults to sys.stderr).

    Returns:
        BuildOutcome of the build (skipped=True if the build was bypassed).

    Raises:
        ResolutionError: If `path` does not name an existing directory.
        SpawnError: If the build tool cannot be started.
        StreamReadError: If relaying the tool's output fails.
        BuildFailedError: If the build tool fails.
    """
    config = config or get_config()
    environment = environment or BuildEnvironment.from_environ(os.environ, config)
    protocol = protocol or HostProtocol(config.directive_prefix)

    program_dir = resolve_program_dir(path, environment.anchor_root)
    emit_triggers(program_dir, config, protocol)

    display_name = lookup_display_name(
        program_dir / config.manifest_file_name, config.default_display_name
    )

    # The host caches warnings, so the timestamp shows when the build really ran.
    built_at = datetime.now().strftime(config.timestamp_format)
    protocol.warning(f"{display_name} built at {built_at}")

    runner = BuildProcessRunner(config, environment, protocol=protocol, stdout=stdout, stderr=stderr)
    return runner.execute(program_dir, display_name)
