"""
Build execution for a single program.

This module runs the external build tool in the program directory, relays
its stdout and stderr to the parent's streams with a fixed prefix, and
turns any failure into a fatal error naming the program.
"""

import contextlib
import logging
import subprocess
import sys
import time
from pathlib import Path
from typing import Dict, Optional, TextIO, Tuple

import psutil

from ..models.config import HelperConfig
from ..models.results import BuildOutcome
from ..models.runtime import BuildEnvironment
from ..system.host_protocol import HostProtocol
from ..validation import (
    BuildFailedError,
    ErrorSeverity,
    SpawnError,
    StreamReadError,
    handle_subprocess_error,
)
from .stream_relay import RelayChannel, StreamRelay

logger = logging.getLogger(__name__)


def _children_cpu_times() -> Tuple[float, float]:
    """User and system CPU seconds of this process's reaped children."""
    times = psutil.Process().cpu_times()
    # Not every platform reports children times.
    return getattr(times, "children_user", 0.0), getattr(times, "children_system", 0.0)


class BuildProcessRunner:
    """
    Runs the external build tool once and relays its output.

    The run goes through: check skip, spawn, drain both streams, wait
    exactly once, then map the exit status to success or BuildFailedError.
    There are no retries and no partial success.
    """

    def __init__(
        self,
        config: HelperConfig,
        environment: BuildEnvironment,
        protocol: Optional[HostProtocol] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ):
        """
        Args:
            config: Helper configuration (command, prefix, variable names)
            environment: Environment inputs resolved for this invocation
            protocol: Host directive writer, used for the skip notice
            stdout: Sink for relayed stdout lines (defaults to sys.stdout)
            stderr: Sink for relayed stderr lines (defaults to sys.stderr)
        """
        self.config = config
        self.environment = environment
        self.protocol = protocol or HostProtocol(config.directive_prefix)
        self._stdout = stdout
        self._stderr = stderr
        self.relay = StreamRelay(config.output_prefix)

    def should_skip(self) -> bool:
        return self.environment.skip_signal_present

    def execute(self, program_dir: Path, display_name: str) -> BuildOutcome:
        """
        Build the program in `program_dir`.

        Returns:
            BuildOutcome with line counts, duration and CPU usage

        Raises:
            SpawnError: If the build tool cannot be started
            StreamReadError: If relaying the tool's output fails
            BuildFailedError: If the tool exits non-zero or waiting fails
        """
        if self.should_skip():
            self.protocol.warning(self.config.skip_notice)
            logger.info(f"Skipped building '{display_name}'")
            return BuildOutcome(display_name=display_name, program_dir=program_dir, skipped=True)

        cpu_user_before, cpu_system_before = _children_cpu_times()
        start_time = time.monotonic()

        process = self._spawn(program_dir, display_name)
        counts = self._drain(process, display_name)
        return_code = self._wait(process, display_name)

        duration = time.monotonic() - start_time
        cpu_user_after, cpu_system_after = _children_cpu_times()

        if return_code != 0:
            logger.error(f"Build tool for '{display_name}' exited with code {return_code}")
            raise BuildFailedError(display_name, return_code)

        outcome = BuildOutcome(
            display_name=display_name,
            program_dir=program_dir,
            return_code=return_code,
            stdout_lines=counts.get("stdout", 0),
            stderr_lines=counts.get("stderr", 0),
            duration_seconds=duration,
            child_cpu_user=max(0.0, cpu_user_after - cpu_user_before),
            child_cpu_system=max(0.0, cpu_system_after - cpu_system_before),
        )
        logger.info(
            f"Built '{display_name}' in {outcome.duration_seconds:.2f}s "
            f"(cpu user {outcome.child_cpu_user:.2f}s, sys {outcome.child_cpu_system:.2f}s, "
            f"{outcome.total_lines} lines of output)"
        )
        return outcome

    def _spawn(self, program_dir: Path, display_name: str) -> psutil.Popen:
        command = self.config.build_command
        env = self.environment.child_variables(self.config, program_dir)
        if self.environment.compiler_override_present:
            logger.debug(f"Removing {self.config.compiler_override_var} from the build tool's environment")

        logger.info(f"Starting build tool: {' '.join(command)} in {program_dir}")
        try:
            process = psutil.Popen(
                command,
                cwd=program_dir,
                env=env,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as e:
            handle_subprocess_error(
                error=e,
                command=" ".join(command),
                severity=ErrorSeverity.ERROR,
                reraise=False,
                logger=logger
            )
            raise SpawnError(display_name, f"{type(e).__name__}: {e}") from e

        logger.debug(f"Build tool started with PID {process.pid}")
        return process

    def _drain(self, process: psutil.Popen, display_name: str) -> Dict[str, int]:
        # stderr is drained on this thread, stdout on a worker.
        channels = [
            RelayChannel("stderr", process.stderr, self._stderr or sys.stderr),
            RelayChannel("stdout", process.stdout, self._stdout or sys.stdout),
        ]
        try:
            counts = self.relay.relay(channels, abort=lambda: self._kill(process))
        except BaseException as e:
            logger.error(f"Aborting build of '{display_name}': {e}")
            self._kill(process)
            process.wait()
            if isinstance(e, StreamReadError):
                raise StreamReadError(e.stream_name, e.reason, display_name) from e
            raise
        finally:
            for channel in channels:
                channel.source.close()
        return counts

    def _kill(self, process: psutil.Popen) -> None:
        with contextlib.suppress(psutil.NoSuchProcess):
            process.kill()

    def _wait(self, process: psutil.Popen, display_name: str) -> Optional[int]:
        try:
            return process.wait()
        except (OSError, subprocess.SubprocessError, psutil.Error) as e:
            handle_subprocess_error(
                error=e,
                command=" ".join(self.config.build_command),
                severity=ErrorSeverity.ERROR,
                reraise=False,
                logger=logger
            )
            raise BuildFailedError(display_name) from e
