"""
subbuild: build an external program from inside a host build.

The helper resolves a program directory, declares which of its files
should make the host build rerun it, runs the external build tool there,
and relays the tool's stdout and stderr line by line with a fixed prefix.
Any failure is fatal for the host build.

The package is organized into specialized modules:
- config: Configuration loading and validation
- models: Configuration, runtime and result data structures
- validation: Error hierarchy, error handling and validators
- system: Path resolution, manifest lookup and host directives
- executor: Build tool execution and concurrent output relay
- orchestration: The build_program entry point
- cli: Command-line interface

Usage:
    From a host build:
        python -m subbuild path/to/program

    Programmatically:
        from subbuild import build_program
        build_program("../program")
"""

from .config import clear_config_cache, get_config, set_config_path
from .orchestration import build_program
from .cli import main_cli

from .models import BuildEnvironment, BuildOutcome, HelperConfig

from .validation import (
    BuildFailedError,
    BuildHelperError,
    MetadataLookupError,
    ResolutionError,
    SpawnError,
    StreamReadError,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    # Main interfaces
    "build_program",
    "main_cli",
    "get_config",
    "set_config_path",
    "clear_config_cache",
    # Models
    "HelperConfig",
    "BuildEnvironment",
    "BuildOutcome",
    # Errors
    "BuildHelperError",
    "ResolutionError",
    "MetadataLookupError",
    "SpawnError",
    "StreamReadError",
    "BuildFailedError",
    "ValidationError",
]
