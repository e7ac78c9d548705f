"""
Configuration data models.

This module contains the configuration structure for the build helper,
loaded from `config.toml` or built from defaults.
"""

from dataclasses import dataclass, field
from typing import List


def _default_build_command() -> List[str]:
    return ["cargo", "prove", "build"]


@dataclass
class HelperConfig:
    """
    Configuration for the helper's behavior, loaded from `config.toml`.
    """

    # [helper]
    # The external build tool and its fixed arguments, run in the program directory.
    build_command: List[str] = field(default_factory=_default_build_command)
    # Prefix written before every relayed line of the tool's output.
    output_prefix: str = "[sp1] "
    # Prefix of every directive written for the host build.
    directive_prefix: str = "cargo:"
    # Name shown in diagnostics when the manifest has no package name.
    default_display_name: str = "Program"
    # strftime format of the "built at" timestamp.
    timestamp_format: str = "%Y-%m-%d %H:%M:%S"
    # Paths inside the program directory that invalidate the host's cached result.
    source_dir_name: str = "src"
    manifest_file_name: str = "Cargo.toml"
    lock_file_name: str = "Cargo.lock"
    # Warning written for the host build when the build is skipped.
    skip_notice: str = "Skipping build due to clippy invocation."

    # [environment]
    # Directory that relative program paths are resolved against.
    anchor_root_var: str = "CARGO_MANIFEST_DIR"
    # Set to the resolved program directory in the child's environment.
    program_dir_var: str = "CARGO_MANIFEST_DIR"
    # The build is skipped when this variable contains skip_signal_marker.
    skip_signal_var: str = "RUSTC_WORKSPACE_WRAPPER"
    skip_signal_marker: str = "clippy-driver"
    # Removed from the child's environment so the nested tool picks its own compiler.
    compiler_override_var: str = "RUSTC"

    @property
    def trigger_names(self) -> List[str]:
        """Names, relative to the program directory, of the rerun triggers."""
        return [self.source_dir_name, self.manifest_file_name, self.lock_file_name]
