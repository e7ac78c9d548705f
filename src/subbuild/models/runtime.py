"""
Runtime data models.

This module contains the per-invocation view of the process environment.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional

from .config import HelperConfig


@dataclass(frozen=True)
class BuildEnvironment:
    """
    Environment inputs read once at the boundary of an invocation.

    Everything downstream receives this object instead of reading
    `os.environ` itself.
    """

    # Directory relative program locations are resolved against, if known.
    anchor_root: Optional[Path]
    # True when an alternate tool (e.g. a linter driver) is driving compilation.
    skip_signal_present: bool
    # True when the parent has a compiler override that must not leak into the child.
    compiler_override_present: bool
    # Snapshot of the variables the child environment is derived from.
    variables: Dict[str, str] = field(default_factory=dict, repr=False)

    @classmethod
    def from_environ(cls, environ: Mapping[str, str], config: HelperConfig) -> "BuildEnvironment":
        anchor_root = environ.get(config.anchor_root_var)
        wrapper = environ.get(config.skip_signal_var, "")
        return cls(
            anchor_root=Path(anchor_root) if anchor_root else None,
            skip_signal_present=config.skip_signal_marker in wrapper,
            compiler_override_present=config.compiler_override_var in environ,
            variables=dict(environ),
        )

    def child_variables(self, config: HelperConfig, program_dir: Path) -> Dict[str, str]:
        """Environment for the build tool: program dir set, compiler override removed."""
        env = dict(self.variables)
        env[config.program_dir_var] = str(program_dir)
        env.pop(config.compiler_override_var, None)
        return env
