"""
Data models for the build helper.

Configuration Models:
- HelperConfig: tool command, output prefix, trigger names, variable names

Runtime Models:
- BuildEnvironment: environment inputs resolved once per invocation

Result Models:
- BuildOutcome: line counts, timing and CPU usage of a build
"""

from .config import HelperConfig
from .results import BuildOutcome
from .runtime import BuildEnvironment

__all__ = [
    "HelperConfig",
    "BuildEnvironment",
    "BuildOutcome",
]
