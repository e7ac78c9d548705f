"""
Build execution for the subbuild package.

This module runs the external build tool and relays its output streams
concurrently to the parent's console.
"""

from .build_process import BuildProcessRunner
from .stream_relay import RelayChannel, StreamRelay

__all__ = [
    "BuildProcessRunner",
    "RelayChannel",
    "StreamRelay",
]
