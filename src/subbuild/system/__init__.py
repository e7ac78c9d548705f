"""
System interaction for the subbuild package: filesystem path resolution,
manifest metadata lookup, and the host build's directive protocol.
"""

from .host_protocol import HostProtocol, emit_triggers
from .manifest import lookup_display_name, read_package_name
from .paths import resolve_program_dir

__all__ = [
    "resolve_program_dir",
    "read_package_name",
    "lookup_display_name",
    "HostProtocol",
    "emit_triggers",
]
