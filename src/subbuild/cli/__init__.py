"""
Command-line interface for the subbuild package.
"""

from .main import main_cli

__all__ = [
    "main_cli",
]
