"""
Orchestration of a program build: resolve, declare triggers, announce,
execute.
"""

from .program_builder import build_program

__all__ = [
    "build_program",
]
