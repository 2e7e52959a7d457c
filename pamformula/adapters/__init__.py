"""Adapters — bindings to the external tools the formula drives.

Public re-exports for convenient access.
"""

from pamformula.adapters.base import CommandRunner
from pamformula.adapters.mock import MockRunner
from pamformula.adapters.shell.command import SubprocessRunner

__all__ = [
    "CommandRunner",
    "MockRunner",
    "SubprocessRunner",
]
