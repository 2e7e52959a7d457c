"""
Platform model — which host family the formula is installing onto.

Decided once at install start and never revisited.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path


class HostPlatform(str, Enum):
    """Host OS family."""

    MACOS = "macos"
    LINUX = "linux"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str) -> HostPlatform:
        """Parse a user-supplied platform name (case-insensitive)."""
        normalized = value.strip().lower()
        aliases = {"darwin": cls.MACOS, "osx": cls.MACOS, "mac": cls.MACOS}
        if normalized in aliases:
            return aliases[normalized]
        return cls(normalized)


class _Undetected:
    """Sentinel for "no PAM directory found" — never an error."""

    _instance: _Undetected | None = None

    def __new__(cls) -> _Undetected:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNDETECTED"


UNDETECTED = _Undetected()

# A probed PAM directory, or UNDETECTED
PamDirectory = Path | _Undetected
