"""Platform variants — one PlatformSupport implementation per host family.

    from pamformula.core.platforms import for_platform
"""

from __future__ import annotations

from pathlib import Path

from pamformula.core.models.formula import FormulaConfig
from pamformula.core.models.platform import HostPlatform
from pamformula.core.platforms.base import PlatformSupport
from pamformula.core.platforms.generic import GenericSupport
from pamformula.core.platforms.linux import LinuxSupport
from pamformula.core.platforms.macos import MacOSSupport


def for_platform(
    host: HostPlatform,
    config: FormulaConfig,
    pam_root: str | Path = "/",
) -> PlatformSupport:
    """Return the support variant for ``host``."""
    if host is HostPlatform.MACOS:
        return MacOSSupport(config)
    if host is HostPlatform.LINUX:
        return LinuxSupport(config, pam_root=pam_root)
    return GenericSupport(config)


__all__ = [
    "GenericSupport",
    "LinuxSupport",
    "MacOSSupport",
    "PlatformSupport",
    "for_platform",
]
