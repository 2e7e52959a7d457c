"""
Platform probe — host OS family and the system PAM directory.

Read-only queries. The directory probe is total: it returns the
UNDETECTED sentinel instead of failing, so callers can fall back to
generic instructions.
"""

from __future__ import annotations

import logging
import platform
from pathlib import Path
from typing import Iterable

from pamformula.core.models.platform import UNDETECTED, HostPlatform, PamDirectory

logger = logging.getLogger(__name__)

# Probe order is fixed: Debian/Ubuntu multiarch, RHEL/Fedora, then generic
PAM_DIRECTORY_CANDIDATES: tuple[str, ...] = (
    "/lib/x86_64-linux-gnu/security",
    "/lib64/security",
    "/lib/security",
)

_SYSTEM_NAMES = {
    "darwin": HostPlatform.MACOS,
    "linux": HostPlatform.LINUX,
}


def detect_platform(system: str | None = None) -> HostPlatform:
    """Map ``platform.system()`` (or the given name) to a HostPlatform."""
    name = (system if system is not None else platform.system()).lower()
    return _SYSTEM_NAMES.get(name, HostPlatform.OTHER)


def first_existing(
    candidates: Iterable[str],
    root: str | Path = "/",
) -> PamDirectory:
    """Return the first candidate directory that exists under ``root``.

    Candidates are absolute paths; ``root`` re-roots them (``/`` on a
    real host, a scratch tree in tests). The returned path is the
    system path, not the re-rooted probe.
    """
    base = Path(root)
    for candidate in candidates:
        probe = base / candidate.lstrip("/")
        try:
            if probe.is_dir():
                return Path(candidate)
        except OSError:
            continue
    return UNDETECTED


def detect_pam_directory(root: str | Path = "/") -> PamDirectory:
    """First existing system PAM module directory, or UNDETECTED."""
    found = first_existing(PAM_DIRECTORY_CANDIDATES, root=root)
    if found is UNDETECTED:
        logger.info("No system PAM directory found under %s", root)
    else:
        logger.debug("PAM directory: %s", found)
    return found


def shared_library_name(host: HostPlatform, name: str) -> str:
    """Filename the toolchain gives a shared library on ``host``."""
    ext = "dylib" if host is HostPlatform.MACOS else "so"
    return f"lib{name}.{ext}"
