"""
Linux support — dynamic linking and PAM directory detection for caveats.
"""

from __future__ import annotations

from pathlib import Path

from pamformula.core.models.formula import Dependency, FormulaConfig
from pamformula.core.models.link import LinkDirective
from pamformula.core.models.platform import HostPlatform
from pamformula.core.platforms.base import PlatformSupport
from pamformula.core.services.caveats import compose_caveats
from pamformula.core.services.link_mode import select_link_directive
from pamformula.core.services.platform_probe import detect_pam_directory


class LinuxSupport(PlatformSupport):
    """Install variant for Linux hosts.

    ``pam_root`` re-roots the PAM directory probe (``/`` on a real host).
    """

    def __init__(self, config: FormulaConfig, pam_root: str | Path = "/"):
        super().__init__(config)
        self.pam_root = pam_root

    @property
    def host(self) -> HostPlatform:
        return HostPlatform.LINUX

    def dependencies(self) -> list[Dependency]:
        return super().dependencies() + [Dependency(name="linux-pam")]

    def link_directive(self) -> LinkDirective:
        return select_link_directive(self.host)

    def compose_caveats(self, installed_path: Path, signing_required: bool = False) -> str:
        return compose_caveats(
            self.host,
            installed_path,
            pam_directory=detect_pam_directory(self.pam_root),
            formula_name=self.config.name,
        )
