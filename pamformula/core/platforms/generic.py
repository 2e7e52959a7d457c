"""
Generic support — any host that is neither macOS nor Linux.
"""

from __future__ import annotations

from pathlib import Path

from pamformula.core.models.link import LinkDirective
from pamformula.core.models.platform import HostPlatform
from pamformula.core.platforms.base import PlatformSupport
from pamformula.core.services.caveats import compose_caveats
from pamformula.core.services.link_mode import select_link_directive


class GenericSupport(PlatformSupport):
    @property
    def host(self) -> HostPlatform:
        return HostPlatform.OTHER

    def link_directive(self) -> LinkDirective:
        return select_link_directive(self.host)

    def compose_caveats(self, installed_path: Path, signing_required: bool = False) -> str:
        return compose_caveats(self.host, installed_path, formula_name=self.config.name)
