"""
macOS support — static linking, signing gate, codesign, signature check.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pamformula.adapters.base import CommandRunner
from pamformula.core.models.link import LinkDirective
from pamformula.core.models.platform import HostPlatform
from pamformula.core.platforms.base import PlatformSupport
from pamformula.core.services import signing
from pamformula.core.services import verify as verifier
from pamformula.core.services.caveats import compose_caveats
from pamformula.core.services.link_mode import select_link_directive

logger = logging.getLogger(__name__)


class MacOSSupport(PlatformSupport):
    """Install variant for macOS hosts."""

    @property
    def host(self) -> HostPlatform:
        return HostPlatform.MACOS

    @property
    def signing_required(self) -> bool:
        return True

    def link_directive(self) -> LinkDirective:
        return select_link_directive(self.host, crypto_prefix=self.config.crypto_prefix)

    def preflight(self, runner: CommandRunner) -> None:
        signing.check_signing_identity(
            self.config.signing_identity, runner, formula_name=self.config.name,
        )

    def install_extra(self, installed_path: Path, runner: CommandRunner, scratch_dir: Path) -> None:
        entitlements = signing.write_entitlements(scratch_dir)
        signing.sign_artifact(
            installed_path,
            self.config.signing_identity,
            entitlements,
            runner,
            identifier=self.config.module_name,
        )

    def compose_caveats(self, installed_path: Path, signing_required: bool = True) -> str:
        return compose_caveats(
            self.host,
            installed_path,
            signing_required=signing_required,
            identity=self.config.signing_identity,
            formula_name=self.config.name,
        )

    def verify(self, installed_path: Path, runner: CommandRunner) -> verifier.VerificationResult:
        result = verifier.check_exists(installed_path)
        return verifier.check_signature(
            result,
            runner,
            expected_identifier=self.config.module_name,
            expected_authority=self.config.signing_identity,
        )
