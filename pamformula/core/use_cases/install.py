"""
Install use case — the full build → install → sign → caveats pipeline.

Stages run strictly in order and each one must finish before the next
starts. Any PamFormulaError aborts the install and propagates; later
stages never run, so a failed build never reaches the signing gate.
Verification runs last and is reported in the result rather than
raised, so a wrongly signed module is distinguishable from one that
never got installed.
"""

from __future__ import annotations

import logging
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from pamformula.adapters.base import CommandRunner
from pamformula.core.models.formula import FormulaConfig
from pamformula.core.models.link import LinkDirective
from pamformula.core.models.platform import HostPlatform
from pamformula.core.platforms import for_platform
from pamformula.core.services.build import run_build
from pamformula.core.services.installer import install_artifact
from pamformula.core.services.platform_probe import detect_platform
from pamformula.core.services.verify import VerificationResult

logger = logging.getLogger(__name__)


@dataclass
class InstallResult:
    """Result of a completed install."""

    platform: HostPlatform
    installed_path: Path
    directive: LinkDirective
    signed: bool = False
    caveats: str = ""
    verification: VerificationResult | None = None
    stages: list[str] = field(default_factory=list)

    @property
    def verified(self) -> bool:
        return self.verification is not None and self.verification.ok

    def to_dict(self) -> dict:
        return {
            "platform": self.platform.value,
            "installed_path": str(self.installed_path),
            "link": self.directive.knobs(),
            "signed": self.signed,
            "stages": self.stages,
            "verification": self.verification.to_dict() if self.verification else None,
            "caveats": self.caveats,
        }


def resolve_platform(config: FormulaConfig, host: HostPlatform | None = None) -> HostPlatform:
    """Explicit argument > config override > detected host."""
    if host is not None:
        return host
    if config.platform is not None:
        return config.platform
    return detect_platform()


def run_install(
    config: FormulaConfig,
    runner: CommandRunner,
    host: HostPlatform | None = None,
    pam_root: str | Path = "/",
    source_dir: str | Path | None = None,
) -> InstallResult:
    """Build, install and (on macOS) sign the PAM module.

    Args:
        config: Formula configuration.
        runner: Command runner used for cargo, security and codesign.
        host: Platform override; detected when None.
        pam_root: Root for the Linux PAM directory probe.
        source_dir: Unpacked source tree (default: ``config.source_dir``).

    Returns:
        InstallResult with caveats and verification outcome.

    Raises:
        BuildFailure, InstallFailure, SigningIdentityMissing, SigningFailure
    """
    stages: list[str] = []
    platform = resolve_platform(config, host)
    support = for_platform(platform, config, pam_root=pam_root)
    stages.append("probe")
    logger.info("Installing %s %s for %s", config.name, config.version, platform.value)

    directive = support.link_directive()
    stages.append("link-mode")

    src = Path(source_dir) if source_dir is not None else Path(config.source_dir)
    artifact = run_build(src, directive, runner, platform, config)
    stages.append("build")

    installed = install_artifact(
        artifact, config.resolved_install_root, target_name=config.installed_name,
    )
    stages.append("install")

    # Identity must exist before the installed module is signed or reported ready
    support.preflight(runner)
    if support.signing_required:
        stages.append("signing-gate")

    with tempfile.TemporaryDirectory(prefix="pamformula-") as scratch:
        support.install_extra(installed, runner, Path(scratch))
    if support.signing_required:
        stages.append("sign")

    caveats = support.compose_caveats(installed, signing_required=support.signing_required)
    stages.append("caveats")

    verification = support.verify(installed, runner)
    stages.append("verify")
    if not verification.ok:
        logger.warning("Post-install verification failed for %s", installed)

    return InstallResult(
        platform=platform,
        installed_path=installed,
        directive=directive,
        signed=support.signing_required,
        caveats=caveats,
        verification=verification,
        stages=stages,
    )
