"""
Platform support base — the per-platform contract of the install pipeline.

Each host family implements this once. The install use case only talks
to the variant, so no stage needs its own platform conditionals.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from pamformula.adapters.base import CommandRunner
from pamformula.core.models.formula import Dependency, FormulaConfig
from pamformula.core.models.link import LinkDirective
from pamformula.core.models.platform import HostPlatform
from pamformula.core.services import verify as verifier


class PlatformSupport(ABC):
    """Abstract base class for platform variants.

    To add a platform:
        1. Subclass PlatformSupport
        2. Implement host, link_directive, compose_caveats
        3. Override preflight / install_extra / verify if the platform
           needs more than an existence check
        4. Register it in ``pamformula.core.platforms``
    """

    def __init__(self, config: FormulaConfig):
        self.config = config

    @property
    @abstractmethod
    def host(self) -> HostPlatform:
        """The host family this variant handles."""

    @abstractmethod
    def link_directive(self) -> LinkDirective:
        """Linking knobs for the build step."""

    @abstractmethod
    def compose_caveats(self, installed_path: Path, signing_required: bool = False) -> str:
        """Post-install instructions for the operator."""

    @property
    def signing_required(self) -> bool:
        return False

    def dependencies(self) -> list[Dependency]:
        return [
            Dependency(name="rust", build_only=True),
            Dependency(name="libssh"),
        ]

    def preflight(self, runner: CommandRunner) -> None:
        """Checks that must pass before post-install steps run on the artifact."""

    def install_extra(self, installed_path: Path, runner: CommandRunner, scratch_dir: Path) -> None:
        """Post-install steps applied to the installed artifact."""

    def verify(self, installed_path: Path, runner: CommandRunner) -> verifier.VerificationResult:
        return verifier.check_exists(installed_path)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} host={self.host.value!r}>"
