"""
Formula model — metadata and install knobs for pam-ssh-agent.

Loaded from formula.yml. Every field has a default, so an install can
run with no config file at all.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from pamformula.core.models.platform import HostPlatform

DEFAULT_SIGNING_IDENTITY = "pam-ssh-agent Code Signing"


class Dependency(BaseModel):
    """A declared formula dependency."""

    name: str
    build_only: bool = False


class FormulaConfig(BaseModel):
    """Root formula configuration."""

    name: str = "pam-ssh-agent"
    desc: str = "PAM module for authentication with ssh-agent"
    homepage: str = "https://github.com/nresare/pam-ssh-agent"
    url: str = "https://github.com/nresare/pam-ssh-agent/archive/refs/tags/v0.9.4.tar.gz"
    sha256: str = "9b0f6d6aa72b4dbe6c3c6d6c6ce62081ed86519ad117451aa492fa73aabbfdb3"
    license: str = "BSD-2-Clause"
    head: str = "https://github.com/nresare/pam-ssh-agent.git"
    version: str = "0.9.4"

    module_name: str = "pam_ssh_agent"
    installed_name: str = "pam_ssh_agent.so"
    signing_identity: str = DEFAULT_SIGNING_IDENTITY

    crypto_dependency: str = "openssl@3"
    homebrew_prefix: str = "/opt/homebrew"
    prefix: str | None = None
    install_root: str | None = None
    source_dir: str = "."
    build_command: list[str] = Field(
        default_factory=lambda: ["cargo", "build", "--release", "--lib"]
    )

    platform: HostPlatform | None = None

    @property
    def resolved_prefix(self) -> Path:
        """Keg prefix — ``<homebrew_prefix>/opt/<name>`` unless set."""
        if self.prefix:
            return Path(self.prefix)
        return Path(self.homebrew_prefix) / "opt" / self.name

    @property
    def resolved_install_root(self) -> Path:
        """Directory that receives ``security/<installed_name>``."""
        if self.install_root:
            return Path(self.install_root)
        return self.resolved_prefix / "lib"

    @property
    def installed_path(self) -> Path:
        return self.resolved_install_root / "security" / self.installed_name

    @property
    def crypto_prefix(self) -> str:
        """Installed prefix of the crypto dependency (static archives live here)."""
        return str(Path(self.homebrew_prefix) / "opt" / self.crypto_dependency)
