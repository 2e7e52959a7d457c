"""
LinkDirective — how the build should link native dependencies.

Produced once by the link-mode selector and handed to the build as an
explicit parameter. Never written into the process environment.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

# Environment names understood by the openssl-sys / libssh2-sys build scripts
STATIC_LINK_ENV = ("OPENSSL_STATIC", "LIBSSH2_STATIC")
CRYPTO_PREFIX_ENV = "OPENSSL_DIR"


class LinkDirective(BaseModel):
    """Install-time linking knobs for the build step."""

    model_config = ConfigDict(frozen=True)

    static_link: bool = False
    crypto_prefix: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.static_link and not self.crypto_prefix

    def knobs(self) -> dict[str, bool | str | None]:
        """The recognised knobs, by their documented names."""
        return {
            "static-link": self.static_link,
            "crypto-prefix": self.crypto_prefix,
        }

    def to_env(self) -> dict[str, str]:
        """Render as environment overrides for the toolchain invocation."""
        env: dict[str, str] = {}
        if self.static_link:
            for name in STATIC_LINK_ENV:
                env[name] = "1"
        if self.crypto_prefix:
            env[CRYPTO_PREFIX_ENV] = self.crypto_prefix
        return env
