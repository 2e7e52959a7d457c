"""
Link mode selection — static or dynamic native dependencies.

On macOS the module is loaded into SIP-protected processes that
enforce library validation, so it must not depend on Homebrew dylibs.
Elsewhere dynamic linking against system libraries is fine.
"""

from __future__ import annotations

import logging

from pamformula.core.models.link import LinkDirective
from pamformula.core.models.platform import HostPlatform

logger = logging.getLogger(__name__)


def select_link_directive(
    host: HostPlatform,
    crypto_prefix: str | None = None,
) -> LinkDirective:
    """Decide how the build links its SSH/crypto dependency chain."""
    if host is HostPlatform.MACOS:
        directive = LinkDirective(static_link=True, crypto_prefix=crypto_prefix)
    else:
        directive = LinkDirective()

    logger.debug("Link directive for %s: %s", host.value, directive.knobs())
    return directive
