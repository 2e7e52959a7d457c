"""
Code signing — identity gate, entitlements and codesign (macOS only).

A PAM module loaded by sudo, screensaver or loginwindow must carry a
trusted signature, or the loader rejects it with an opaque error. So a
missing identity is a hard stop with remediation text, and a failed
codesign aborts the install.
"""

from __future__ import annotations

import logging
import plistlib
from pathlib import Path

from pamformula.adapters.base import CommandRunner
from pamformula.core.errors import SigningFailure, SigningIdentityMissing
from pamformula.core.services.caveats import certificate_instructions

logger = logging.getLogger(__name__)

SECURITY = "security"
CODESIGN = "codesign"
ENTITLEMENTS_FILENAME = "pam_ssh_agent.entitlements"

# Fixed, minimal content: codesign only needs a descriptor to exist
ENTITLEMENTS: dict = {}


def identity_query() -> list[str]:
    """Identity-store query: valid identities usable for code signing."""
    return [SECURITY, "find-identity", "-v", "-p", "codesigning"]


def has_signing_identity(identity: str, runner: CommandRunner) -> bool:
    """Whether the keychain holds a valid code-signing identity named ``identity``."""
    result = runner.run(identity_query())
    if result.failed:
        logger.debug("Identity query failed: %s", result.stderr.strip())
        return False
    return f'"{identity}"' in result.stdout


def check_signing_identity(
    identity: str,
    runner: CommandRunner,
    formula_name: str = "pam-ssh-agent",
) -> None:
    """Fail the install unless the signing identity exists.

    Raises:
        SigningIdentityMissing: With the certificate walkthrough attached.
    """
    if has_signing_identity(identity, runner):
        logger.info("Code-signing identity found: %s", identity)
        return
    raise SigningIdentityMissing(
        identity,
        remediation=certificate_instructions(identity, formula_name),
    )


def write_entitlements(scratch_dir: str | Path) -> Path:
    """Write the entitlements plist into ``scratch_dir`` and return its path."""
    path = Path(scratch_dir) / ENTITLEMENTS_FILENAME
    path.write_bytes(plistlib.dumps(ENTITLEMENTS, fmt=plistlib.FMT_XML))
    logger.debug("Wrote entitlements: %s", path)
    return path


def codesign_command(
    path: Path,
    identity: str,
    entitlements: Path | None,
    identifier: str,
) -> list[str]:
    cmd = [
        CODESIGN,
        "--force",
        "--sign", identity,
        "--identifier", identifier,
        "--options", "runtime",
    ]
    if entitlements is not None:
        cmd += ["--entitlements", str(entitlements)]
    cmd.append(str(path))
    return cmd


def sign_artifact(
    path: Path,
    identity: str,
    entitlements: Path | None,
    runner: CommandRunner,
    identifier: str = "pam_ssh_agent",
) -> None:
    """Sign the installed artifact in place with the hardened runtime.

    Raises:
        SigningFailure: If codesign is not on PATH or exits non-zero.
    """
    if not runner.is_available(CODESIGN):
        raise SigningFailure(f"{CODESIGN} not found; cannot sign {path}")
    result = runner.run(codesign_command(path, identity, entitlements, identifier), timeout=None)
    if result.failed:
        raise SigningFailure(f"codesign failed for {path}", stderr=result.stderr)
    logger.info("Signed %s as %s", path, identity)
