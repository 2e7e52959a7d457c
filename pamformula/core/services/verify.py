"""
Install verifier — post-install checks.

Two distinct outcomes: the artifact is missing (the install did not
happen) or it is present but its signature does not match (built but
wrongly signed). They are reported separately and neither removes the
installed file.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from pamformula.adapters.base import CommandRunner
from pamformula.core.errors import InstallFailure, VerificationFailure
from pamformula.core.services.signing import CODESIGN

logger = logging.getLogger(__name__)

_FIELD_RE = re.compile(r"^(?P<key>[A-Za-z ]+)=(?P<value>.*)$")


@dataclass
class SignatureInfo:
    """Fields parsed from ``codesign --display --verbose=4``."""

    identifier: str | None = None
    authorities: list[str] = field(default_factory=list)
    flags: str | None = None

    @property
    def authority(self) -> str | None:
        """Leaf signing authority (first in the chain)."""
        return self.authorities[0] if self.authorities else None

    @property
    def hardened_runtime(self) -> bool:
        return self.flags is not None and "runtime" in self.flags


@dataclass
class VerificationResult:
    """Outcome of verifying an installed artifact."""

    path: Path
    exists: bool = False
    signature_checked: bool = False
    signature: SignatureInfo | None = None
    mismatches: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.exists and not self.mismatches

    def raise_for_status(self) -> None:
        """Raise InstallFailure or VerificationFailure for a bad result."""
        if not self.exists:
            raise InstallFailure(f"Installed module not found at {self.path}")
        if self.mismatches:
            raise VerificationFailure(self.mismatches)

    def to_dict(self) -> dict:
        return {
            "path": str(self.path),
            "ok": self.ok,
            "exists": self.exists,
            "signature_checked": self.signature_checked,
            "identifier": self.signature.identifier if self.signature else None,
            "authority": self.signature.authority if self.signature else None,
            "hardened_runtime": self.signature.hardened_runtime if self.signature else None,
            "mismatches": self.mismatches,
        }


def parse_codesign_display(output: str) -> SignatureInfo:
    """Parse ``key=value`` lines printed by ``codesign -dv``."""
    info = SignatureInfo()
    for line in output.splitlines():
        m = _FIELD_RE.match(line.strip())
        if not m:
            continue
        key, value = m.group("key"), m.group("value").strip()
        if key == "Identifier":
            info.identifier = value
        elif key == "Authority":
            info.authorities.append(value)
        elif key == "CodeDirectory v":
            # "CodeDirectory v=20500 size=.. flags=0x10000(runtime) ..."
            flags = re.search(r"flags=(\S+)", value)
            info.flags = flags.group(1) if flags else None
    return info


def check_exists(path: Path) -> VerificationResult:
    result = VerificationResult(path=path, exists=path.is_file())
    if not result.exists:
        logger.warning("Installed module missing: %s", path)
    return result


def check_signature(
    result: VerificationResult,
    runner: CommandRunner,
    expected_identifier: str,
    expected_authority: str,
) -> VerificationResult:
    """Compare identifier, leaf authority and runtime flag to what the signer set."""
    if not result.exists:
        return result

    cmd = [CODESIGN, "--display", "--verbose=4", str(result.path)]
    out = runner.run(cmd)
    result.signature_checked = True

    if out.failed:
        result.mismatches.append(
            f"codesign could not read a signature: {out.stderr.strip() or out.error}"
        )
        return result

    # codesign writes its display output to stderr
    info = parse_codesign_display(out.stderr + "\n" + out.stdout)
    result.signature = info

    if info.identifier != expected_identifier:
        result.mismatches.append(
            f"identifier is {info.identifier!r}, expected {expected_identifier!r}"
        )
    if info.authority != expected_authority:
        result.mismatches.append(
            f"authority is {info.authority!r}, expected {expected_authority!r}"
        )
    if not info.hardened_runtime:
        result.mismatches.append(f"hardened runtime not enabled (flags={info.flags})")

    if result.mismatches:
        logger.warning("Signature mismatch on %s: %s", result.path, result.mismatches)
    return result
