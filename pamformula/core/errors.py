"""
Install errors — the failure taxonomy of a formula install.

Every stage of the pipeline raises one of these. Nothing is retried:
each error is terminal for the current install attempt, and the CLI
maps them to distinct exit codes.
"""

from __future__ import annotations


class PamFormulaError(Exception):
    """Base class for all install-pipeline failures."""


class BuildFailure(PamFormulaError):
    """The toolchain exited non-zero."""

    def __init__(self, message: str, stderr: str = "", return_code: int | None = None):
        super().__init__(message)
        self.stderr = stderr
        self.return_code = return_code

    def __str__(self) -> str:
        base = super().__str__()
        if self.stderr:
            return f"{base}\n{self.stderr}"
        return base


class InstallFailure(PamFormulaError):
    """The expected artifact is missing (after build or after install)."""


class SigningIdentityMissing(PamFormulaError):
    """No trusted code-signing identity with the configured name exists.

    Carries the remediation walkthrough so the operator knows exactly
    which manual step unblocks the install.
    """

    def __init__(self, identity: str, remediation: str):
        super().__init__(
            f"Code-signing identity '{identity}' not found in the keychain."
        )
        self.identity = identity
        self.remediation = remediation


class SigningFailure(PamFormulaError):
    """codesign rejected the installed artifact."""

    def __init__(self, message: str, stderr: str = ""):
        super().__init__(message)
        self.stderr = stderr

    def __str__(self) -> str:
        base = super().__str__()
        if self.stderr:
            return f"{base}\n{self.stderr}"
        return base


class VerificationFailure(PamFormulaError):
    """Installed artifact exists but its signature does not match."""

    def __init__(self, mismatches: list[str]):
        super().__init__("Verification failed: " + "; ".join(mismatches))
        self.mismatches = list(mismatches)
