"""
CommandResult — the receipt of one external tool invocation.

Runners never raise on tool failure. The exit status is captured here
and the calling stage decides which install error it maps to.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class CommandResult(BaseModel):
    """Outcome of running an external command."""

    command: list[str]
    status: Literal["ok", "failed"] = "ok"
    return_code: int | None = 0
    stdout: str = ""
    stderr: str = ""
    error: str | None = None
    duration_ms: int = 0
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @classmethod
    def success(
        cls,
        command: list[str],
        stdout: str = "",
        stderr: str = "",
        **kwargs: Any,
    ) -> CommandResult:
        """Create a success result."""
        return cls(
            command=command,
            status="ok",
            return_code=0,
            stdout=stdout,
            stderr=stderr,
            **kwargs,
        )

    @classmethod
    def failure(
        cls,
        command: list[str],
        error: str,
        return_code: int | None = 1,
        stderr: str = "",
        **kwargs: Any,
    ) -> CommandResult:
        """Create a failure result."""
        return cls(
            command=command,
            status="failed",
            return_code=return_code,
            error=error,
            stderr=stderr,
            **kwargs,
        )
