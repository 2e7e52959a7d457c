"""
Runner base — the contract between install stages and external tools.

Stages never call subprocess directly; they go through a CommandRunner.
That keeps cargo, codesign and security swappable for tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pamformula.core.models.command import CommandResult


class CommandRunner(ABC):
    """Abstract base class for command runners.

    Runners perform external side effects and return results.
    They NEVER raise on a failing tool — failures are captured in the
    CommandResult and the caller decides what they mean.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The runner identifier (e.g., 'shell', 'mock')."""

    @abstractmethod
    def is_available(self, tool: str) -> bool:
        """Check whether an external tool can be invoked.

        Should be fast and never raise.
        """

    @abstractmethod
    def run(
        self,
        command: list[str],
        *,
        env_overrides: dict[str, str] | None = None,
        cwd: str | None = None,
        timeout: int | None = None,
    ) -> CommandResult:
        """Run ``command`` to completion and return its result.

        ``timeout=None`` blocks until the tool exits. Interrupts are
        left to the tool itself.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
