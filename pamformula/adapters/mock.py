"""
Mock runner — test double for every external tool invocation.

Returns success for everything by default. Responses can be configured
per program name (``cargo``, ``codesign``, ``security``), and every
invocation is recorded so tests can assert on ordering and arguments.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from pamformula.adapters.base import CommandRunner
from pamformula.core.models.command import CommandResult


@dataclass
class RecordedCall:
    """One invocation seen by the mock."""

    command: list[str]
    env_overrides: dict[str, str] = field(default_factory=dict)
    cwd: str | None = None
    timeout: int | None = None

    @property
    def program(self) -> str:
        return self.command[0] if self.command else ""


class MockRunner(CommandRunner):
    """Universal mock runner for testing."""

    def __init__(self, available: bool = True):
        self._available = available
        self._missing: set[str] = set()
        self._responses: dict[str, CommandResult] = {}
        self._hooks: dict[str, Callable[[RecordedCall], None]] = {}
        self._call_log: list[RecordedCall] = []

    @property
    def name(self) -> str:
        return "mock"

    @property
    def call_log(self) -> list[RecordedCall]:
        """All invocations this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def calls_to(self, program: str) -> list[RecordedCall]:
        """Invocations of a given program, in order."""
        return [c for c in self._call_log if c.program == program]

    def is_available(self, tool: str) -> bool:
        return self._available and tool not in self._missing

    def set_missing(self, program: str) -> None:
        """Make ``program`` look absent from PATH."""
        self._missing.add(program)

    def set_response(self, program: str, result: CommandResult) -> None:
        """Set a custom result for every call to ``program``."""
        self._responses[program] = result

    def set_output(self, program: str, stdout: str = "", stderr: str = "") -> None:
        """Make ``program`` succeed with the given output."""
        self._responses[program] = CommandResult.success(
            command=[program], stdout=stdout, stderr=stderr,
        )

    def set_failure(
        self,
        program: str,
        stderr: str = "mock failure",
        return_code: int = 1,
    ) -> None:
        """Configure ``program`` to exit non-zero."""
        self._responses[program] = CommandResult.failure(
            command=[program],
            error=f"Command exited with code {return_code}",
            return_code=return_code,
            stderr=stderr,
        )

    def on_call(self, program: str, hook: Callable[[RecordedCall], None]) -> None:
        """Run ``hook`` as a side effect whenever ``program`` is invoked.

        Used to simulate tools that write files, e.g. cargo producing
        the shared library.
        """
        self._hooks[program] = hook

    def run(
        self,
        command: list[str],
        *,
        env_overrides: dict[str, str] | None = None,
        cwd: str | None = None,
        timeout: int | None = None,
    ) -> CommandResult:
        call = RecordedCall(
            command=list(command),
            env_overrides=dict(env_overrides or {}),
            cwd=cwd,
            timeout=timeout,
        )
        self._call_log.append(call)

        program = call.program
        if program in self._hooks:
            self._hooks[program](call)

        if program in self._responses:
            return self._responses[program].model_copy(update={"command": list(command)})

        return CommandResult.success(command=list(command), metadata={"mock": True})

    def reset(self) -> None:
        """Clear call log, hooks and custom responses."""
        self._call_log.clear()
        self._responses.clear()
        self._hooks.clear()
        self._missing.clear()
