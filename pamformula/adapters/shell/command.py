"""
Shell command runner — execute external tools and capture output.

The single place where ``subprocess.run`` is called. Environment
overrides are merged into a copy of the current environment, so the
process environment is never mutated.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time

from pamformula.adapters.base import CommandRunner
from pamformula.core.models.command import CommandResult

logger = logging.getLogger(__name__)


class SubprocessRunner(CommandRunner):
    """Run commands with ``subprocess.run`` and capture output."""

    @property
    def name(self) -> str:
        return "shell"

    def is_available(self, tool: str) -> bool:
        return shutil.which(tool) is not None

    def run(
        self,
        command: list[str],
        *,
        env_overrides: dict[str, str] | None = None,
        cwd: str | None = None,
        timeout: int | None = None,
    ) -> CommandResult:
        env = os.environ.copy()
        if env_overrides:
            env.update(env_overrides)
            logger.debug("Env overrides: %s", env_overrides)

        logger.debug("Executing: %s (cwd=%s)", " ".join(command), cwd)
        start = time.monotonic()

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=timeout,
                env=env,
                cwd=cwd,
            )
        except subprocess.TimeoutExpired:
            return CommandResult.failure(
                command=command,
                error=f"Command timed out after {timeout}s",
                return_code=None,
            )
        except OSError as e:
            # Missing executable, bad cwd, permission denied
            return CommandResult.failure(
                command=command,
                error=f"Command execution error: {e}",
                return_code=None,
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        stdout = result.stdout or ""
        stderr = result.stderr or ""

        if result.returncode == 0:
            return CommandResult.success(
                command=command,
                stdout=stdout,
                stderr=stderr,
                duration_ms=elapsed_ms,
            )

        return CommandResult.failure(
            command=command,
            error=f"Command exited with code {result.returncode}",
            return_code=result.returncode,
            stderr=stderr,
            stdout=stdout,
            duration_ms=elapsed_ms,
        )
