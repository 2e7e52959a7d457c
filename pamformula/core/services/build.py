"""
Build invoker — run the toolchain once, in release mode, library only.

The only long-running step of an install. It blocks until the toolchain
exits; a non-zero exit aborts the install with the tool's own
diagnostics.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pamformula.adapters.base import CommandRunner
from pamformula.core.errors import BuildFailure
from pamformula.core.models.formula import FormulaConfig
from pamformula.core.models.link import LinkDirective
from pamformula.core.models.platform import HostPlatform
from pamformula.core.services.platform_probe import shared_library_name

logger = logging.getLogger(__name__)

RELEASE_DIR = Path("target") / "release"


def artifact_path(source_dir: str | Path, host: HostPlatform, module_name: str) -> Path:
    """Where the toolchain leaves the shared library for ``host``."""
    return Path(source_dir) / RELEASE_DIR / shared_library_name(host, module_name)


def run_build(
    source_dir: str | Path,
    directive: LinkDirective,
    runner: CommandRunner,
    host: HostPlatform,
    config: FormulaConfig,
) -> Path:
    """Build the module and return the expected artifact path.

    Raises:
        BuildFailure: If the toolchain is not on PATH or exits non-zero.
    """
    command = list(config.build_command)
    if not command:
        raise BuildFailure("build_command is empty")
    if not runner.is_available(command[0]):
        raise BuildFailure(f"Build tool not found: {command[0]}")
    logger.info("Building %s: %s", config.module_name, " ".join(command))

    result = runner.run(
        command,
        env_overrides=directive.to_env(),
        cwd=str(source_dir),
        timeout=None,
    )
    if result.failed:
        raise BuildFailure(
            result.error or "Build failed",
            stderr=result.stderr,
            return_code=result.return_code,
        )

    artifact = artifact_path(source_dir, host, config.module_name)
    logger.info("Build finished in %dms → %s", result.duration_ms, artifact)
    return artifact
