"""
Artifact installer — place the built library at its canonical path.

Whatever the host's shared-library extension, the installed file is
always ``<root>/security/<installed_name>`` because PAM's loader only
looks for ``.so`` modules.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path

from pamformula.core.errors import InstallFailure

logger = logging.getLogger(__name__)


def install_artifact(
    artifact: Path,
    install_root: str | Path,
    target_name: str = "pam_ssh_agent.so",
) -> Path:
    """Copy ``artifact`` into ``<install_root>/security/<target_name>``.

    Raises:
        InstallFailure: If the build reported success but left no artifact.
    """
    if not artifact.is_file():
        raise InstallFailure(
            f"Build succeeded but produced no artifact at {artifact}"
        )

    target_dir = Path(install_root) / "security"
    target_dir.mkdir(parents=True, exist_ok=True)
    target = target_dir / target_name

    # Copy next to the target, then rename into place
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target_name}.", dir=target_dir)
    os.close(fd)
    try:
        shutil.copy2(artifact, tmp_name)
        os.replace(tmp_name, target)
    except OSError:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.info("Installed %s → %s", artifact.name, target)
    return target
