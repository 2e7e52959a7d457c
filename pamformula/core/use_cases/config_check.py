"""
Config check use case — validate formula.yml and report issues.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from pamformula.core.config.loader import ConfigError, find_formula_file, load_formula
from pamformula.core.models.formula import FormulaConfig

_SHA256_RE = re.compile(r"^[0-9a-f]{64}$")


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    config: FormulaConfig | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "formula": self.config.name if self.config else None,
            "version": self.config.version if self.config else None,
            "installed_path": str(self.config.installed_path) if self.config else None,
        }


def check_config(
    config_path: Path | None = None,
    environ: dict[str, str] | None = None,
) -> ConfigCheckResult:
    """Validate formula configuration and report issues."""
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_formula_file()
    result.config_path = config_path

    try:
        config = load_formula(config_path, environ=environ)
        result.config = config
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    if config_path is None:
        result.warnings.append("No formula.yml found, using built-in defaults.")

    if not config.build_command:
        result.errors.append("build_command is empty.")

    if not config.signing_identity.strip():
        result.errors.append("signing_identity is empty; macOS installs cannot be signed.")

    if not config.installed_name.endswith(".so"):
        result.errors.append(
            f"installed_name '{config.installed_name}' must end in .so for the PAM loader."
        )

    if not _SHA256_RE.match(config.sha256):
        result.warnings.append("sha256 is not a 64-character hex digest.")

    if not config.resolved_install_root.is_absolute():
        result.warnings.append(
            f"install_root '{config.resolved_install_root}' is relative; "
            "PAM configuration needs an absolute path."
        )

    result.valid = not result.errors
    return result
