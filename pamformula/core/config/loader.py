"""
Configuration loader — reads formula.yml into a FormulaConfig.

It reads YAML, validates it against the pydantic schema, then applies
``PAMF_*`` environment overrides. A missing file is not an error: the
built-in defaults describe the upstream formula.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml

from pamformula.core.models.formula import FormulaConfig
from pamformula.core.models.platform import HostPlatform

logger = logging.getLogger(__name__)

# Default config filename
FORMULA_CONFIG_FILE = "formula.yml"

# Environment variable → config field
_ENV_OVERRIDES = {
    "PAMF_PLATFORM": "platform",
    "PAMF_SIGNING_IDENTITY": "signing_identity",
    "PAMF_INSTALL_ROOT": "install_root",
}


class ConfigError(Exception):
    """Raised when formula configuration is invalid or unreadable."""


def find_formula_file(start_dir: Path | None = None) -> Path | None:
    """Search for formula.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to formula.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / FORMULA_CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_formula(
    path: Path | None = None,
    environ: dict[str, str] | None = None,
) -> FormulaConfig:
    """Load and validate formula configuration.

    Args:
        path: Explicit path to formula.yml. If None, searches upward;
            if nothing is found, defaults are used.
        environ: Environment mapping for overrides (default: os.environ).

    Returns:
        Validated FormulaConfig.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    explicit = path is not None
    if path is None:
        path = find_formula_file()

    data: dict = {}
    if path is not None:
        if not path.is_file():
            if explicit:
                raise ConfigError(f"Config file not found: {path}")
        else:
            data = _read_yaml(path)

    env = os.environ if environ is None else environ
    for var, field_name in _ENV_OVERRIDES.items():
        value = env.get(var)
        if value:
            logger.debug("Override %s from %s", field_name, var)
            data[field_name] = value

    if isinstance(data.get("platform"), str):
        try:
            data["platform"] = HostPlatform.parse(data["platform"])
        except ValueError as e:
            raise ConfigError(f"Unknown platform: {data['platform']!r}") from e

    try:
        config = FormulaConfig.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid formula configuration: {e}") from e

    logger.info("Loaded formula '%s' %s", config.name, config.version)
    return config


def _read_yaml(path: Path) -> dict:
    logger.debug("Loading formula config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap everything under a "formula" key or be flat
    if isinstance(data.get("formula"), dict):
        return dict(data["formula"])
    return data
