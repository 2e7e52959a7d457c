"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from pamformula.adapters.mock import MockRunner
from pamformula.core.models.formula import FormulaConfig
from tests.fakes import IDENTITY


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep host env vars and stray formula.yml files out of tests."""
    for var in ("PAMF_PLATFORM", "PAMF_SIGNING_IDENTITY", "PAMF_INSTALL_ROOT",
                "PAMF_LOG_LEVEL", "PAMF_LOG_FILE", "PAMF_LOG_FILE_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """An unpacked (empty) source tree."""
    src = tmp_path / "src"
    src.mkdir()
    return src


@pytest.fixture
def install_root(tmp_path: Path) -> Path:
    return tmp_path / "prefix" / "lib"


@pytest.fixture
def config(install_root: Path, source_dir: Path) -> FormulaConfig:
    """Formula config installing into a scratch prefix."""
    return FormulaConfig(
        install_root=str(install_root),
        source_dir=str(source_dir),
        signing_identity=IDENTITY,
    )


@pytest.fixture
def runner() -> MockRunner:
    return MockRunner()


@pytest.fixture
def pam_root(tmp_path: Path) -> Path:
    """Empty scratch root for the PAM directory probe."""
    root = tmp_path / "root"
    root.mkdir()
    return root
