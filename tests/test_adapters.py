"""
Tests for command runners — mock and subprocess.
"""

import os
import sys
from pathlib import Path

from pamformula.adapters import MockRunner, SubprocessRunner
from pamformula.core.models.command import CommandResult

# ── Mock Runner Tests ───────────────────────────────────────────────


class TestMockRunner:
    def test_default_success(self):
        mock = MockRunner()
        result = mock.run(["cargo", "build"])
        assert result.ok
        assert mock.call_count == 1

    def test_custom_response(self):
        mock = MockRunner()
        mock.set_response("security", CommandResult.success(command=["security"], stdout="x"))
        result = mock.run(["security", "find-identity"])
        assert result.stdout == "x"
        assert result.command == ["security", "find-identity"]

    def test_set_failure(self):
        mock = MockRunner()
        mock.set_failure("cargo", stderr="error[E0432]: unresolved import", return_code=101)
        result = mock.run(["cargo", "build"])
        assert result.failed
        assert result.return_code == 101
        assert "E0432" in result.stderr

    def test_call_log_records_env_and_cwd(self):
        mock = MockRunner()
        mock.run(["cargo", "build"], env_overrides={"A": "1"}, cwd="/src")
        call = mock.call_log[0]
        assert call.program == "cargo"
        assert call.env_overrides == {"A": "1"}
        assert call.cwd == "/src"

    def test_calls_to(self):
        mock = MockRunner()
        mock.run(["security", "find-identity"])
        mock.run(["codesign", "-dv", "x"])
        mock.run(["codesign", "--force", "x"])
        assert len(mock.calls_to("codesign")) == 2

    def test_hook(self, tmp_path: Path):
        mock = MockRunner()
        mock.on_call("cargo", lambda call: (tmp_path / "built").write_text("x"))
        mock.run(["cargo", "build"])
        assert (tmp_path / "built").exists()

    def test_reset(self):
        mock = MockRunner()
        mock.set_failure("cargo")
        mock.run(["cargo"])
        mock.reset()
        assert mock.call_count == 0
        assert mock.run(["cargo"]).ok

    def test_is_available(self):
        assert MockRunner(available=True).is_available("cargo")
        assert not MockRunner(available=False).is_available("cargo")

    def test_set_missing_is_per_tool(self):
        mock = MockRunner()
        mock.set_missing("codesign")
        assert not mock.is_available("codesign")
        assert mock.is_available("cargo")
        mock.reset()
        assert mock.is_available("codesign")


# ── Subprocess Runner Tests ─────────────────────────────────────────


class TestSubprocessRunner:
    def test_is_available(self):
        runner = SubprocessRunner()
        assert runner.name == "shell"
        assert runner.is_available(Path(sys.executable).name) or runner.is_available("sh")
        assert not runner.is_available("definitely-not-a-real-tool-xyz")

    def test_success(self, tmp_path: Path):
        runner = SubprocessRunner()
        result = runner.run([sys.executable, "-c", "print('hello world')"], cwd=str(tmp_path))
        assert result.ok
        assert "hello world" in result.stdout

    def test_nonzero_exit(self):
        runner = SubprocessRunner()
        result = runner.run(
            [sys.executable, "-c", "import sys; sys.stderr.write('bad'); sys.exit(3)"]
        )
        assert result.failed
        assert result.return_code == 3
        assert "bad" in result.stderr

    def test_env_overrides_do_not_leak(self):
        runner = SubprocessRunner()
        result = runner.run(
            [sys.executable, "-c", "import os; print(os.environ['OPENSSL_STATIC'])"],
            env_overrides={"OPENSSL_STATIC": "1"},
        )
        assert result.ok
        assert result.stdout.strip() == "1"
        assert "OPENSSL_STATIC" not in os.environ

    def test_missing_executable(self):
        runner = SubprocessRunner()
        result = runner.run(["definitely-not-a-real-tool-xyz"])
        assert result.failed
        assert result.return_code is None
        assert "execution error" in result.error
