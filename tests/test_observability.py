"""
Tests for logging setup.
"""

import logging

import pytest

from pamformula.core.observability.logging_config import (
    configure_logging,
    console_formatter,
    level_from_flags,
    to_level,
)


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestLevelFromFlags:
    def test_debug_wins(self):
        assert level_from_flags(debug=True, verbose=True, quiet=True, environ={}) == logging.DEBUG

    def test_verbose_over_quiet(self):
        assert level_from_flags(verbose=True, quiet=True, environ={}) == logging.INFO

    def test_quiet(self):
        assert level_from_flags(quiet=True, environ={"PAMF_LOG_LEVEL": "DEBUG"}) == logging.ERROR

    def test_env_when_no_flags(self):
        assert level_from_flags(environ={"PAMF_LOG_LEVEL": "info"}) == logging.INFO

    def test_default_warning(self):
        assert level_from_flags(environ={}) == logging.WARNING


class TestToLevel:
    def test_names(self):
        assert to_level("debug") == logging.DEBUG
        assert to_level(" Error ") == logging.ERROR

    def test_unknown_and_empty(self):
        assert to_level("nonsense") == logging.WARNING
        assert to_level("") == logging.WARNING
        assert to_level(None) == logging.WARNING

    def test_number_passthrough(self):
        assert to_level(15) == 15


class TestConsoleFormatter:
    def test_warning_is_bare_message(self):
        assert console_formatter(logging.WARNING)._fmt == "%(message)s"
        assert console_formatter(logging.ERROR)._fmt == "%(message)s"

    def test_debug_names_line(self):
        assert "%(lineno)d" in console_formatter(logging.DEBUG)._fmt

    def test_info_names_logger(self):
        fmt = console_formatter(logging.INFO)._fmt
        assert "%(name)s" in fmt
        assert "%(lineno)d" not in fmt


class TestConfigureLogging:
    def test_console_level(self):
        configure_logging(level="INFO")
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert root.handlers[0].level == logging.INFO

    def test_replaces_previous_handlers(self):
        configure_logging(level="INFO")
        configure_logging(level="ERROR")
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.ERROR

    def test_file_handler_lowers_root(self, tmp_path):
        log_file = tmp_path / "install.log"
        configure_logging(level="WARNING", log_file=str(log_file), log_file_level="DEBUG")
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2
        assert root.handlers[0].level == logging.WARNING
        logging.getLogger("pamformula.test").debug("hello file")
        for h in root.handlers:
            h.flush()
        assert "hello file" in log_file.read_text()

    def test_file_level_defaults_to_console(self, tmp_path):
        log_file = tmp_path / "install.log"
        configure_logging(level="ERROR", log_file=str(log_file))
        root = logging.getLogger()
        assert root.level == logging.ERROR
        assert root.handlers[1].level == logging.ERROR
