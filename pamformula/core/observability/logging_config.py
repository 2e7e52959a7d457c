"""
Logging for the pamformula CLI.

``configure_logging`` runs once per process from the click group. Modules
log through ``logging.getLogger(__name__)`` and never add handlers.

The console level comes from ``level_from_flags``:
``--debug`` > ``--verbose`` > ``--quiet`` > ``PAMF_LOG_LEVEL`` > WARNING.
``PAMF_LOG_FILE`` adds a file log at ``PAMF_LOG_FILE_LEVEL``.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

DEFAULT_LEVEL = logging.WARNING

# (lowest level the format applies to, format, datefmt), most detailed first.
_CONSOLE_FORMATS: tuple[tuple[int, str, str | None], ...] = (
    (logging.DEBUG, "%(asctime)s %(levelname)s %(name)s:%(lineno)d: %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s %(name)s: %(message)s", "%H:%M:%S"),
    (logging.WARNING, "%(message)s", None),
)

_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s:%(lineno)d: %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def level_from_flags(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Console level for the global CLI flags."""
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    if quiet:
        return logging.ERROR
    env = os.environ if environ is None else environ
    return to_level(env.get("PAMF_LOG_LEVEL"))


def to_level(name: str | int | None) -> int:
    """Level number for ``name``; unknown or empty names give WARNING."""
    if isinstance(name, int):
        return name
    if not name:
        return DEFAULT_LEVEL
    value = logging.getLevelName(name.strip().upper())
    return value if isinstance(value, int) else DEFAULT_LEVEL


def console_formatter(level: int) -> logging.Formatter:
    for threshold, fmt, datefmt in _CONSOLE_FORMATS:
        if level <= threshold:
            return logging.Formatter(fmt, datefmt=datefmt)
    return logging.Formatter(_CONSOLE_FORMATS[-1][1])


def configure_logging(
    level: str | int = DEFAULT_LEVEL,
    log_file: str | None = None,
    log_file_level: str | int | None = None,
) -> None:
    """Replace the root handlers with a stderr handler and an optional file.

    The root logger sits at the lower of the two handler levels so a
    DEBUG file log still receives records while the console stays at
    WARNING.
    """
    console_level = to_level(level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(console_formatter(console_level))

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.addHandler(console)

    root_level = console_level
    if log_file:
        file_level = to_level(log_file_level) if log_file_level else console_level
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
        root.addHandler(file_handler)
        root_level = min(root_level, file_level)

    root.setLevel(root_level)
