"""
Logging configuration — one root setup for the ``stencil`` CLI.

Library code only ever does ``logger = logging.getLogger(__name__)``;
handlers are attached here, once, by ``main.cli``.

Console level, highest precedence first:
    --debug / --verbose / --quiet  >  STENCIL_LOG_LEVEL  >  WARNING

STENCIL_LOG_FILE adds a file handler, at STENCIL_LOG_FILE_LEVEL or the
console level.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

ENV_LEVEL = "STENCIL_LOG_LEVEL"
ENV_FILE = "STENCIL_LOG_FILE"
ENV_FILE_LEVEL = "STENCIL_LOG_FILE_LEVEL"

# level threshold → (format, datefmt); first threshold >= level wins
_CONSOLE_FORMATS: tuple[tuple[int, str, str | None], ...] = (
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
    (logging.CRITICAL, "%(levelname)s: %(message)s", None),
)

_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Template engine internals are only interesting under --debug
_NOISY_LOGGERS = ("jinja2",)


def resolve_level(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Pick the console level name from CLI flags, then the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    env = os.environ if environ is None else environ
    return env.get(ENV_LEVEL) or "WARNING"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
    quiet_third_party: bool = True,
) -> None:
    """Attach console (and optional file) handlers to the root logger.

    Args:
        level: Console level name. Unknown names mean WARNING.
        log_file: Optional log file path.
        log_file_level: Level for the file. Defaults to ``level``.
        quiet_third_party: Hold ``_NOISY_LOGGERS`` at WARNING unless the
            console is at DEBUG.
    """
    console_level = _parse_level(level)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_console_handler(console_level))
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setLevel(file_level)
        handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
        root.addHandler(handler)
        root_level = min(root_level, file_level)

    root.setLevel(root_level)

    if quiet_third_party and console_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def setup_from_env(level: str, debug: bool = False, environ: Mapping[str, str] | None = None) -> None:
    """``setup_logging`` with the file settings read from the environment."""
    env = os.environ if environ is None else environ
    setup_logging(
        level=level,
        log_file=env.get(ENV_FILE),
        log_file_level=env.get(ENV_FILE_LEVEL),
        quiet_third_party=not debug,
    )


def _console_handler(level: int) -> logging.Handler:
    _, fmt, datefmt = _CONSOLE_FORMATS[-1]
    for threshold, f, d in _CONSOLE_FORMATS:
        if level <= threshold:
            fmt, datefmt = f, d
            break
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return handler


def _parse_level(level: str | None) -> int:
    """Level name → numeric level, WARNING when unknown."""
    numeric = getattr(logging, level.upper(), None) if level else None
    return numeric if isinstance(numeric, int) else logging.WARNING
