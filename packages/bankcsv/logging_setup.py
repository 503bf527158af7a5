"""Logging for the ``bankcsv`` package.

The CLI calls :func:`configure_logging` once at startup; library modules only
ever call :func:`get_logger`. Records go to stderr so they never interleave
with a ledger written to stdout.
"""

from __future__ import annotations

import logging
import os
import sys

LEVEL_ENV_VAR = "BANKCSV_LOG_LEVEL"

_PKG_LOGGER_NAME = "bankcsv"
_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
_CONFIGURED = False


def resolve_level(level: str | None = None) -> int:
    """Map a level name to its number.

    ``level`` wins over ``BANKCSV_LOG_LEVEL``; with neither set the level is
    INFO. An unknown name raises ``ValueError``.
    """

    name = level if level is not None else os.getenv(LEVEL_ENV_VAR, "")
    name = name.strip().upper()
    if not name:
        return logging.INFO
    numeric = logging.getLevelNamesMapping().get(name)
    if numeric is None:
        choices = ", ".join(sorted(logging.getLevelNamesMapping()))
        raise ValueError(f"unknown log level {name!r} (expected one of {choices})")
    return numeric


def configure_logging(level: str | None = None) -> None:
    """Send ``bankcsv`` records at ``level`` and above to stderr. Runs once."""

    global _CONFIGURED
    if _CONFIGURED:
        return

    resolved = resolve_level(level)
    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(resolved)
    logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger by name, silent until the application configures one."""

    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["LEVEL_ENV_VAR", "configure_logging", "get_logger", "resolve_level"]
