"""Pytest configuration for test isolation.

``configure_logging`` runs once per process and detaches the ``bankcsv`` logger
from the root logger. CLI tests call it, which would hide later records from
``caplog``. The autouse fixture below snapshots and restores the package
logger around every test so each one starts unconfigured.
"""

from __future__ import annotations

import logging

import pytest

from bankcsv import logging_setup


@pytest.fixture(autouse=True)
def _isolate_logging(monkeypatch: pytest.MonkeyPatch):
    logger = logging.getLogger("bankcsv")
    handlers = list(logger.handlers)
    propagate = logger.propagate
    level = logger.level
    monkeypatch.setattr(logging_setup, "_CONFIGURED", False)
    # setenv first so a value loaded from a test .env is rolled back too
    monkeypatch.setenv("BANKCSV_LOG_LEVEL", "")
    monkeypatch.delenv("BANKCSV_LOG_LEVEL")
    yield
    logger.handlers[:] = handlers
    logger.propagate = propagate
    logger.setLevel(level)
