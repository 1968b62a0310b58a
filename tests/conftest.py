"""Pytest configuration for test isolation.

CLI options fall back to ``GOLD_*`` environment variables and to a ``.env``
in the working directory. To keep tests hermetic, every test starts with
those variables unset and runs inside its own temporary directory, and the
stderr handler the CLI attaches to the package logger is removed afterwards.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from gold_sales_report.logging_setup import PKG_LOGGER_NAME

_ENV_VARS = (
    "GOLD_NUM_TOP_SPENDERS",
    "GOLD_NUM_MONTHS",
    "GOLD_INPUT_FILENAME",
    "GOLD_OUTPUT_FILENAME",
    "GOLD_SALES_REPORT_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        # setenv first so monkeypatch also rolls back values loaded from .env
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    yield
    logger = logging.getLogger(PKG_LOGGER_NAME)
    for h in list(logger.handlers):
        if not isinstance(h, logging.NullHandler):
            logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
