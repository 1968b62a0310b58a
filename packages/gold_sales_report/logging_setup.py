"""Logging configuration for the ``gold_sales_report`` CLI.

Library modules log through ``logging.getLogger(__name__)`` and never attach
handlers; the package root carries a ``NullHandler`` until the CLI calls
:func:`configure_logging`.
"""

from __future__ import annotations

import logging
import os

PKG_LOGGER_NAME = "gold_sales_report"
LEVEL_ENV_VAR = "GOLD_SALES_REPORT_LOG_LEVEL"
_HANDLER_NAME = "gold_sales_report.stderr"


def resolve_level(level: str | None = None) -> int:
    """Map a level name to its number.

    ``level`` wins over ``GOLD_SALES_REPORT_LOG_LEVEL``; with neither set the
    level is ``INFO``. Raises ``ValueError`` for unknown names.
    """

    name = (level or os.getenv(LEVEL_ENV_VAR) or "INFO").strip().upper()
    numeric = logging.getLevelNamesMapping().get(name)
    if numeric is None:
        raise ValueError(f"unknown log level: {name!r}")
    return numeric


def configure_logging(level: str | None = None) -> None:
    """Send package log records to stderr at ``level``.

    Repeated calls only adjust the level.
    """

    logger = logging.getLogger(PKG_LOGGER_NAME)
    logger.setLevel(resolve_level(level))
    if any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        return

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
