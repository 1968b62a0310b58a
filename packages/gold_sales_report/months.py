"""Report month keys.

A report month is the canonical ``"Mon YYYY"`` string for a timestamp (e.g.
``"Mar 2020"``). It is the grouping key for aggregation and, parsed back, the
ordering key for the report.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime

logger = logging.getLogger(__name__)

REPORT_MONTH_FORMAT = "%b %Y"

type ReportMonth = str
"""Canonical ``"Mon YYYY"`` key; see :func:`report_month`."""


def report_month(ts: datetime) -> ReportMonth:
    """Return the report month for ``ts``; day and time are discarded."""

    return ts.strftime(REPORT_MONTH_FORMAT)


def parse_report_month(month: str) -> datetime:
    """Parse a ``"Mon YYYY"`` key back to the first instant of that month.

    Raises ``ValueError`` when ``month`` is not in canonical form.
    """

    return datetime.strptime(month, REPORT_MONTH_FORMAT)


def month_sort_key(month: str) -> datetime:
    """Recency key for ``month``.

    Unparsable keys sort as the oldest possible month.
    """

    try:
        return parse_report_month(month)
    except ValueError:
        logger.warning("Unparsable report month %r; ordering it last", month)
        return datetime.min


def order_months(months: Iterable[str]) -> list[str]:
    """Return ``months`` most recent first.

    Unparsable keys come last, in their original relative order.
    """

    return sorted(months, key=month_sort_key, reverse=True)


__all__ = [
    "REPORT_MONTH_FORMAT",
    "ReportMonth",
    "month_sort_key",
    "order_months",
    "parse_report_month",
    "report_month",
]
