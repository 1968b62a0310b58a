"""Public interface for the ``gold_sales_report`` package.

Symbol re-exports and a ``NullHandler`` on the package logger; see
:mod:`gold_sales_report.analysis` for the aggregation and ranking pipeline.
"""

import logging

from .analysis import (
    AnalysisError,
    AnalysisService,
    SpenderTotalsByMonth,
    group_total_spends_by_month,
    monthly_spenders,
    rank_spenders,
)
from .ingest import (
    CSVLedgerRepository,
    InMemoryLedgerRepository,
    LedgerRepository,
    LedgerRepositoryError,
)
from .models import GOLD_CURRENCY_CODE, GOLD_SPEND, GoldPayment, MonthlySpend, Spender
from .months import ReportMonth, parse_report_month, report_month
from .reports import DuplicateMonthError, MonthlyTopSpendersReport
from .settings import ReportSettings

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Analysis
    "AnalysisError",
    "AnalysisService",
    "SpenderTotalsByMonth",
    "group_total_spends_by_month",
    "monthly_spenders",
    "rank_spenders",
    # Ingestion
    "CSVLedgerRepository",
    "InMemoryLedgerRepository",
    "LedgerRepository",
    "LedgerRepositoryError",
    # Models / reports
    "GOLD_CURRENCY_CODE",
    "GOLD_SPEND",
    "GoldPayment",
    "MonthlySpend",
    "Spender",
    "ReportMonth",
    "parse_report_month",
    "report_month",
    "DuplicateMonthError",
    "MonthlyTopSpendersReport",
    "ReportSettings",
]
