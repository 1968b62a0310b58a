"""Top spenders analysis: aggregation, ranking and the service that ties them.

Flow
----
1. ``group_spends_by_spender``: partition payments by spender.
2. ``spender_totals_by_month``: within each spender, partition by report month
   and sum ``gram_weight`` (plain float addition, no rounding).
3. ``group_total_spends_by_month``: flatten to ``month -> [MonthlySpend]``.
4. ``monthly_spenders``: rank each month and add it to a report.

Ordering never depends on incidental mapping order: months are visited most
recent first and spenders are ranked by total descending. Ties keep the order
in which spenders first appear in the ledger.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence

from .ingest.repository import LedgerRepository, LedgerRepositoryError
from .models import GoldPayment, MonthlySpend, Spender
from .months import ReportMonth, order_months, report_month
from .reports import MonthlyTopSpendersReport

logger = logging.getLogger(__name__)


class AnalysisError(Exception):
    """The analysis could not be performed."""


class SpenderTotalsByMonth:
    """Spender totals indexed by report month.

    ``insert`` only stores the first total seen for a ``(month, spender)``
    pair; later inserts for the same pair are ignored.
    """

    def __init__(self) -> None:
        self._totals: dict[ReportMonth, dict[Spender, MonthlySpend]] = {}

    def insert(self, month: ReportMonth, monthly_spend: MonthlySpend) -> bool:
        """Store ``monthly_spend`` under ``month`` if absent; return whether stored."""

        spenders = self._totals.setdefault(month, {})
        if monthly_spend.spender in spenders:
            return False
        spenders[monthly_spend.spender] = monthly_spend
        return True

    def get(self, month: ReportMonth, spender: Spender) -> MonthlySpend | None:
        return self._totals.get(month, {}).get(spender)

    def months(self) -> list[ReportMonth]:
        return list(self._totals)

    def spenders_in(self, month: ReportMonth) -> list[MonthlySpend]:
        return list(self._totals.get(month, {}).values())

    def __contains__(self, month: object) -> bool:
        return month in self._totals

    def __iter__(self) -> Iterator[ReportMonth]:
        return iter(self._totals)

    def __len__(self) -> int:
        return len(self._totals)


def group_spends_by_spender(
    payments: Iterable[GoldPayment],
) -> dict[Spender, list[GoldPayment]]:
    spends: dict[Spender, list[GoldPayment]] = {}
    for payment in payments:
        spends.setdefault(payment.spender, []).append(payment)
    return spends


def spender_totals_by_month(
    spends_by_spender: Mapping[Spender, Sequence[GoldPayment]],
) -> SpenderTotalsByMonth:
    """Sum each spender's gram weight per report month."""

    totals = SpenderTotalsByMonth()
    for spender, spends in spends_by_spender.items():
        by_month: dict[ReportMonth, float] = {}
        for spend in spends:
            month = report_month(spend.date)
            by_month[month] = by_month.get(month, 0.0) + spend.gram_weight

        for month, total_weight in by_month.items():
            totals.insert(month, MonthlySpend(spender=spender, total_spend=total_weight))
    return totals


def group_total_spends_by_month(
    payments: Iterable[GoldPayment],
) -> dict[ReportMonth, list[MonthlySpend]]:
    """Collate payments into per-month spender totals."""

    totals = spender_totals_by_month(group_spends_by_spender(payments))
    return {month: totals.spenders_in(month) for month in totals}


def rank_spenders(spenders: Iterable[MonthlySpend], count: int) -> list[MonthlySpend]:
    """Return at most ``count`` spenders ordered by total descending."""

    ranked = sorted(spenders, key=lambda s: s.total_spend, reverse=True)
    return ranked[:count]


def monthly_spenders(
    grouped_spends: Mapping[ReportMonth, Sequence[MonthlySpend]],
    number_spenders: int,
    number_months: int,
) -> MonthlyTopSpendersReport:
    """Build a report of the top ``number_spenders`` for every month."""

    report = MonthlyTopSpendersReport(number_months)
    for month in order_months(grouped_spends):
        report.add_month(month, rank_spenders(grouped_spends[month], number_spenders))
    logger.debug("Ranked %d months", len(report))
    return report


class AnalysisService:
    """Performs the high level analyses the business requires."""

    def __init__(self, repository: LedgerRepository) -> None:
        self.repository = repository

    def top_spenders(self, number_spenders: int, number_months: int) -> MonthlyTopSpendersReport:
        """Report the top ``number_spenders`` per month for the last ``number_months``."""

        try:
            payments = self.repository.fetch_all()
        except LedgerRepositoryError as e:
            raise AnalysisError(f"failed to get payments from repository: {e}") from e

        grouped = group_total_spends_by_month(payments)
        logger.info(
            "Aggregated %d gold payments into %d months", len(payments), len(grouped)
        )
        return monthly_spenders(grouped, number_spenders, number_months)


__all__ = [
    "AnalysisError",
    "AnalysisService",
    "SpenderTotalsByMonth",
    "group_spends_by_spender",
    "group_total_spends_by_month",
    "monthly_spenders",
    "rank_spenders",
    "spender_totals_by_month",
]
