"""Monthly top spenders report.

The report holds one ranked spender list per month. Months are rendered most
recent first and only the first ``num_of_months`` of them are emitted. Each
rendered line has the form::

    <Mon YYYY>,<first name>,<last name>,<total with 2 decimals>,
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from .models import MonthlySpend
from .months import ReportMonth, order_months


class DuplicateMonthError(ValueError):
    """A month was added to a report twice."""


class MonthlyTopSpendersReport:
    """Ranks the top spenders by month."""

    def __init__(self, num_of_months: int) -> None:
        self.num_of_months = num_of_months
        self._monthly_spenders: dict[ReportMonth, tuple[MonthlySpend, ...]] = {}

    def add_month(self, month: ReportMonth, spenders: Sequence[MonthlySpend]) -> None:
        if month in self._monthly_spenders:
            raise DuplicateMonthError(f"month already in report: {month}")
        self._monthly_spenders[month] = tuple(spenders)

    def spenders_for(self, month: ReportMonth) -> tuple[MonthlySpend, ...]:
        return self._monthly_spenders[month]

    def ordered_months(self) -> list[ReportMonth]:
        return order_months(self._monthly_spenders)

    def __len__(self) -> int:
        return len(self._monthly_spenders)

    def lines(self) -> Iterator[str]:
        """Yield one CSV line per ranked spender for the most recent months."""

        for month in self.ordered_months()[: self.num_of_months]:
            for monthly_spend in self._monthly_spenders[month]:
                spender = monthly_spend.spender
                yield (
                    f"{month},{spender.first_name},{spender.last_name},"
                    f"{monthly_spend.format_total()},\n"
                )

    def formatted_as_csv(self) -> str:
        return "".join(self.lines())

    def __str__(self) -> str:
        out = []
        for month in self.ordered_months():
            spenders = ", ".join(str(s) for s in self._monthly_spenders[month])
            out.append(f"Month: {month}\nSpenders: [{spenders}]\n")
        return "".join(out)


__all__ = ["DuplicateMonthError", "MonthlyTopSpendersReport"]
