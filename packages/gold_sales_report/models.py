"""Domain values for gold spend reporting.

A :class:`GoldPayment` is a card spend settled in gold (currency ``GGM``). The
``gram_weight`` of a payment is the amount divided by the conversion rate and
is the metric that gets summed and ranked.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

# Description tag marking a card spend.
GOLD_SPEND = "CARD SPEND"

# Target currency code for spends settled in grams of gold.
GOLD_CURRENCY_CODE = "GGM"


@dataclass(frozen=True, slots=True)
class Spender:
    """The person a gold payment relates to.

    Used as a mapping key; equality and hash cover all three fields.
    """

    first_name: str
    last_name: str
    email: str

    def __str__(self) -> str:
        return self.email


@dataclass(frozen=True, slots=True)
class GoldPayment:
    """A single qualifying payment, immutable once parsed."""

    spender: Spender
    description: str
    amount: float
    rate: float
    to_currency: str
    from_currency: str
    date: datetime
    gram_weight: float

    @classmethod
    def create(
        cls,
        *,
        spender: Spender,
        description: str,
        amount: float,
        rate: float,
        to_currency: str,
        from_currency: str,
        date: datetime,
    ) -> GoldPayment:
        """Build a payment with ``gram_weight`` derived as ``amount / rate``."""

        return cls(
            spender=spender,
            description=description,
            amount=amount,
            rate=rate,
            to_currency=to_currency,
            from_currency=from_currency,
            date=date,
            gram_weight=amount / rate,
        )

    @property
    def is_gold_spend(self) -> bool:
        return self.description == GOLD_SPEND and self.to_currency == GOLD_CURRENCY_CODE


@dataclass(frozen=True, slots=True)
class MonthlySpend:
    """Total gram weight for one spender within one report month."""

    spender: Spender
    total_spend: float

    def format_total(self) -> str:
        return f"{self.total_spend:.2f}"

    def __str__(self) -> str:
        return f"{self.spender.first_name} {self.spender.last_name}: {self.format_total()}"


__all__ = [
    "GOLD_CURRENCY_CODE",
    "GOLD_SPEND",
    "GoldPayment",
    "MonthlySpend",
    "Spender",
]
