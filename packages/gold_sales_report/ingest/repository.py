"""Ledger repositories supplying gold payments to the analysis service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Protocol

from ..models import GoldPayment, Spender


class LedgerRepositoryError(Exception):
    """The ledger could not be read or contains malformed data."""


class LedgerRepository(Protocol):
    """Provides access to stored gold payments."""

    def fetch_all(self) -> list[GoldPayment]:
        """Return every qualifying payment or raise ``LedgerRepositoryError``."""
        ...


type Ledger = Mapping[Spender, Sequence[GoldPayment]]


class InMemoryLedgerRepository:
    """Repository over payments already held in memory, keyed by spender."""

    def __init__(self, ledger: Ledger) -> None:
        self._ledger = ledger

    def fetch_all(self) -> list[GoldPayment]:
        return [payment for payments in self._ledger.values() for payment in payments]


__all__ = [
    "InMemoryLedgerRepository",
    "Ledger",
    "LedgerRepository",
    "LedgerRepositoryError",
]
