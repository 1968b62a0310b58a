"""Ledger ingestion: repository contract plus CSV and in-memory sources."""

from .ledger_csv import CSVLedgerRepository
from .repository import InMemoryLedgerRepository, LedgerRepository, LedgerRepositoryError

__all__ = [
    "CSVLedgerRepository",
    "InMemoryLedgerRepository",
    "LedgerRepository",
    "LedgerRepositoryError",
]
