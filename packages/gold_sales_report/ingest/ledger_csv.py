"""CSV ledger repository.

Header contract
---------------
Header names are normalized by dropping every character outside
``[A-Za-z0-9_]`` (stray BOMs, spaces, quotes) and lower-casing. The following
columns must be present, in any order:

``first_name, last_name, email, amount, rate, date, description,
to_currency, from_currency``

Extra columns are kept by position and otherwise ignored.

Row contract
------------
- Blank lines are skipped; every other row must have as many fields as the
  header.
- ``amount`` and ``rate`` must be finite plain decimals (no whitespace,
  underscores, ``nan`` or ``inf``); ``rate`` must be non-zero.
- ``date`` must match ``DD/MM/YYYY HH:MM`` with two-digit day and month.
- Only rows whose description is ``CARD SPEND`` and whose target currency is
  ``GGM`` become payments; all other rows are dropped silently.

Any violation raises :class:`LedgerRepositoryError` and aborts the fetch; no
partial result is returned.
"""

from __future__ import annotations

import csv
import logging
import math
import re
from collections.abc import Sequence
from datetime import datetime
from os import PathLike
from pathlib import Path

from ..models import GoldPayment, Spender
from .repository import LedgerRepositoryError

logger = logging.getLogger(__name__)

DATE_FORMAT = "%d/%m/%Y %H:%M"

REQUIRED_HEADERS: tuple[str, ...] = (
    "first_name",
    "last_name",
    "email",
    "amount",
    "rate",
    "date",
    "description",
    "to_currency",
    "from_currency",
)

_NON_HEADER_CHARS = re.compile(r"[^a-zA-Z0-9_]+")

# Two-digit day and month, four-digit year.
_DATE_SHAPE = re.compile(r"\d{2}/\d{2}/\d{4} \d{1,2}:\d{2}")

# Plain decimal or exponent notation; no whitespace, underscores, nan or inf.
_FLOAT_SHAPE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def normalize_header(header: str) -> str:
    return _NON_HEADER_CHARS.sub("", header).lower()


class CSVLedgerRepository:
    """Uses a CSV file as a ledger of gold payments."""

    def __init__(self, path: str | PathLike[str]) -> None:
        self.path = Path(path)
        self._col_index: dict[str, int] = {}
        self._n_columns = 0

    def fetch_all(self) -> list[GoldPayment]:
        try:
            with self.path.open(encoding="utf-8-sig", newline="") as f:
                rows = list(csv.reader(f))
        except OSError as e:
            raise LedgerRepositoryError(f"failed to read ledger {self.path}: {e}") from e
        except UnicodeDecodeError as e:
            raise LedgerRepositoryError(f"failed to decode {self.path}: {e}") from e
        except csv.Error as e:
            raise LedgerRepositoryError(f"failed to parse CSV {self.path}: {e}") from e

        if not rows:
            raise LedgerRepositoryError(f"CSV appears to have no header row: {self.path}")

        self.parse_headers(rows[0])

        payments: list[GoldPayment] = []
        for row in rows[1:]:
            if not row:
                # blank line
                continue
            payment = self.parse_row(row)
            if payment is not None:
                payments.append(payment)

        logger.info(
            "Read %d rows from %s; %d gold payments", len(rows) - 1, self.path, len(payments)
        )
        return payments

    def parse_headers(self, headers: Sequence[str]) -> None:
        """Validate that every required header is present and record column indexes.

        Raises ``LedgerRepositoryError`` naming the missing columns.
        """

        col_index: dict[str, int] = {}
        for idx, header in enumerate(headers):
            # First occurrence wins for duplicated names.
            col_index.setdefault(normalize_header(header), idx)

        missing = [h for h in REQUIRED_HEADERS if h not in col_index]
        if missing:
            raise LedgerRepositoryError(
                "failed to find the following fields in the CSV: " + ", ".join(missing)
            )

        self._col_index = col_index
        self._n_columns = len(headers)
        logger.debug("Header columns: %s", col_index)

    def _field(self, row: Sequence[str], name: str) -> str:
        return row[self._col_index[name]]

    def _parse_float(self, row: Sequence[str], name: str) -> float:
        raw = self._field(row, name)
        if not _FLOAT_SHAPE.fullmatch(raw):
            raise LedgerRepositoryError(f"failed to parse {name}: {raw!r}")
        value = float(raw)
        if not math.isfinite(value):
            raise LedgerRepositoryError(f"failed to parse {name}: {raw!r}")
        return value

    def parse_row(self, row: Sequence[str]) -> GoldPayment | None:
        """Parse one data row; return ``None`` when it is not a gold payment."""

        if not self._col_index:
            raise LedgerRepositoryError("headers must be parsed before rows")

        if len(row) != self._n_columns:
            raise LedgerRepositoryError(
                f"failed to parse row, expected {self._n_columns} fields but got {len(row)}"
            )

        amount = self._parse_float(row, "amount")
        rate = self._parse_float(row, "rate")
        if rate == 0:
            raise LedgerRepositoryError(f"failed to parse rate: {self._field(row, 'rate')!r}")

        raw_date = self._field(row, "date")
        if not _DATE_SHAPE.fullmatch(raw_date):
            raise LedgerRepositoryError(f"failed to parse date: {raw_date!r}")
        try:
            date = datetime.strptime(raw_date, DATE_FORMAT)
        except ValueError as e:
            raise LedgerRepositoryError(f"failed to parse date: {raw_date!r}") from e

        payment = GoldPayment.create(
            spender=Spender(
                first_name=self._field(row, "first_name"),
                last_name=self._field(row, "last_name"),
                email=self._field(row, "email"),
            ),
            description=self._field(row, "description"),
            amount=amount,
            rate=rate,
            to_currency=self._field(row, "to_currency"),
            from_currency=self._field(row, "from_currency"),
            date=date,
        )
        return payment if payment.is_gold_spend else None


__all__ = [
    "CSVLedgerRepository",
    "DATE_FORMAT",
    "REQUIRED_HEADERS",
    "normalize_header",
]
