"""Validated run settings for the top spenders report."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_NUM_TOP_SPENDERS = 3
DEFAULT_NUM_MONTHS = 6
DEFAULT_INPUT_FILENAME = "sample-transactions.csv"
DEFAULT_OUTPUT_FILENAME = "output.csv"


class ReportSettings(BaseModel):
    model_config = ConfigDict(strict=True, extra="forbid", frozen=True)

    num_top_spenders: int = DEFAULT_NUM_TOP_SPENDERS
    num_months: int = DEFAULT_NUM_MONTHS
    input_filename: Path = Path(DEFAULT_INPUT_FILENAME)
    output_filename: Path = Path(DEFAULT_OUTPUT_FILENAME)

    @field_validator("num_top_spenders", "num_months")
    @classmethod
    def _positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be a positive integer")
        return v


__all__ = [
    "DEFAULT_INPUT_FILENAME",
    "DEFAULT_NUM_MONTHS",
    "DEFAULT_NUM_TOP_SPENDERS",
    "DEFAULT_OUTPUT_FILENAME",
    "ReportSettings",
]
