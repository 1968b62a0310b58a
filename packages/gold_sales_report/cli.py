"""CLI for the ``gold_sales_report`` package.

``cmd_top_spenders`` holds the command logic and returns a process exit code
so it can be called directly; the Typer wrapper below only resolves options
(flags, environment variables, ``.env``) and exits with that code. Business
logic lives in :mod:`gold_sales_report.analysis`.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import typer
from dotenv import load_dotenv
from pydantic import ValidationError

from .analysis import AnalysisError, AnalysisService
from .ingest.ledger_csv import CSVLedgerRepository
from .logging_setup import configure_logging
from .reports import DuplicateMonthError
from .settings import (
    DEFAULT_INPUT_FILENAME,
    DEFAULT_NUM_MONTHS,
    DEFAULT_NUM_TOP_SPENDERS,
    DEFAULT_OUTPUT_FILENAME,
    ReportSettings,
)

logger = logging.getLogger(__name__)


def cmd_top_spenders(settings: ReportSettings) -> int:
    """Write the monthly top spenders report described by ``settings``.

    Reads ``settings.input_filename``, ranks the top
    ``settings.num_top_spenders`` per month for the most recent
    ``settings.num_months`` months and writes the CSV report to
    ``settings.output_filename``.

    Errors are logged and written to stderr and the function returns ``1``.
    The output file is only created once the report is complete.
    """

    service = AnalysisService(CSVLedgerRepository(settings.input_filename))
    try:
        report = service.top_spenders(settings.num_top_spenders, settings.num_months)
    except AnalysisError as e:
        logger.error("failed to perform TopSpenders analysis: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except DuplicateMonthError as e:
        logger.error("failed to assemble report: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        with settings.output_filename.open("w", encoding="utf-8", newline="") as f:
            f.writelines(report.lines())
    except OSError as e:
        logger.error("failed to write output: %s", e)
        print(f"Error: failed to write {settings.output_filename}: {e}", file=sys.stderr)
        return 1

    logger.info("Wrote report for %d months to %s", len(report), settings.output_filename)
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="Rank the top gold spenders per month from a CSV ledger.",
)


@app.command("top-spenders")
def top_spenders_cmd(
    num_top_spenders: int = typer.Option(
        DEFAULT_NUM_TOP_SPENDERS,
        "--num-top-spenders",
        envvar="GOLD_NUM_TOP_SPENDERS",
        help="Number of top spenders per month.",
    ),
    num_months: int = typer.Option(
        DEFAULT_NUM_MONTHS,
        "--num-months",
        envvar="GOLD_NUM_MONTHS",
        help="Number of most recent months to report.",
    ),
    input_filename: Path = typer.Option(
        Path(DEFAULT_INPUT_FILENAME),
        "--input-filename",
        envvar="GOLD_INPUT_FILENAME",
        dir_okay=False,
        help="CSV ledger to read from.",
    ),
    output_filename: Path = typer.Option(
        Path(DEFAULT_OUTPUT_FILENAME),
        "--output-filename",
        envvar="GOLD_OUTPUT_FILENAME",
        dir_okay=False,
        help="Where to write the CSV report.",
    ),
) -> None:
    """Write the top spenders per month report."""

    try:
        settings = ReportSettings(
            num_top_spenders=num_top_spenders,
            num_months=num_months,
            input_filename=input_filename,
            output_filename=output_filename,
        )
    except ValidationError as e:
        print(f"Error: invalid options: {e}", file=sys.stderr)
        raise typer.Exit(1) from e

    raise typer.Exit(cmd_top_spenders(settings))


@app.callback()
def _root(
    log_level: str | None = typer.Option(
        None, help="Logging level (falls back to GOLD_SALES_REPORT_LOG_LEVEL)."
    ),
) -> None:
    """Load ``.env`` from the current directory and configure logging."""

    # override=False keeps variables already set in the environment
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    try:
        configure_logging(log_level)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--log-level") from e


if __name__ == "__main__":  # pragma: no cover
    app()
