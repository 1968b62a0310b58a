from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError
from typer.testing import CliRunner

from gold_sales_report.cli import app, cmd_top_spenders
from gold_sales_report.settings import ReportSettings

DATA_DIR = Path(__file__).resolve().parent / "data"
SAMPLE = DATA_DIR / "sample-transactions.csv"

runner = CliRunner()


def test_top_spenders_writes_report(tmp_path: Path):
    out = tmp_path / "report.csv"
    result = runner.invoke(
        app,
        [
            "top-spenders",
            "--input-filename",
            str(SAMPLE),
            "--output-filename",
            str(out),
            "--num-top-spenders",
            "2",
            "--num-months",
            "2",
        ],
    )

    assert result.exit_code == 0, result.output
    assert out.read_text(encoding="utf-8").splitlines() == [
        "Apr 2020,Alayna,Sparks,60.00,",
        "Apr 2020,Bea,Ng,0.30,",
        "Mar 2020,Bea,Ng,3.00,",
        "Mar 2020,Alayna,Sparks,2.00,",
    ]


def test_defaults_rank_three_spenders_over_six_months(tmp_path: Path):
    out = tmp_path / "report.csv"
    result = runner.invoke(
        app, ["top-spenders", "--input-filename", str(SAMPLE), "--output-filename", str(out)]
    )

    assert result.exit_code == 0, result.output
    lines = out.read_text(encoding="utf-8").splitlines()
    assert [line.split(",")[0] for line in lines] == [
        "Apr 2020",
        "Apr 2020",
        "Mar 2020",
        "Mar 2020",
        "Mar 2020",
        "Jan 2020",
    ]


def test_options_fall_back_to_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    out = tmp_path / "from-env.csv"
    monkeypatch.setenv("GOLD_INPUT_FILENAME", str(SAMPLE))
    monkeypatch.setenv("GOLD_OUTPUT_FILENAME", str(out))
    monkeypatch.setenv("GOLD_NUM_TOP_SPENDERS", "1")
    monkeypatch.setenv("GOLD_NUM_MONTHS", "1")

    result = runner.invoke(app, ["top-spenders"])

    assert result.exit_code == 0, result.output
    assert out.read_text(encoding="utf-8") == "Apr 2020,Alayna,Sparks,60.00,\n"


def test_invalid_ledger_writes_nothing(tmp_path: Path):
    bad = tmp_path / "bad.csv"
    bad.write_text(
        "first_name,last_name,email,amount,rate,date,description,to_currency,from_currency\n"
        "A,B,a@b.com,10,2,2020-04-01,CARD SPEND,GGM,GBP\n",
        encoding="utf-8",
    )
    out = tmp_path / "report.csv"

    result = runner.invoke(
        app, ["top-spenders", "--input-filename", str(bad), "--output-filename", str(out)]
    )

    assert result.exit_code == 1
    assert "failed to parse date" in result.output
    assert not out.exists()


def test_missing_input_file(tmp_path: Path):
    settings = ReportSettings(
        input_filename=tmp_path / "missing.csv", output_filename=tmp_path / "out.csv"
    )
    assert cmd_top_spenders(settings) == 1
    assert not (tmp_path / "out.csv").exists()


def test_non_positive_counts_are_rejected(tmp_path: Path):
    result = runner.invoke(
        app, ["top-spenders", "--input-filename", str(SAMPLE), "--num-months", "0"]
    )
    assert result.exit_code == 1
    assert "invalid options" in result.output

    with pytest.raises(ValidationError):
        ReportSettings(num_top_spenders=-1)


def test_undecodable_ledger_fails_cleanly(tmp_path: Path):
    bad = tmp_path / "latin1.csv"
    bad.write_bytes(
        b"first_name,last_name,email,amount,rate,date,description,to_currency,from_currency\n"
        b"Ren\xe9,B,a@b.com,10,2,01/04/2020 10:00,CARD SPEND,GGM,GBP\n"
    )
    out = tmp_path / "report.csv"

    result = runner.invoke(
        app, ["top-spenders", "--input-filename", str(bad), "--output-filename", str(out)]
    )

    assert result.exit_code == 1
    assert "failed to decode" in result.output
    assert not out.exists()


def test_dotenv_in_working_directory_supplies_options(tmp_path: Path):
    # conftest chdirs into tmp_path, where load_dotenv looks for .env
    out = tmp_path / "report.csv"
    (tmp_path / ".env").write_text("GOLD_NUM_MONTHS=1\n", encoding="utf-8")

    result = runner.invoke(
        app, ["top-spenders", "--input-filename", str(SAMPLE), "--output-filename", str(out)]
    )

    assert result.exit_code == 0, result.output
    lines = out.read_text(encoding="utf-8").splitlines()
    assert lines == ["Apr 2020,Alayna,Sparks,60.00,", "Apr 2020,Bea,Ng,0.30,"]


def test_environment_beats_dotenv(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    out = tmp_path / "report.csv"
    (tmp_path / ".env").write_text("GOLD_NUM_MONTHS=1\n", encoding="utf-8")
    monkeypatch.setenv("GOLD_NUM_MONTHS", "2")

    result = runner.invoke(
        app, ["top-spenders", "--input-filename", str(SAMPLE), "--output-filename", str(out)]
    )

    assert result.exit_code == 0, result.output
    months = {line.split(",")[0] for line in out.read_text(encoding="utf-8").splitlines()}
    assert months == {"Apr 2020", "Mar 2020"}


def test_unknown_log_level_is_a_usage_error(tmp_path: Path):
    result = runner.invoke(
        app, ["--log-level", "bogus", "top-spenders", "--input-filename", str(SAMPLE)]
    )
    assert result.exit_code == 2
    assert "unknown log level" in result.output
    assert not (tmp_path / "output.csv").exists()
