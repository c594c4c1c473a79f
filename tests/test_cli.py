import json

import pytest
from click.testing import CliRunner

from tradedesk import cli as cli_module
from tradedesk.cli import cli


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch):
    # CliRunner swaps stdout; a root handler bound to it would outlive the run
    monkeypatch.setattr(cli_module, "configure_logging", lambda *args, **kwargs: None)


def test_risk_command():
    runner = CliRunner()
    result = runner.invoke(cli, [
        "risk", "--balance", "10000", "--entry", "100", "--stop", "95", "--target", "115",
    ])

    assert result.exit_code == 0, result.output
    assert "Position Size: 20.000000 BTC" in result.output
    assert "Reward:Risk: 3.00" in result.output
    assert "TP 3R: 115.0000" in result.output


def test_risk_command_kelly_short():
    runner = CliRunner()
    result = runner.invoke(cli, [
        "risk", "--balance", "10000", "--entry", "100", "--stop", "105", "--target", "90",
        "--direction", "short", "--method", "KellyCriterion", "--win-prob", "0.6", "--win-loss-ratio", "2",
    ])

    assert result.exit_code == 0, result.output
    assert "Max Loss: 4000.00 USD (40.00%)" in result.output


def test_risk_command_reports_errors():
    runner = CliRunner()
    result = runner.invoke(cli, [
        "risk", "--balance", "10000", "--entry", "100", "--stop", "100", "--target", "115",
    ])

    assert result.exit_code == 1
    assert "ERROR" in result.output


def test_backtest_command_writes_reports(tmp_path):
    report_path = tmp_path / "report.json"
    trades_path = tmp_path / "trades.csv"
    runner = CliRunner()
    result = runner.invoke(cli, [
        "backtest", "--start", "2024-01-01", "--end", "2024-02-01", "--seed", "42",
        "--force-close", "--output", str(report_path), "--trades-csv", str(trades_path),
    ])

    assert result.exit_code == 0, result.output
    assert "Seed: 42" in result.output
    report = json.loads(report_path.read_text(encoding="utf-8"))
    assert report["seed"] == 42
    assert report["open_position"] is None
    header = trades_path.read_text(encoding="utf-8").splitlines()[0]
    assert header.startswith("entry_timestamp,exit_timestamp")


def test_backtest_command_rejects_incomplete_rules():
    runner = CliRunner()
    result = runner.invoke(cli, [
        "backtest", "--start", "2024-01-01", "--end", "2024-02-01", "--rules", "BUY when RSI < 30",
    ])

    assert result.exit_code == 1
    assert "SELL" in result.output
