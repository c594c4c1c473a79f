import pytest

from tradedesk.core.metrics import MetricsCalculator
from tradedesk.models.results import ClosedTrade, EquityPoint, ExitReason


def _curve(balances):
    return [EquityPoint(timestamp=i * 3_600_000, balance=b) for i, b in enumerate(balances)]


def _trade(profit, hours=2):
    return ClosedTrade(
        entry_timestamp=0,
        exit_timestamp=hours * 3_600_000,
        entry_price=100.0,
        exit_price=100.0 + profit / 10,
        position_size=10.0,
        profit=profit,
        return_percent=profit / 10,
        exit_reason=ExitReason.SIGNAL,
    )


def test_empty_run_yields_zeros():
    metrics = MetricsCalculator().calculate_metrics(10000.0, 10000.0, [], [])

    assert metrics.net_profit == 0.0
    assert metrics.net_profit_percent == 0.0
    assert metrics.max_drawdown == 0.0
    assert metrics.total_trades == 0
    assert metrics.win_rate == 0.0
    assert metrics.avg_trade_duration == 0.0
    assert metrics.profit_factor is None


def test_max_drawdown_against_running_peak():
    curve = _curve([10000, 11000, 9900, 10500, 8800, 12000])
    assert MetricsCalculator().calculate_max_drawdown(curve, 10000.0) == pytest.approx(20.0)


def test_drawdown_from_initial_balance():
    curve = _curve([9000, 9500])
    assert MetricsCalculator().calculate_max_drawdown(curve, 10000.0) == pytest.approx(10.0)


def test_drawdown_series_never_decreases():
    series = MetricsCalculator.drawdown_series(_curve([10000, 9000, 9800, 12000, 11000, 13000]), 10000.0)

    assert series == sorted(series)
    assert series[-1] == pytest.approx(10.0)


def test_rising_curve_has_no_drawdown():
    assert MetricsCalculator().calculate_max_drawdown(_curve([10000, 10100, 10200]), 10000.0) == 0.0


def test_trade_statistics():
    trades = [_trade(100), _trade(-50), _trade(0), _trade(200, hours=4), _trade(300), _trade(-25)]
    metrics = MetricsCalculator().calculate_metrics(10000.0, 10525.0, [], trades)

    assert metrics.net_profit == pytest.approx(525.0)
    assert metrics.net_profit_percent == pytest.approx(5.25)
    assert metrics.total_trades == 6
    assert metrics.winning_trades == 3
    assert metrics.losing_trades == 2
    assert metrics.win_rate == pytest.approx(50.0)
    assert metrics.avg_trade_duration == pytest.approx(14 / 6)
    assert metrics.profit_factor == pytest.approx(600 / 75)
    assert metrics.avg_win == pytest.approx(200.0)
    assert metrics.avg_loss == pytest.approx(-37.5)
    assert metrics.largest_win == 300
    assert metrics.largest_loss == -50
    assert metrics.max_consecutive_wins == 2
    assert metrics.max_consecutive_losses == 1
