from datetime import date

import pytest

from tradedesk.core.backtest_engine import BacktestEngine
from tradedesk.core.errors import InsufficientDataError, ValidationError
from tradedesk.core.portfolio import Portfolio, PositionState
from tradedesk.models.config import EngineConfig
from tradedesk.models.results import BacktestParameters, ExitReason
from tradedesk.strategies.rule_strategy import RuleStrategy


RULES = "BUY when RSI < 30\nSELL when RSI > 70"
SMALL = EngineConfig(min_candles=2)


def _engine(force_close=False, config=SMALL):
    params = BacktestParameters(
        start_date=date(2024, 1, 1),
        end_date=date(2024, 1, 2),
        initial_balance=10000.0,
        strategy_rules=RULES,
        stop_loss_percent=2.0,
        take_profit_percent=4.0,
        force_close_at_end=force_close,
    )
    return BacktestEngine(params, RuleStrategy.from_text(RULES), seed=1, config=config)


def test_stop_loss_exit(make_candles):
    candles = make_candles([
        (100, 100, 100, 100),
        (100, 101, 99, 100),
        (100, 101, 97, 99),
    ])
    report = _engine().run(candles, [None, 20.0, 50.0])

    assert len(report.trades) == 1
    trade = report.trades[0]
    assert trade.exit_reason == ExitReason.STOP_LOSS
    assert trade.entry_price == 100
    assert trade.exit_price == pytest.approx(98.0)
    assert trade.position_size == pytest.approx(100.0)
    assert trade.profit == pytest.approx(-200.0)
    assert report.metrics.final_balance == pytest.approx(9800.0)
    assert report.metrics.losing_trades == 1


def test_take_profit_exit(make_candles):
    candles = make_candles([
        (100, 100, 100, 100),
        (100, 101, 99, 100),
        (100, 105, 99, 103),
    ])
    report = _engine().run(candles, [None, 20.0, 50.0])

    trade = report.trades[0]
    assert trade.exit_reason == ExitReason.TAKE_PROFIT
    assert trade.exit_price == pytest.approx(104.0)
    assert trade.profit == pytest.approx(400.0)
    assert trade.return_percent == pytest.approx(4.0)


def test_stop_loss_takes_priority_over_take_profit(make_candles):
    candles = make_candles([
        (100, 100, 100, 100),
        (100, 101, 99, 100),
        (100, 106, 96, 101),
    ])
    report = _engine().run(candles, [None, 20.0, 90.0])

    assert report.trades[0].exit_reason == ExitReason.STOP_LOSS


def test_signal_exit_fills_at_close(make_candles):
    candles = make_candles([
        (100, 100, 100, 100),
        (100, 101, 99, 100),
        (100, 102, 99.5, 101),
    ])
    report = _engine().run(candles, [None, 20.0, 80.0])

    trade = report.trades[0]
    assert trade.exit_reason == ExitReason.SIGNAL
    assert trade.exit_price == 101
    assert trade.profit == pytest.approx(100.0)
    assert trade.duration_hours == pytest.approx(1.0)


def test_no_reentry_on_exit_bar(make_candles):
    candles = make_candles([
        (100, 100, 100, 100),
        (100, 101, 99, 100),
        (100, 101, 97, 99),
        (99, 100, 98.5, 99),
    ])
    engine = _engine(force_close=True)
    report = engine.run(candles, [None, 20.0, 20.0, 20.0])

    assert [t.exit_reason for t in report.trades] == [ExitReason.STOP_LOSS, ExitReason.END_OF_DATA]
    assert report.trades[1].entry_timestamp == candles[3].timestamp
    assert report.trades[1].entry_timestamp > report.trades[0].exit_timestamp


def test_first_candle_never_trades(make_candles):
    candles = make_candles([(100, 100, 100, 100)] * 3)
    report = _engine().run(candles, [10.0, None, None])

    assert report.trades == []
    assert report.open_position is None


def test_open_position_is_reported_not_realized(make_candles):
    candles = make_candles([
        (100, 100, 100, 100),
        (100, 101, 99, 100),
        (100, 103, 99, 102),
    ])
    report = _engine().run(candles, [None, 20.0, 50.0])

    assert report.trades == []
    assert report.metrics.final_balance == pytest.approx(10000.0)
    assert report.metrics.total_trades == 0
    assert report.open_position is not None
    assert report.open_position.unrealized_profit == pytest.approx(200.0)
    assert report.equity_curve[-1].balance == pytest.approx(10200.0)


def test_force_close_at_end(make_candles):
    candles = make_candles([
        (100, 100, 100, 100),
        (100, 101, 99, 100),
        (100, 103, 99, 102),
    ])
    report = _engine(force_close=True).run(candles, [None, 20.0, 50.0])

    assert report.open_position is None
    assert report.trades[0].exit_reason == ExitReason.END_OF_DATA
    assert report.metrics.final_balance == pytest.approx(10200.0)


def test_equity_curve_covers_every_processed_candle(make_candles):
    candles = make_candles([(100, 100, 100, 100)] * 5)
    report = _engine().run(candles, [None] * 5)

    assert [p.timestamp for p in report.equity_curve] == [c.timestamp for c in candles[1:]]
    assert all(p.balance == 10000.0 for p in report.equity_curve)
    assert report.total_candles == 5


def test_insufficient_candles(make_candles):
    candles = make_candles([(100, 100, 100, 100)] * 5)
    with pytest.raises(InsufficientDataError):
        _engine(config=EngineConfig()).run(candles, [None] * 5)


def test_misaligned_indicator(make_candles):
    candles = make_candles([(100, 100, 100, 100)] * 5)
    with pytest.raises(ValidationError):
        _engine().run(candles, [None] * 4)


def test_portfolio_rejects_invalid_transitions(make_candles):
    candle = make_candles([(100, 100, 100, 100)])[0]
    portfolio = Portfolio(1000.0)

    with pytest.raises(RuntimeError):
        portfolio.close_position(candle.timestamp, 100.0, ExitReason.SIGNAL)

    portfolio.open_position(candle, 2.0, 4.0)
    assert portfolio.state == PositionState.IN_POSITION
    with pytest.raises(RuntimeError):
        portfolio.open_position(candle, 2.0, 4.0)
