import pytest

from tradedesk.core.errors import ValidationError
from tradedesk.core.indicators import calculate_rsi


def _flat_rows(closes):
    return [(c, c, c, c) for c in closes]


def test_rsi_is_undefined_before_period(make_candles):
    candles = make_candles(_flat_rows(range(100, 130)))
    values = calculate_rsi(candles, period=14)

    assert len(values) == len(candles)
    assert values[:14] == [None] * 14
    assert all(v is not None for v in values[14:])


def test_rsi_all_gains_is_100(make_candles):
    values = calculate_rsi(make_candles(_flat_rows(range(100, 130))), period=14)
    assert values[14:] == [100.0] * 16


def test_rsi_all_losses_is_0(make_candles):
    values = calculate_rsi(make_candles(_flat_rows(range(130, 100, -1))), period=14)
    assert values[14:] == pytest.approx([0.0] * 16)


def test_rsi_flat_series_is_100(make_candles):
    values = calculate_rsi(make_candles(_flat_rows([100.0] * 20)), period=14)
    assert values[14:] == [100.0] * 6


def test_rsi_wilder_smoothing(make_candles):
    values = calculate_rsi(make_candles(_flat_rows([1.0, 2.0, 1.0, 2.0])), period=2)

    assert values[:2] == [None, None]
    assert values[2] == pytest.approx(50.0)
    assert values[3] == pytest.approx(75.0)


def test_rsi_stays_in_range(make_candles):
    closes = [100 + ((i * 37) % 11) - 5 for i in range(200)]
    values = calculate_rsi(make_candles(_flat_rows(closes)), period=14)

    assert all(0.0 <= v <= 100.0 for v in values[14:])


def test_rsi_short_series_is_all_undefined(make_candles):
    values = calculate_rsi(make_candles(_flat_rows(range(10))), period=14)
    assert values == [None] * 10


def test_rsi_rejects_bad_period(make_candles):
    with pytest.raises(ValidationError):
        calculate_rsi(make_candles(_flat_rows(range(10))), period=0)
