# tradedesk/core/indicators.py
"""
Technical indicators over candle series.
"""

from typing import List, Optional, Sequence

import numpy as np

from ..models.market_data import Candle
from .errors import ValidationError


def _rsi_value(avg_gain: float, avg_loss: float) -> float:
    if avg_loss == 0:
        return 100.0
    rs = avg_gain / avg_loss
    return 100.0 - (100.0 / (1.0 + rs))


def calculate_rsi(candles: Sequence[Candle], period: int = 14) -> List[Optional[float]]:
    """
    Relative Strength Index with Wilder smoothing.

    The result is aligned 1:1 with ``candles``. Entries before index
    ``period`` are None. The value at ``period`` uses simple means of the
    first ``period`` gains and losses; later values use
    ``avg = (avg * (period - 1) + current) / period``.

    Args:
        candles: Candle series
        period: Lookback period

    Returns:
        List of RSI values in [0, 100] or None

    Raises:
        ValidationError: If period is less than 1
    """
    if period < 1:
        raise ValidationError("RSI period must be at least 1.")

    values: List[Optional[float]] = [None] * len(candles)
    if len(candles) <= period:
        return values

    closes = np.array([c.close for c in candles], dtype=float)
    deltas = np.diff(closes)
    gains = np.maximum(deltas, 0.0)
    losses = np.maximum(-deltas, 0.0)

    avg_gain = float(gains[:period].mean())
    avg_loss = float(losses[:period].mean())
    values[period] = _rsi_value(avg_gain, avg_loss)

    # deltas[i - 1] is the change into candle i
    for i in range(period + 1, len(candles)):
        avg_gain = (avg_gain * (period - 1) + gains[i - 1]) / period
        avg_loss = (avg_loss * (period - 1) + losses[i - 1]) / period
        values[i] = _rsi_value(float(avg_gain), float(avg_loss))

    return values
