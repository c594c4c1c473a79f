from typing import Callable, List

import pytest

from tradedesk.models.market_data import Candle


HOUR_MS = 3_600_000


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch) -> None:
    # A developer's config must not leak into the suite
    monkeypatch.delenv("TRADEDESK_CONFIG", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)


@pytest.fixture
def make_candles() -> Callable[[List[tuple]], List[Candle]]:
    """Build hourly candles from (open, high, low, close) tuples."""

    def _make(rows: List[tuple]) -> List[Candle]:
        return [
            Candle(timestamp=i * HOUR_MS, open=o, high=h, low=l, close=c, volume=1.0)
            for i, (o, h, l, c) in enumerate(rows)
        ]

    return _make
