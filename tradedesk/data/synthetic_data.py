# tradedesk/data/synthetic_data.py
"""
Synthetic candle generator for backtesting.
"""

import logging
from datetime import date, datetime
from typing import List, Optional, Union

import numpy as np

from ..core.errors import ValidationError
from ..models.config import EngineConfig
from ..models.market_data import Candle
from ..utils.time_helpers import generate_time_range, to_epoch_millis


logger = logging.getLogger(__name__)


def new_seed() -> int:
    """Draw a fresh 32-bit seed from OS entropy."""
    return int(np.random.SeedSequence().generate_state(1)[0])


class SyntheticDataProvider:
    """
    Generates a synthetic OHLCV series with a bounded random walk.

    Each provider owns its own ``numpy.random.Generator``; two providers
    built with the same seed produce identical series and never touch the
    global random state.
    """

    def __init__(self, seed: Optional[int] = None, config: Optional[EngineConfig] = None):
        """
        Initialize synthetic data provider.

        Args:
            seed: Random seed for reproducible data generation. A fresh seed
                is drawn when omitted and exposed as ``self.seed``.
            config: Synthesizer shape, defaults to EngineConfig()
        """
        if seed is not None and seed < 0:
            raise ValidationError("Seed must be a non-negative integer.")
        self.seed = new_seed() if seed is None else seed
        self.config = config or EngineConfig()
        self._rng = np.random.default_rng(self.seed)

    def generate_ohlcv(
        self,
        start: Union[date, datetime],
        end: Union[date, datetime],
        timeframe: str = "1h",
    ) -> List[Candle]:
        """
        Generate candles from start to end inclusive, one per timeframe step.

        The first open is the base price plus a random jitter. Every later
        open equals the previous close. Closes drift by at most
        ``max_drift_pct`` per bar and wicks extend the body by at most
        ``wick_pct``, so low <= min(open, close) <= max(open, close) <= high.

        Args:
            start: Start date or datetime (UTC)
            end: End date or datetime (UTC), inclusive
            timeframe: Timeframe string

        Returns:
            List of Candle objects, empty when end precedes start
        """
        time_index = generate_time_range(start, end, timeframe)

        if len(time_index) == 0:
            return []

        cfg = self.config
        n_periods = len(time_index)
        rng = self._rng

        # Draw every random component up front
        drifts = rng.uniform(-1.0, 1.0, n_periods) * cfg.max_drift_pct / 100
        upper_wicks = rng.random(n_periods) * cfg.wick_pct / 100
        lower_wicks = rng.random(n_periods) * cfg.wick_pct / 100
        volumes = cfg.volume_base * (0.5 + rng.random(n_periods))

        previous_close = round(cfg.base_price + rng.random() * cfg.price_jitter, 2)
        candles = []

        for i, timestamp in enumerate(time_index):
            open_price = previous_close
            close_price = open_price * (1 + drifts[i])

            high_price = max(open_price, close_price) * (1 + upper_wicks[i])
            low_price = min(open_price, close_price) * (1 - lower_wicks[i])

            candle = Candle(
                timestamp=to_epoch_millis(timestamp),
                open=open_price,
                high=float(round(high_price, 2)),
                low=float(round(low_price, 2)),
                close=float(round(close_price, 2)),
                volume=float(round(volumes[i], 2)),
            )
            candles.append(candle)
            previous_close = candle.close

        logger.debug(f"Generated {len(candles)} synthetic {timeframe} candles (seed={self.seed})")
        return candles
