# tradedesk/core/backtest_engine.py
"""
Bar-by-bar backtest simulator.
"""

import logging
from typing import Optional, Sequence

from tqdm import tqdm

from ..models.config import EngineConfig
from ..models.market_data import Candle
from ..models.results import BacktestParameters, BacktestReport, ExitReason
from ..strategies.base_strategy import BaseStrategy
from ..utils.time_helpers import normalize_timeframe
from .errors import InsufficientDataError, ValidationError
from .metrics import MetricsCalculator
from .portfolio import Portfolio, PositionState


logger = logging.getLogger(__name__)


class BacktestEngine:
    """
    Steps through a candle series with a two-state position machine.

    While in a position each bar checks, in order, the stop-loss (low at
    or below the stop), the take-profit (high at or above the target) and
    the strategy exit signal (filled at the close). While flat an entry
    signal commits the whole balance at the close. Only one transition
    happens per bar. One equity point is recorded per processed bar.
    """

    def __init__(
        self,
        params: BacktestParameters,
        strategy: BaseStrategy,
        seed: int,
        config: Optional[EngineConfig] = None,
        show_progress: bool = False
    ):
        """
        Initialize backtest engine.

        Args:
            params: Backtest parameters
            strategy: Entry/exit signal source
            seed: Seed the candles were generated with, reported back
            config: Engine limits, defaults to EngineConfig()
            show_progress: Show a tqdm progress bar
        """
        self.params = params
        self.strategy = strategy
        self.seed = seed
        self.config = config or EngineConfig()
        self.show_progress = show_progress
        self.metrics_calculator = MetricsCalculator()

    def run(self, candles: Sequence[Candle], indicator: Sequence[Optional[float]]) -> BacktestReport:
        """
        Run the simulation.

        Args:
            candles: Candle series in timestamp order
            indicator: Indicator values aligned with candles

        Returns:
            BacktestReport

        Raises:
            InsufficientDataError: If there are fewer candles than min_candles
            ValidationError: If indicator and candles are not aligned
        """
        if len(candles) < self.config.min_candles:
            raise InsufficientDataError(
                f"Backtest needs at least {self.config.min_candles} candles, got {len(candles)}. "
                f"Widen the date range or use a shorter timeframe."
            )
        if len(indicator) != len(candles):
            raise ValidationError(
                f"Indicator length {len(indicator)} does not match candle count {len(candles)}"
            )

        params = self.params
        portfolio = Portfolio(params.initial_balance)
        logger.info(f"Starting backtest on {len(candles)} candles with {self.strategy.name}")

        with tqdm(total=len(candles) - 1, desc="Backtesting", disable=not self.show_progress) as pbar:
            for i in range(1, len(candles)):
                self._process_candle(portfolio, candles[i], indicator[i])
                pbar.update(1)

        last = candles[-1]
        if params.force_close_at_end and portfolio.state == PositionState.IN_POSITION:
            portfolio.close_position(last.timestamp, last.close, ExitReason.END_OF_DATA)

        return self._generate_results(portfolio, candles)

    def _process_candle(self, portfolio: Portfolio, candle: Candle, value: Optional[float]) -> None:
        if portfolio.state == PositionState.IN_POSITION:
            exit_price, reason = self._check_exit(portfolio, candle, value)
            if reason is not None:
                portfolio.close_position(candle.timestamp, exit_price, reason)
        elif portfolio.state == PositionState.FLAT:
            if self.strategy.should_enter(candle, value):
                portfolio.open_position(
                    candle,
                    self.params.stop_loss_percent,
                    self.params.take_profit_percent,
                )

        portfolio.record_equity(candle)

    def _check_exit(self, portfolio: Portfolio, candle: Candle, value: Optional[float]):
        """First satisfied exit condition as (price, reason), or (None, None)."""
        position = portfolio.position
        if candle.low <= position.stop_loss_price:
            return position.stop_loss_price, ExitReason.STOP_LOSS
        if candle.high >= position.take_profit_price:
            return position.take_profit_price, ExitReason.TAKE_PROFIT
        if self.strategy.should_exit(candle, value):
            return candle.close, ExitReason.SIGNAL
        return None, None

    def _generate_results(self, portfolio: Portfolio, candles: Sequence[Candle]) -> BacktestReport:
        last = candles[-1]
        metrics = self.metrics_calculator.calculate_metrics(
            initial_balance=self.params.initial_balance,
            final_balance=portfolio.balance,
            equity_curve=portfolio.equity_curve,
            trades=portfolio.trades,
        )

        report = BacktestReport(
            symbol=self.params.symbol,
            timeframe=normalize_timeframe(self.params.timeframe) or self.params.timeframe,
            seed=self.seed,
            rsi_period=self.params.rsi_period,
            total_candles=len(candles),
            trades=list(portfolio.trades),
            equity_curve=list(portfolio.equity_curve),
            metrics=metrics,
            open_position=portfolio.snapshot(last.close),
        )

        logger.info(
            f"Backtest completed: {metrics.total_trades} trades, net profit {metrics.net_profit:.2f} "
            f"({metrics.net_profit_percent:.2f}%), max drawdown {metrics.max_drawdown:.2f}%"
        )
        if report.open_position is not None:
            logger.info("Position still open at the last candle; excluded from realized metrics")
        return report
