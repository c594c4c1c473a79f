# tradedesk/core/metrics.py
"""
Performance metrics calculator for backtest results.
"""

import numpy as np
from typing import List, Sequence, Tuple
import logging
from ..models.results import ClosedTrade, EquityPoint, PerformanceMetrics


logger = logging.getLogger(__name__)


class MetricsCalculator:
    """
    Reduce closed trades and an equity curve into summary statistics.

    Every ratio is guarded so an empty trade list yields zeros rather
    than NaN or an exception.
    """

    def calculate_metrics(
        self,
        initial_balance: float,
        final_balance: float,
        equity_curve: Sequence[EquityPoint],
        trades: Sequence[ClosedTrade],
    ) -> PerformanceMetrics:
        """
        Calculate performance metrics.

        Args:
            initial_balance: Starting balance
            final_balance: Realized balance after the last closed trade
            equity_curve: Equity curve points
            trades: Closed trades

        Returns:
            PerformanceMetrics object
        """
        net_profit = final_balance - initial_balance
        net_profit_percent = (net_profit / initial_balance * 100) if initial_balance > 0 else 0.0

        profits = [t.profit for t in trades]
        winning_pnl = [t.profit for t in trades if t.is_win]
        losing_pnl = [p for p in profits if p < 0]

        total_trades = len(trades)
        winning_trades = len(winning_pnl)
        losing_trades = len(losing_pnl)

        gross_profit = sum(winning_pnl)
        gross_loss = abs(sum(losing_pnl))
        profit_factor = gross_profit / gross_loss if gross_loss > 0 else None

        max_consecutive_wins, max_consecutive_losses = self._calculate_consecutive_trades(trades)

        logger.debug(f"Metrics calculated - Winning trades: {winning_trades}, Losing trades: {losing_trades}")

        return PerformanceMetrics(
            initial_balance=initial_balance,
            final_balance=final_balance,
            net_profit=net_profit,
            net_profit_percent=net_profit_percent,
            max_drawdown=self.calculate_max_drawdown(equity_curve, initial_balance),
            total_trades=total_trades,
            winning_trades=winning_trades,
            losing_trades=losing_trades,
            win_rate=self.calculate_win_rate(trades),
            avg_trade_duration=self.calculate_avg_trade_duration(trades),
            profit_factor=profit_factor,
            avg_win=float(np.mean(winning_pnl)) if winning_pnl else 0.0,
            avg_loss=float(np.mean(losing_pnl)) if losing_pnl else 0.0,
            largest_win=float(max(profits, default=0.0)),
            largest_loss=float(min(profits, default=0.0)),
            max_consecutive_wins=max_consecutive_wins,
            max_consecutive_losses=max_consecutive_losses,
        )

    @staticmethod
    def calculate_win_rate(trades: Sequence[ClosedTrade]) -> float:
        """Winning trades as a percentage of all trades, 0 when there are none."""
        if not trades:
            return 0.0
        winning_trades = len([t for t in trades if t.is_win])
        return winning_trades / len(trades) * 100

    @staticmethod
    def calculate_avg_trade_duration(trades: Sequence[ClosedTrade]) -> float:
        """Mean trade duration in hours, 0 when there are no trades."""
        if not trades:
            return 0.0
        return float(np.mean([t.duration_hours for t in trades]))

    @staticmethod
    def drawdown_series(equity_curve: Sequence[EquityPoint], initial_balance: float) -> List[float]:
        """
        Running maximum drawdown percentage after each equity point.

        The peak starts at initial_balance, so the series never decreases.
        """
        peak = initial_balance
        max_drawdown_pct = 0.0
        series = []

        for point in equity_curve:
            if point.balance > peak:
                peak = point.balance

            drawdown_pct = ((peak - point.balance) / peak * 100) if peak > 0 else 0.0
            if drawdown_pct > max_drawdown_pct:
                max_drawdown_pct = drawdown_pct
            series.append(max_drawdown_pct)

        return series

    def calculate_max_drawdown(self, equity_curve: Sequence[EquityPoint], initial_balance: float) -> float:
        """Maximum drawdown percentage against a running peak."""
        series = self.drawdown_series(equity_curve, initial_balance)
        return series[-1] if series else 0.0

    def _calculate_consecutive_trades(self, trades: Sequence[ClosedTrade]) -> Tuple[int, int]:
        """
        Calculate maximum consecutive wins and losses.

        Args:
            trades: List of trades

        Returns:
            Tuple of (max_consecutive_wins, max_consecutive_losses)
        """
        max_wins = 0
        max_losses = 0
        current_wins = 0
        current_losses = 0

        for trade in trades:
            if trade.profit > 0:
                current_wins += 1
                current_losses = 0
                max_wins = max(max_wins, current_wins)
            elif trade.profit < 0:
                current_losses += 1
                current_wins = 0
                max_losses = max(max_losses, current_losses)
            else:
                # Breakeven trade
                current_wins = 0
                current_losses = 0

        return max_wins, max_losses
