# tradedesk/models/results.py
"""
Backtest parameters, results and performance metrics models.
"""

import json
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class ExitReason(str, Enum):
    """Why a position was closed."""
    STOP_LOSS = "stop_loss"
    TAKE_PROFIT = "take_profit"
    SIGNAL = "signal"
    END_OF_DATA = "end_of_data"


class BacktestParameters(BaseModel):
    """Inputs for one backtest run."""
    model_config = ConfigDict(frozen=True)

    symbol: str = Field(default="BTC/USD", description="Trading symbol")
    timeframe: str = Field(default="1h", description="Bar interval")
    start_date: date = Field(..., description="First day of the range")
    end_date: date = Field(..., description="Last day of the range (inclusive)")
    initial_balance: float = Field(default=10000.0, description="Starting balance")
    strategy_rules: str = Field(..., description="Rule text, one directive per line")
    stop_loss_percent: float = Field(default=2.0, description="Stop-loss distance from entry in percent")
    take_profit_percent: float = Field(default=4.0, description="Take-profit distance from entry in percent")
    seed: Optional[int] = Field(None, description="Seed for the price synthesizer")
    rsi_period: int = Field(default=14, description="RSI lookback period")
    force_close_at_end: bool = Field(default=False, description="Close an open position at the last candle")


class ClosedTrade(BaseModel):
    """Completed round trip."""
    model_config = ConfigDict(frozen=True)

    entry_timestamp: int = Field(..., description="Entry time in epoch milliseconds")
    exit_timestamp: int = Field(..., description="Exit time in epoch milliseconds")
    entry_price: float = Field(..., description="Entry price")
    exit_price: float = Field(..., description="Exit price")
    position_size: float = Field(..., description="Position size in asset units")
    profit: float = Field(..., description="Profit and loss")
    return_percent: float = Field(..., description="Return relative to capital committed")
    exit_reason: ExitReason = Field(..., description="Exit trigger")

    @property
    def duration_hours(self) -> float:
        """Trade duration in hours."""
        return (self.exit_timestamp - self.entry_timestamp) / 3_600_000

    @property
    def is_win(self) -> bool:
        return self.profit > 0

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        data = self.model_dump(mode='json')
        data['duration_hours'] = self.duration_hours
        return data


class OpenPositionSnapshot(BaseModel):
    """Position still open when the data ran out."""
    entry_timestamp: int = Field(..., description="Entry time in epoch milliseconds")
    entry_price: float = Field(..., description="Entry price")
    position_size: float = Field(..., description="Position size in asset units")
    stop_loss_price: float = Field(..., description="Stop-loss price")
    take_profit_price: float = Field(..., description="Take-profit price")
    last_price: float = Field(..., description="Close of the final candle")
    unrealized_profit: float = Field(..., description="Mark-to-market P&L")


class EquityPoint(BaseModel):
    """Equity curve point."""
    model_config = ConfigDict(frozen=True)

    timestamp: int = Field(..., description="Epoch milliseconds")
    balance: float = Field(..., description="Balance, or mark-to-market value while in a position")


class PerformanceMetrics(BaseModel):
    """Summary statistics for a backtest."""

    initial_balance: float = Field(..., description="Initial balance")
    final_balance: float = Field(..., description="Realized final balance")
    net_profit: float = Field(..., description="Final balance minus initial balance")
    net_profit_percent: float = Field(..., description="Net profit as percentage of initial balance")
    max_drawdown: float = Field(..., description="Maximum drawdown percentage")

    total_trades: int = Field(..., description="Total number of trades")
    winning_trades: int = Field(..., description="Number of winning trades")
    losing_trades: int = Field(..., description="Number of losing trades")
    win_rate: float = Field(..., description="Win rate percentage")
    avg_trade_duration: float = Field(..., description="Average trade duration in hours")

    profit_factor: Optional[float] = Field(None, description="Gross profit / gross loss")
    avg_win: float = Field(default=0.0, description="Average winning trade profit")
    avg_loss: float = Field(default=0.0, description="Average losing trade profit")
    largest_win: float = Field(default=0.0, description="Largest single win")
    largest_loss: float = Field(default=0.0, description="Largest single loss")
    max_consecutive_wins: int = Field(default=0, description="Maximum consecutive wins")
    max_consecutive_losses: int = Field(default=0, description="Maximum consecutive losses")


class BacktestReport(BaseModel):
    """Complete backtest results."""

    symbol: str = Field(..., description="Trading symbol")
    timeframe: str = Field(..., description="Bar interval")
    seed: int = Field(..., description="Seed the synthesizer ran with")
    rsi_period: int = Field(..., description="RSI lookback period")
    total_candles: int = Field(..., description="Number of candles generated")

    trades: List[ClosedTrade] = Field(default_factory=list, description="All completed trades")
    equity_curve: List[EquityPoint] = Field(default_factory=list, description="Equity curve data")
    metrics: PerformanceMetrics = Field(..., description="Performance metrics")
    open_position: Optional[OpenPositionSnapshot] = Field(None, description="Unrealized position at the end")

    def summary(self) -> Dict[str, Any]:
        """Flat numeric summary for renderers and narrative generation."""
        summary = {
            'symbol': self.symbol,
            'timeframe': self.timeframe,
            'total_candles': self.total_candles,
        }
        summary.update(self.metrics.model_dump(mode='json'))
        summary['has_open_position'] = self.open_position is not None
        return summary

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'symbol': self.symbol,
            'timeframe': self.timeframe,
            'seed': self.seed,
            'rsi_period': self.rsi_period,
            'total_candles': self.total_candles,
            'trades': [trade.to_dict() for trade in self.trades],
            'equity_curve': [point.model_dump() for point in self.equity_curve],
            'metrics': self.metrics.model_dump(mode='json'),
            'open_position': self.open_position.model_dump() if self.open_position else None,
        }

    def save_to_json(self, filepath: str) -> None:
        """Save results to JSON file."""
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2)

    def save_trades_csv(self, filepath: str) -> None:
        """Save trades to CSV file."""
        import pandas as pd
        columns = list(ClosedTrade.model_fields) + ['duration_hours']
        trades_df = pd.DataFrame([trade.to_dict() for trade in self.trades], columns=columns)
        trades_df.to_csv(filepath, index=False)
