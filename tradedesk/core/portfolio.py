# tradedesk/core/portfolio.py
"""
Single-position account used by the backtest engine.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional
import logging

from ..models.market_data import Candle
from ..models.results import ClosedTrade, EquityPoint, ExitReason, OpenPositionSnapshot


logger = logging.getLogger(__name__)


class PositionState(str, Enum):
    """Account phase."""
    FLAT = "FLAT"
    IN_POSITION = "IN_POSITION"


@dataclass(frozen=True)
class Position:
    """Open long position."""
    entry_timestamp: int
    entry_price: float
    quantity: float
    stop_loss_price: float
    take_profit_price: float

    @property
    def cost(self) -> float:
        """Capital committed at entry."""
        return self.quantity * self.entry_price

    def unrealized_pnl(self, price: float) -> float:
        """P&L if closed at price."""
        return (price - self.entry_price) * self.quantity

    def market_value(self, price: float) -> float:
        """Entry value plus unrealized P&L."""
        return self.cost + self.unrealized_pnl(price)


class Portfolio:
    """
    Balance, at most one open position, closed trades and equity curve.

    Transitions are FLAT -> IN_POSITION via open_position and
    IN_POSITION -> FLAT via close_position; anything else raises.
    """

    def __init__(self, initial_balance: float):
        self.initial_balance = initial_balance
        self.balance = initial_balance
        self.position: Optional[Position] = None
        self.trades: List[ClosedTrade] = []
        self.equity_curve: List[EquityPoint] = []

    @property
    def state(self) -> PositionState:
        if self.position is None:
            return PositionState.FLAT
        return PositionState.IN_POSITION

    def open_position(
        self,
        candle: Candle,
        stop_loss_pct: float,
        take_profit_pct: float
    ) -> Position:
        """
        Commit the entire balance at the candle close.

        Args:
            candle: Entry candle
            stop_loss_pct: Stop distance below entry in percent
            take_profit_pct: Target distance above entry in percent
        """
        if self.state != PositionState.FLAT:
            raise RuntimeError("Cannot open a position while one is already open")

        entry_price = candle.close
        self.position = Position(
            entry_timestamp=candle.timestamp,
            entry_price=entry_price,
            quantity=self.balance / entry_price,
            stop_loss_price=entry_price * (1 - stop_loss_pct / 100),
            take_profit_price=entry_price * (1 + take_profit_pct / 100),
        )
        logger.debug(
            f"Entered {self.position.quantity:.6f} @ {entry_price:.2f} on {candle.open_time:%Y-%m-%d %H:%M} "
            f"(SL {self.position.stop_loss_price:.2f}, TP {self.position.take_profit_price:.2f})"
        )
        return self.position

    def close_position(self, timestamp: int, exit_price: float, reason: ExitReason) -> ClosedTrade:
        """Realize the open position and record the trade."""
        position = self.position
        if position is None:
            raise RuntimeError("Cannot close a position while flat")

        profit = position.unrealized_pnl(exit_price)
        self.balance += profit

        trade = ClosedTrade(
            entry_timestamp=position.entry_timestamp,
            exit_timestamp=timestamp,
            entry_price=position.entry_price,
            exit_price=exit_price,
            position_size=position.quantity,
            profit=profit,
            return_percent=profit / position.cost * 100,
            exit_reason=reason,
        )
        self.trades.append(trade)
        self.position = None

        logger.debug(f"Exited @ {exit_price:.2f} ({reason.value}), profit {profit:.2f}, balance {self.balance:.2f}")
        return trade

    def equity(self, price: float) -> float:
        """Balance when flat, mark-to-market value while in a position."""
        if self.position is None:
            return self.balance
        return self.position.market_value(price)

    def record_equity(self, candle: Candle) -> EquityPoint:
        point = EquityPoint(timestamp=candle.timestamp, balance=self.equity(candle.close))
        self.equity_curve.append(point)
        return point

    def snapshot(self, last_price: float) -> Optional[OpenPositionSnapshot]:
        """Describe the open position, if any, at last_price."""
        position = self.position
        if position is None:
            return None
        return OpenPositionSnapshot(
            entry_timestamp=position.entry_timestamp,
            entry_price=position.entry_price,
            position_size=position.quantity,
            stop_loss_price=position.stop_loss_price,
            take_profit_price=position.take_profit_price,
            last_price=last_price,
            unrealized_profit=position.unrealized_pnl(last_price),
        )
