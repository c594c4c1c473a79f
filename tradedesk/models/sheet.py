# tradedesk/models/sheet.py
"""
Manual backtest sheet models.
"""

from datetime import date, time
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field

from .risk import Direction


class Session(str, Enum):
    """Trading session a sheet trade was taken in."""
    LONDON = "London"
    NEW_YORK = "New York"
    TOKYO = "Tokyo"
    SYDNEY = "Sydney"


class SheetTrade(BaseModel):
    """A trade recorded by hand while replaying a chart."""
    trade_date: date = Field(..., description="Trade date")
    trade_time: Optional[time] = Field(None, description="Entry time of day")
    direction: Direction = Field(default=Direction.LONG, description="Trade direction")
    entry: float = Field(..., description="Entry price")
    stop_loss: float = Field(..., description="Stop-loss price")
    take_profit: float = Field(..., description="Take-profit price")
    result: float = Field(..., description="P&L in account currency")
    rr: float = Field(default=0.0, description="Realized reward:risk")
    session: Session = Field(default=Session.LONDON, description="Trading session")
    note: str = Field(default="", description="Free-text note")
    win: bool = Field(..., description="Whether the trade counted as a win")


class BucketStat(BaseModel):
    """Result for one bucket (day, session, weekday or hour)."""
    key: str = Field(..., description="Bucket label")
    value: float = Field(..., description="Summed result for days, average result otherwise")


class SheetSummary(BaseModel):
    """Summary statistics over a sheet."""
    total_trades: int
    win_rate: float
    avg_rr: float
    avg_return_per_trade: float
    best_day: Optional[BucketStat] = None
    worst_day: Optional[BucketStat] = None
    most_profitable_session: Optional[BucketStat] = None
    most_profitable_weekday: Optional[BucketStat] = None
    least_profitable_weekday: Optional[BucketStat] = None
    most_profitable_hour: Optional[BucketStat] = None
    least_profitable_hour: Optional[BucketStat] = None


class SheetEquityPoint(BaseModel):
    trade: int
    balance: float


class SheetMetrics(SheetSummary):
    """Summary plus capital based metrics."""
    net_profit: float
    net_profit_percent: float
    gross_profit: float
    gross_loss: float
    profit_factor: Optional[float] = None
    max_drawdown: float
    wins: int
    losses: int
    equity_curve: List[SheetEquityPoint] = Field(default_factory=list)
