# tradedesk/models/market_data.py
"""
Market data models.
"""

from datetime import datetime, timezone
from pydantic import BaseModel, ConfigDict, Field


class Candle(BaseModel):
    """OHLCV candle data."""
    model_config = ConfigDict(frozen=True)

    timestamp: int = Field(..., description="Candle open time in epoch milliseconds (UTC)")
    open: float = Field(..., description="Opening price")
    high: float = Field(..., description="High price")
    low: float = Field(..., description="Low price")
    close: float = Field(..., description="Closing price")
    volume: float = Field(default=0.0, description="Trading volume")

    @property
    def open_time(self) -> datetime:
        """Candle open time as an aware UTC datetime."""
        return datetime.fromtimestamp(self.timestamp / 1000, tz=timezone.utc)

    @property
    def is_consistent(self) -> bool:
        """True when low <= min(open, close) <= max(open, close) <= high."""
        return self.low <= min(self.open, self.close) <= max(self.open, self.close) <= self.high

