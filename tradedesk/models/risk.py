# tradedesk/models/risk.py
"""
Trade sizing input and output models.
"""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class Direction(str, Enum):
    """Trade direction."""
    LONG = "Long"
    SHORT = "Short"


class RiskMethod(str, Enum):
    """How the amount at risk is derived."""
    FIXED_PERCENTAGE = "FixedPercentage"
    FIXED_AMOUNT = "FixedAmount"
    KELLY_CRITERION = "KellyCriterion"


class Currency(str, Enum):
    """Supported account currencies."""
    USD = "USD"
    EUR = "EUR"
    JPY = "JPY"
    GBP = "GBP"
    AUD = "AUD"
    CAD = "CAD"
    CHF = "CHF"
    CNY = "CNY"
    BDT = "BDT"


class TradeParameters(BaseModel):
    """Inputs for a single position sizing request."""
    model_config = ConfigDict(frozen=True)

    symbol: str = Field(default="BTC/USD", description="Trading symbol")
    account_currency: Currency = Field(default=Currency.USD, description="Account currency")
    account_balance: float = Field(..., description="Account balance")
    entry_price: float = Field(..., description="Planned entry price")
    stop_loss_price: float = Field(..., description="Stop-loss price")
    target_price: float = Field(..., description="Target price")
    direction: Direction = Field(default=Direction.LONG, description="Trade direction")
    leverage: float = Field(default=1.0, description="Leverage multiplier")
    risk_method: RiskMethod = Field(default=RiskMethod.FIXED_PERCENTAGE, description="Risk method")

    # Method specific fields
    risk_percentage: float = Field(default=1.0, description="Percent of balance at risk (FixedPercentage)")
    fixed_risk_amount: float = Field(default=0.0, description="Amount at risk (FixedAmount)")
    win_probability: float = Field(default=0.0, description="Win probability as a fraction (KellyCriterion)")
    win_loss_ratio: float = Field(default=0.0, description="Average win / average loss (KellyCriterion)")


class TakeProfitLevel(BaseModel):
    """One rung of the take-profit ladder."""
    model_config = ConfigDict(frozen=True)

    rr: float = Field(..., description="Multiple of the stop distance")
    price: float = Field(..., description="Implied exit price")
    profit: float = Field(..., description="Profit at this price for the computed size")


class RiskResult(BaseModel):
    """Position sizing result."""
    model_config = ConfigDict(frozen=True)

    risk_amount: float = Field(..., description="Amount at risk in account currency")
    stop_distance: float = Field(..., description="Distance from entry to stop (1R)")
    target_distance: float = Field(..., description="Distance from entry to target")
    kelly_fraction: Optional[float] = Field(None, description="Kelly fraction when that method is used")
    position_size_asset: float = Field(..., description="Position size in asset units")
    position_size_fiat: float = Field(..., description="Position size in account currency")
    notional_value: float = Field(..., description="Position value including leverage")
    max_loss_fiat: float = Field(..., description="Loss if the stop is hit")
    max_loss_percent: float = Field(..., description="Max loss as percentage of balance")
    reward_risk_ratio: float = Field(..., description="Target distance / stop distance")
    take_profit_levels: List[TakeProfitLevel] = Field(default_factory=list, description="Take-profit ladder")
    asset_name: str = Field(..., description="Base asset name")
    account_currency: Currency = Field(..., description="Account currency")
