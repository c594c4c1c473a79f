# tradedesk/models/tools.py
"""
Result models for the standalone trade tools.
"""

from pydantic import BaseModel, Field


class ProfitResult(BaseModel):
    """Outcome of a buy/sell round trip including fees."""
    total_buy: float = Field(..., description="Buy price x quantity")
    total_sell: float = Field(..., description="Sell price x quantity")
    fees: float = Field(..., description="Fees on both legs")
    net_profit: float = Field(..., description="Sell minus buy minus fees")
    profit_percent: float = Field(..., description="Net profit relative to total buy")


class CompoundingPeriod(BaseModel):
    """One period of a compounding projection."""
    period: int = Field(..., description="Period number starting at 1")
    start_capital: float = Field(..., description="Capital at period start")
    target_profit: float = Field(..., description="Profit at the target rate")
    reinvested_profit: float = Field(..., description="Portion of the profit kept in the account")
    end_capital: float = Field(..., description="Capital at period end")
