# tradedesk/core/calculators.py
"""
Standalone trade tools: round-trip profit and compounding projection.
"""

import math
from typing import List

from ..models.tools import CompoundingPeriod, ProfitResult
from .errors import ValidationError


def calculate_profit(buy_price: float, sell_price: float, quantity: float, fee_percent: float = 0.0) -> ProfitResult:
    """
    Profit of buying and selling ``quantity`` units with a fee on each leg.

    Raises:
        ValidationError: If buy price or quantity is not positive, or the
            fee or sell price is negative
    """
    if not all(math.isfinite(v) for v in (buy_price, sell_price, quantity, fee_percent)):
        raise ValidationError("Prices, quantity and fee must be finite numbers.")
    if buy_price <= 0 or quantity <= 0:
        raise ValidationError("Buy price and quantity must be positive numbers.")
    if sell_price < 0 or fee_percent < 0:
        raise ValidationError("Sell price and fee percentage cannot be negative.")

    total_buy = buy_price * quantity
    total_sell = sell_price * quantity
    fees = (total_buy + total_sell) * (fee_percent / 100)
    net_profit = total_sell - total_buy - fees

    return ProfitResult(
        total_buy=total_buy,
        total_sell=total_sell,
        fees=fees,
        net_profit=net_profit,
        profit_percent=net_profit / total_buy * 100,
    )


def project_compounding(
    initial_capital: float,
    target_profit_percent: float,
    periods: int,
    reinvestment_rate: float = 100.0
) -> List[CompoundingPeriod]:
    """
    Capital growth when a share of each period's target profit is kept.

    Args:
        initial_capital: Starting capital
        target_profit_percent: Profit per period in percent of start capital
        periods: Number of periods
        reinvestment_rate: Percent of each period's profit reinvested

    Raises:
        ValidationError: On non-positive capital or periods, or a
            reinvestment rate outside [0, 100]
    """
    if not all(math.isfinite(v) for v in (initial_capital, target_profit_percent, reinvestment_rate)):
        raise ValidationError("Capital and percentages must be finite numbers.")
    if initial_capital <= 0:
        raise ValidationError("Initial capital must be positive.")
    if periods < 1:
        raise ValidationError("Number of periods must be at least 1.")
    if not 0 <= reinvestment_rate <= 100:
        raise ValidationError("Reinvestment rate must be between 0 and 100.")

    results = []
    capital = initial_capital
    for period in range(1, periods + 1):
        target_profit = capital * (target_profit_percent / 100)
        reinvested_profit = target_profit * (reinvestment_rate / 100)
        end_capital = capital + reinvested_profit
        results.append(CompoundingPeriod(
            period=period,
            start_capital=capital,
            target_profit=target_profit,
            reinvested_profit=reinvested_profit,
            end_capital=end_capital,
        ))
        capital = end_capital
    return results
