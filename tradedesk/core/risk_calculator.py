# tradedesk/core/risk_calculator.py
"""
Position sizing and reward:risk calculation.
"""

import logging
import math
from typing import List, Optional, Tuple

from ..models.risk import Direction, RiskMethod, RiskResult, TakeProfitLevel, TradeParameters
from .errors import ValidationError


logger = logging.getLogger(__name__)

# Fixed R multiples of the take-profit ladder
TAKE_PROFIT_MULTIPLES = (1.5, 2.0, 3.0)

NUMERIC_FIELDS = (
    "account_balance",
    "entry_price",
    "stop_loss_price",
    "target_price",
    "leverage",
    "risk_percentage",
    "fixed_risk_amount",
    "win_probability",
    "win_loss_ratio",
)


class RiskCalculator:
    """
    Sizes a trade from account balance, risk method and stop distance.

    Every check runs before any result is built, so a rejected request
    never yields a partial result.
    """

    def calculate(self, params: TradeParameters) -> RiskResult:
        """
        Calculate position size, loss, reward:risk and take-profit ladder.

        Args:
            params: Trade parameters

        Returns:
            RiskResult

        Raises:
            ValidationError: If any input is non-finite, non-positive or inconsistent
        """
        non_finite = [name for name in NUMERIC_FIELDS if not math.isfinite(getattr(params, name))]
        if non_finite:
            raise ValidationError(f"Inputs must be finite numbers: {', '.join(non_finite)}.")

        if params.account_balance <= 0 or params.entry_price <= 0 or params.stop_loss_price <= 0:
            raise ValidationError(
                "Account Balance, Entry Price, and Stop-Loss Price must be positive numbers."
            )
        if params.leverage < 1:
            raise ValidationError("Leverage must be at least 1.")

        risk_amount, kelly_fraction = self._risk_amount(params)

        if risk_amount > params.account_balance:
            raise ValidationError("Risk amount cannot be greater than the account balance.")
        if risk_amount <= 0:
            raise ValidationError("Calculated risk amount must be positive.")

        stop_distance = self._signed_distance(params.direction, params.entry_price, params.stop_loss_price)
        if stop_distance <= 0:
            raise ValidationError(
                "Stop-Loss price creates a zero or negative risk distance. "
                "For Long, SL must be below Entry. For Short, SL must be above Entry."
            )

        target_distance = -self._signed_distance(params.direction, params.entry_price, params.target_price)
        if params.target_price <= 0 or target_distance <= 0:
            raise ValidationError("Target price must be positive and in the profitable direction of the trade.")

        position_size_asset = risk_amount / stop_distance
        position_size_fiat = position_size_asset * params.entry_price

        result = RiskResult(
            risk_amount=risk_amount,
            stop_distance=stop_distance,
            target_distance=target_distance,
            kelly_fraction=kelly_fraction,
            position_size_asset=position_size_asset,
            position_size_fiat=position_size_fiat,
            notional_value=position_size_fiat * params.leverage,
            max_loss_fiat=risk_amount,
            max_loss_percent=risk_amount / params.account_balance * 100,
            reward_risk_ratio=target_distance / stop_distance,
            take_profit_levels=self._take_profit_ladder(params, stop_distance, position_size_asset),
            asset_name=params.symbol.split('/')[0] or 'Asset',
            account_currency=params.account_currency,
        )

        logger.debug(
            f"Sized {params.direction.value} {params.symbol}: {position_size_asset:.6f} units, "
            f"risk {risk_amount:.2f}, R:R {result.reward_risk_ratio:.2f}"
        )
        return result

    def _risk_amount(self, params: TradeParameters) -> Tuple[float, Optional[float]]:
        """Amount at risk and, for Kelly, the fraction it came from."""
        if params.risk_method == RiskMethod.FIXED_PERCENTAGE:
            return params.account_balance * params.risk_percentage / 100, None

        if params.risk_method == RiskMethod.FIXED_AMOUNT:
            return params.fixed_risk_amount, None

        p = params.win_probability
        if p <= 0 or params.win_loss_ratio <= 0:
            raise ValidationError("For Kelly Criterion, Win Probability and Win/Loss Ratio must be positive.")
        if p > 1:
            raise ValidationError("For Kelly Criterion, Win Probability must be a fraction no greater than 1.")
        kelly_fraction = p - (1 - p) / params.win_loss_ratio
        if kelly_fraction <= 0:
            raise ValidationError(
                "Kelly Criterion suggests not taking this trade (fraction is zero or negative)."
            )
        return params.account_balance * kelly_fraction, kelly_fraction

    @staticmethod
    def _signed_distance(direction: Direction, entry: float, price: float) -> float:
        """Distance from entry to price, positive on the losing side of the trade."""
        if direction == Direction.LONG:
            return entry - price
        return price - entry

    @staticmethod
    def _take_profit_ladder(
        params: TradeParameters,
        stop_distance: float,
        position_size_asset: float
    ) -> List[TakeProfitLevel]:
        levels = []
        for rr in TAKE_PROFIT_MULTIPLES:
            profit_distance = stop_distance * rr
            if params.direction == Direction.LONG:
                price = params.entry_price + profit_distance
            else:
                price = params.entry_price - profit_distance
            levels.append(TakeProfitLevel(rr=rr, price=price, profit=position_size_asset * profit_distance))
        return levels

