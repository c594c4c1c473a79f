# tradedesk/models/rules.py
"""
Strategy rule models.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class RuleAction(str, Enum):
    """What a rule does when its condition holds."""
    BUY = "BUY"
    SELL = "SELL"


class Indicator(str, Enum):
    """Indicators a rule may reference."""
    RSI = "RSI"


class Operator(str, Enum):
    """Comparison operators."""
    LESS_THAN = "<"
    GREATER_THAN = ">"


class Comparison(BaseModel):
    """Condition comparing an indicator value against a fixed threshold."""
    model_config = ConfigDict(frozen=True)

    indicator: Indicator = Field(default=Indicator.RSI, description="Indicator compared")
    operator: Operator = Field(..., description="Comparison operator")
    threshold: float = Field(..., description="Threshold value")

    def evaluate(self, value: Optional[float]) -> bool:
        """Undefined indicator values never satisfy a comparison."""
        if value is None:
            return False
        if self.operator == Operator.LESS_THAN:
            return value < self.threshold
        return value > self.threshold

    def __str__(self) -> str:
        return f"{self.indicator.value} {self.operator.value} {self.threshold:g}"


class StrategyRule(BaseModel):
    """A single parsed directive such as ``BUY when RSI < 30``."""
    model_config = ConfigDict(frozen=True)

    action: RuleAction = Field(..., description="Rule action")
    condition: Comparison = Field(..., description="Rule condition")

    @property
    def indicator(self) -> Indicator:
        return self.condition.indicator

    @property
    def operator(self) -> Operator:
        return self.condition.operator

    @property
    def threshold(self) -> float:
        return self.condition.threshold

    def is_satisfied(self, value: Optional[float]) -> bool:
        return self.condition.evaluate(value)

    def __str__(self) -> str:
        return f"{self.action.value} when {self.condition}"
