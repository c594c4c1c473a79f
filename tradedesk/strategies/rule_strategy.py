# tradedesk/strategies/rule_strategy.py
"""
Strategy driven by a compiled BUY/SELL rule set.
"""

from typing import Optional

from ..models.market_data import Candle
from .base_strategy import BaseStrategy
from .rule_compiler import CompiledRuleSet, compile_rules


class RuleStrategy(BaseStrategy):
    """Enters when the BUY rule holds and exits when the SELL rule holds."""

    def __init__(self, rules: CompiledRuleSet):
        super().__init__(f"{rules.buy} / {rules.sell}")
        self.rules = rules

    @classmethod
    def from_text(cls, text: str) -> "RuleStrategy":
        """Compile rule text once. Raises ConfigurationError on a missing rule."""
        return cls(compile_rules(text))

    def should_enter(self, candle: Candle, indicator_value: Optional[float]) -> bool:
        return self.rules.buy.is_satisfied(indicator_value)

    def should_exit(self, candle: Candle, indicator_value: Optional[float]) -> bool:
        return self.rules.sell.is_satisfied(indicator_value)
