# tradedesk/strategies/base_strategy.py
"""
Base strategy interface for backtesting.
"""
from abc import ABC, abstractmethod
from typing import Optional
from ..models.market_data import Candle


class BaseStrategy(ABC):
    """
    Base strategy interface that all strategies must implement.

    The engine owns position state; a strategy only answers whether the
    current bar is an entry or an exit signal.
    """

    def __init__(self, name: str = "BaseStrategy"):
        """
        Initialize strategy.

        Args:
            name: Strategy name
        """
        self.name = name

    @abstractmethod
    def should_enter(self, candle: Candle, indicator_value: Optional[float]) -> bool:
        """
        Whether a flat engine should open a position on this bar.

        Args:
            candle: Current candle
            indicator_value: Indicator value aligned with the candle, None during warm-up
        """

    @abstractmethod
    def should_exit(self, candle: Candle, indicator_value: Optional[float]) -> bool:
        """
        Whether an open position should be closed at this bar's close.

        Args:
            candle: Current candle
            indicator_value: Indicator value aligned with the candle, None during warm-up
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
