# tradedesk/models/__init__.py
"""
Data models for the trade desk engine.
"""

from .config import AppConfig, EngineConfig
from .market_data import Candle
from .risk import Currency, Direction, RiskMethod, RiskResult, TakeProfitLevel, TradeParameters
from .rules import Comparison, Indicator, Operator, RuleAction, StrategyRule
from .results import (
    BacktestParameters,
    BacktestReport,
    ClosedTrade,
    EquityPoint,
    ExitReason,
    OpenPositionSnapshot,
    PerformanceMetrics,
)

__all__ = [
    "AppConfig",
    "EngineConfig",
    "Candle",
    "Currency",
    "Direction",
    "RiskMethod",
    "RiskResult",
    "TakeProfitLevel",
    "TradeParameters",
    "Comparison",
    "Indicator",
    "Operator",
    "RuleAction",
    "StrategyRule",
    "BacktestParameters",
    "BacktestReport",
    "ClosedTrade",
    "EquityPoint",
    "ExitReason",
    "OpenPositionSnapshot",
    "PerformanceMetrics",
]
