# tradedesk/core/__init__.py
"""
Core calculation and simulation components.
"""

from .backtest_engine import BacktestEngine
from .errors import ConfigurationError, InsufficientDataError, TradeDeskError, ValidationError
from .indicators import calculate_rsi
from .metrics import MetricsCalculator
from .portfolio import Portfolio, PositionState
from .risk_calculator import RiskCalculator

__all__ = [
    "BacktestEngine",
    "ConfigurationError",
    "InsufficientDataError",
    "TradeDeskError",
    "ValidationError",
    "calculate_rsi",
    "MetricsCalculator",
    "Portfolio",
    "PositionState",
    "RiskCalculator",
]
