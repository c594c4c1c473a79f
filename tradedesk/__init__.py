"""
Trade planning and strategy backtesting engine.
"""

from .service import compute_risk, run_backtest

__version__ = "0.1.0"

__all__ = [
    "compute_risk",
    "run_backtest",
]
