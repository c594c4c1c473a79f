# tradedesk/utils/__init__.py
"""
Utility functions and helpers.
"""

from .logging_config import configure_logging, setup_logging
from .time_helpers import parse_timeframe, timeframe_to_minutes, TIMEFRAME_MINUTES

__all__ = [
    "configure_logging",
    "setup_logging",
    "parse_timeframe",
    "timeframe_to_minutes",
    "TIMEFRAME_MINUTES",
]
