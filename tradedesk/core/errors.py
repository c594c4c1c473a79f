from __future__ import annotations


class TradeDeskError(Exception):
    """Base exception for engine failures."""


class ValidationError(TradeDeskError, ValueError):
    """Raised when numeric inputs are non-positive or inconsistent."""


class ConfigurationError(TradeDeskError):
    """Raised when strategy text is missing a required Buy or Sell rule."""


class InsufficientDataError(TradeDeskError):
    """Raised when the requested range yields too few candles."""
