# tradedesk/data/__init__.py
"""
Market data providers.
"""

from .synthetic_data import SyntheticDataProvider

__all__ = [
    "SyntheticDataProvider",
]
