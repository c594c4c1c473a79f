"""
HTTP API for the trade desk engine.
"""

from .api import create_app

__all__ = ["create_app"]
