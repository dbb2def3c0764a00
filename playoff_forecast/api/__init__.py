"""
API module.
"""

from .routes import forecasts_router

__all__ = [
    "forecasts_router",
]
