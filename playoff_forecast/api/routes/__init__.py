"""
API route modules.
"""

from .forecast_routes import router as forecasts_router

__all__ = ["forecasts_router"]
