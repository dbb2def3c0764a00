"""
Core utilities, enums and configuration.
"""

from .sports import Sport, SLEEPER_SPORT_CODES, get_current_season

__all__ = [
    "Sport",
    "SLEEPER_SPORT_CODES",
    "get_current_season",
]
