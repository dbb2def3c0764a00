"""
League data providers.

Provides a unified interface for fetching normalized league snapshots from
fantasy sports platforms.
"""

from typing import Optional

from .base import (
    LeagueDataProvider,
    LeagueNotFoundError,
    LeaguePrivateError,
    PlatformError
)
from .sleeper import SleeperAdapter
from ..core.sports import Sport


def get_adapter(platform: str, sport: Optional[Sport] = None) -> LeagueDataProvider:
    """
    Get the appropriate adapter for a fantasy sports platform.

    Args:
        platform: Platform name ('sleeper')
        sport: The sport type (defaults to football)

    Returns:
        League data provider instance

    Raises:
        ValueError: If the platform is not supported
    """
    if sport is None:
        sport = Sport.FOOTBALL

    if platform.lower() == "sleeper":
        return SleeperAdapter(sport=sport)

    raise ValueError(f"Unsupported platform: {platform}. Supported: sleeper")


__all__ = [
    "LeagueDataProvider",
    "LeagueNotFoundError",
    "LeaguePrivateError",
    "PlatformError",
    "SleeperAdapter",
    "get_adapter",
    "Sport",
]
