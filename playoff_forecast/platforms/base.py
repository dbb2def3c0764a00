"""
Abstract base class for league data providers.

A provider turns a platform's league data into the normalized LeagueSnapshot
the forecast engine consumes. All network I/O lives here, never in the engine.
"""

from abc import ABC, abstractmethod

from ..simulator.models import LeagueSnapshot, RatingMode


class LeagueDataProvider(ABC):
    """Abstract base class for fantasy platform adapters."""

    @property
    @abstractmethod
    def platform_name(self) -> str:
        """Return the platform name (e.g., 'sleeper')."""
        pass

    @abstractmethod
    async def validate_league(self, league_id: str) -> bool:
        """
        Validate that a league exists and is accessible.

        Raises:
            LeagueNotFoundError: If the league doesn't exist
            LeaguePrivateError: If the league is private/inaccessible
        """
        pass

    @abstractmethod
    async def fetch_snapshot(
        self, league_id: str, rating_mode: RatingMode = RatingMode.STANDARD
    ) -> LeagueSnapshot:
        """
        Fetch the current league state.

        Args:
            league_id: The league identifier
            rating_mode: Rating mode to carry into the snapshot

        Returns:
            Normalized LeagueSnapshot
        """
        pass


class LeagueNotFoundError(Exception):
    """Raised when a league cannot be found."""
    pass


class LeaguePrivateError(Exception):
    """Raised when a league is private and cannot be accessed."""
    pass


class PlatformError(Exception):
    """Raised when there's an error communicating with the platform."""
    pass
