"""
Sleeper Fantasy platform adapter.

Fetches league data from Sleeper's public API for fantasy football and basketball.
Sleeper has a free, public, read-only API requiring no authentication.
"""

import asyncio
import logging
import math
from typing import Any, Dict, List, Optional

import httpx

from .base import (
    LeagueDataProvider,
    LeagueNotFoundError,
    PlatformError
)
from ..core.config import SLEEPER_TIMEOUT_SECONDS
from ..core.sports import Sport, SLEEPER_SPORT_CODES, DEFAULT_REGULAR_SEASON_WEEKS, get_current_season
from ..simulator.models import LeagueSnapshot, RatingMode, Streak, TeamSeasonStat, coerce_number


logger = logging.getLogger(__name__)


class SleeperAdapter(LeagueDataProvider):
    """Sleeper Fantasy platform adapter supporting football and basketball."""

    BASE_URL = "https://api.sleeper.app/v1"

    def __init__(self, sport: Sport = Sport.FOOTBALL, timeout: float = SLEEPER_TIMEOUT_SECONDS):
        """
        Initialize the Sleeper adapter.

        Args:
            sport: The sport type (football or basketball)
            timeout: HTTP request timeout in seconds
        """
        if sport not in SLEEPER_SPORT_CODES:
            raise ValueError(f"Sleeper does not support {sport.value} leagues")
        self.sport = sport
        self.timeout = timeout

    def _get_sport_code(self) -> str:
        """Get the Sleeper API sport code for the current sport."""
        return SLEEPER_SPORT_CODES[self.sport]

    @property
    def platform_name(self) -> str:
        return "sleeper"

    async def _fetch_json(self, endpoint: str) -> Any:
        """
        Fetch JSON data from Sleeper API.

        Args:
            endpoint: The API endpoint (e.g., "/league/123456")

        Returns:
            JSON response data

        Raises:
            LeagueNotFoundError: If the resource doesn't exist
            PlatformError: If there's an API error
        """
        url = f"{self.BASE_URL}{endpoint}"

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.get(url)

                if response.status_code == 404:
                    raise LeagueNotFoundError(f"Resource not found: {endpoint}")

                # Sleeper returns null for non-existent leagues
                if response.status_code == 200 and response.text == "null":
                    raise LeagueNotFoundError(f"League not found: {endpoint}")

                response.raise_for_status()
                return response.json()

            except httpx.HTTPStatusError as e:
                raise PlatformError(f"Sleeper API error: {e}")
            except httpx.RequestError as e:
                raise PlatformError(f"Network error: {e}")

    async def _get_sport_state(self) -> Dict[str, Any]:
        """Get the current sport state including current week."""
        return await self._fetch_json(f"/state/{self._get_sport_code()}")

    async def validate_league(self, league_id: str) -> bool:
        """Validate that a league exists and is accessible."""
        try:
            league = await self._fetch_json(f"/league/{league_id}")
            if league is None:
                raise LeagueNotFoundError(f"League {league_id} not found")
            return True
        except (LeagueNotFoundError, PlatformError):
            raise
        except Exception as e:
            raise PlatformError(f"Error validating league: {e}")

    async def fetch_snapshot(
        self, league_id: str, rating_mode: RatingMode = RatingMode.STANDARD
    ) -> LeagueSnapshot:
        """
        Fetch league, rosters, users and the sport state, and normalize them.

        Returns:
            LeagueSnapshot for the forecast engine
        """
        league, rosters, users, state = await asyncio.gather(
            self._fetch_json(f"/league/{league_id}"),
            self._fetch_json(f"/league/{league_id}/rosters"),
            self._fetch_json(f"/league/{league_id}/users"),
            self._get_sport_state(),
        )

        if not league:
            raise LeagueNotFoundError(f"League {league_id} not found")
        if not rosters:
            raise LeagueNotFoundError(f"No rosters found for league {league_id}")

        teams = parse_rosters(rosters, users or [])
        settings = league.get("settings", {}) or {}

        playoff_spots = settings.get("playoff_teams") or math.ceil(len(teams) / 2)
        playoff_week_start = settings.get("playoff_week_start")
        if playoff_week_start:
            total_weeks = int(playoff_week_start) - 1
        else:
            total_weeks = DEFAULT_REGULAR_SEASON_WEEKS[self.sport]

        state = state or {}
        # 'leg' tracks the fantasy week; 'week' is the real-world week
        current_week = state.get("leg") or state.get("week") or 1

        try:
            season = int(league.get("season"))
        except (TypeError, ValueError):
            season = get_current_season(self.sport)

        logger.info(
            "Fetched Sleeper league %s: %d teams, %d playoff spots, week %s of %d",
            league_id, len(teams), playoff_spots, current_week, total_weeks
        )

        return LeagueSnapshot(
            teams=tuple(teams),
            playoff_spots=playoff_spots,
            total_weeks=total_weeks,
            current_week=current_week,
            rating_mode=rating_mode,
            league_name=league.get("name", f"League {league_id}"),
            season=season
        )


def _points(settings: Dict[str, Any], key: str) -> float:
    """Sleeper splits points into whole and hundredths fields."""
    return coerce_number(settings.get(key)) + coerce_number(settings.get(f"{key}_decimal")) / 100


def parse_rosters(rosters: List[Dict[str, Any]], users: List[Dict[str, Any]]) -> List[TeamSeasonStat]:
    """
    Map Sleeper rosters to TeamSeasonStat.

    Args:
        rosters: Response of /league/{id}/rosters
        users: Response of /league/{id}/users

    Returns:
        One TeamSeasonStat per roster
    """
    # Build user_id -> display name mapping
    user_names: Dict[str, str] = {}
    for user in users:
        metadata = user.get("metadata") or {}
        team_name = metadata.get("team_name")
        display_name = user.get("display_name")
        user_names[user.get("user_id")] = team_name or display_name

    teams: List[TeamSeasonStat] = []
    for roster in rosters:
        roster_id = roster.get("roster_id")
        roster_settings = roster.get("settings", {}) or {}
        metadata = roster.get("metadata") or {}

        streak: Optional[Streak] = Streak.parse(metadata.get("streak"))

        teams.append(TeamSeasonStat(
            id=roster_id,
            name=user_names.get(roster.get("owner_id")) or f"Team {roster_id}",
            wins=roster_settings.get("wins", 0),
            losses=roster_settings.get("losses", 0),
            ties=roster_settings.get("ties", 0),
            points_for=_points(roster_settings, "fpts"),
            points_against=_points(roster_settings, "fpts_against"),
            roster_size=len(roster.get("players") or []),
            starter_count=len([p for p in (roster.get("starters") or []) if p and p != "0"]),
            streak=streak,
            owner_id=roster.get("owner_id")
        ))

    return teams
