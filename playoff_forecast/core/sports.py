"""
Sport enum and season utilities.
"""

from enum import Enum
from datetime import datetime


class Sport(str, Enum):
    """Supported fantasy sports."""
    FOOTBALL = "football"
    BASKETBALL = "basketball"


# Sleeper API sport codes
SLEEPER_SPORT_CODES = {
    Sport.FOOTBALL: "nfl",
    Sport.BASKETBALL: "nba",
}

# Regular-season length used when a league does not report one
DEFAULT_REGULAR_SEASON_WEEKS = {
    Sport.FOOTBALL: 14,
    Sport.BASKETBALL: 19,
}


def get_current_season(sport: Sport) -> int:
    """
    Get the current season year for a given sport.

    - Football: Sept-Dec = current year, Jan-Feb = previous year
    - Basketball: Oct-Dec = next year (e.g., Oct 2025 = "2026 season")
    """
    now = datetime.now()

    if sport == Sport.BASKETBALL:
        return now.year + 1 if now.month >= 10 else now.year

    if now.month <= 2:
        return now.year - 1
    return now.year
