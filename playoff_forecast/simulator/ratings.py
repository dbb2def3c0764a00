"""
Team rating model and single-game win probability.
"""

import math
from typing import Iterable, List

from .models import RatingMode, TeamRating, TeamSeasonStat
from .random_source import RandomSource


BASE_RATING = 1000
ROSTER_BONUS_CAP = 25
VOLUME_TERM_CAP = 100.0
RATING_LIMIT = 1e9
# 10 ** 300 is still a finite float
MAX_EXPONENT = 300.0


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_team_rating(stat: TeamSeasonStat, mode: RatingMode = RatingMode.STANDARD) -> int:
    """
    Convert a team's season-to-date aggregates into one scalar rating.

    Record and scoring terms only apply once the team has played a game; the
    roster and starter bonuses always apply so teams with identical records
    are still separated early in the season.

    Args:
        stat: Season aggregates for the team
        mode: Standard or momentum-weighted rating

    Returns:
        Rating rounded to the nearest integer, centered near 1000
    """
    rating = float(BASE_RATING)
    games = stat.games_played

    if games > 0:
        win_pct = stat.wins / games
        rating += (win_pct - 0.5) * 400

        ppg = stat.points_for / games
        rating += (ppg - 100) * 2
        if stat.points_against > 0:
            papg = stat.points_against / games
            rating += (ppg - papg) * 1.5

    rating += min(stat.roster_size, ROSTER_BONUS_CAP) * 1.5
    rating += stat.starter_count * 3

    if mode == RatingMode.MOMENTUM:
        if stat.streak is not None:
            rating += stat.streak.signed_length * 10
        rating += min(stat.points_for / 100 * 0.3, VOLUME_TERM_CAP)

    # Astronomical box scores can push the terms to inf, or inf - inf
    if math.isnan(rating):
        rating = float(BASE_RATING)
    rating = max(-RATING_LIMIT, min(RATING_LIMIT, rating))

    return _round_half_up(rating)


def win_probability(rating_a: float, rating_b: float) -> float:
    """Probability that A beats B in a single game (logistic, 400-point scale)."""
    exponent = -(rating_a - rating_b) / 400
    exponent = max(-MAX_EXPONENT, min(MAX_EXPONENT, exponent))
    return 1.0 / (1.0 + 10 ** exponent)


def simulate_game(rating_a: float, rating_b: float, rng: RandomSource) -> bool:
    """
    Resolve one game. Returns True if A wins.

    The draw is the mean of three uniforms, which narrows the spread compared
    with a single uniform draw.
    """
    noise = (rng.next_float() + rng.next_float() + rng.next_float()) / 3
    return noise < win_probability(rating_a, rating_b)


def rate_teams(teams: Iterable[TeamSeasonStat], mode: RatingMode = RatingMode.STANDARD) -> List[TeamRating]:
    """Rate every team once for a forecast request."""
    return [TeamRating(team_id=team.id, rating=calculate_team_rating(team, mode)) for team in teams]
