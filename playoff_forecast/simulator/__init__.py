"""
Fantasy Playoff Forecast Engine

Monte Carlo simulation of the rest of the season and the playoff bracket.
"""

from .models import (
    TeamSeasonStat,
    Streak,
    RatingMode,
    TeamRating,
    SimulatedTeamState,
    Milestone,
    MilestoneCounters,
    PlayoffProbability,
    ForecastStatus,
    StatusResult,
    LeagueSnapshot,
    TeamForecast,
    ForecastResult,
)
from .random_source import RandomSource, SeededRandom, shuffled
from .ratings import calculate_team_rating, rate_teams, win_probability, simulate_game
from .standings import resolve_standings, current_ranks
from .bracket import BracketOutcome, simulate_bracket, semifinal_cohort_size, bye_count
from .engine import (
    simulate_remaining_season,
    run_trial,
    simulate_playoff_odds,
    merge_counters,
    clamp_trials,
)
from .status import classify_status
from .forecast import build_forecast, project_future_season

__all__ = [
    # Models
    "TeamSeasonStat",
    "Streak",
    "RatingMode",
    "TeamRating",
    "SimulatedTeamState",
    "Milestone",
    "MilestoneCounters",
    "PlayoffProbability",
    "ForecastStatus",
    "StatusResult",
    "LeagueSnapshot",
    "TeamForecast",
    "ForecastResult",
    # Randomness
    "RandomSource",
    "SeededRandom",
    "shuffled",
    # Ratings
    "calculate_team_rating",
    "rate_teams",
    "win_probability",
    "simulate_game",
    # Standings
    "resolve_standings",
    "current_ranks",
    # Bracket
    "BracketOutcome",
    "simulate_bracket",
    "semifinal_cohort_size",
    "bye_count",
    # Engine
    "simulate_remaining_season",
    "run_trial",
    "simulate_playoff_odds",
    "merge_counters",
    "clamp_trials",
    # Status
    "classify_status",
    # Forecast
    "build_forecast",
    "project_future_season",
]
