"""
Builds a full league forecast from a snapshot.
"""

from typing import Optional

from .engine import DEFAULT_TRIALS, simulate_playoff_odds
from .models import (
    ForecastResult,
    LeagueSnapshot,
    PlayoffProbability,
    SimulatedTeamState,
    TeamForecast
)
from .random_source import RandomSource, SeededRandom
from .ratings import rate_teams
from .standings import current_ranks
from .status import classify_status


PROJECTION_FLOOR = 10
PROJECTION_CEILING = 85
PROJECTION_DRIFT_PER_YEAR = 20

# Round-over-round conversion used when projecting from zero playoff odds
SEMIFINAL_SHARE = 0.6
FINALS_SHARE = 0.55
TITLE_SHARE = 0.5


def project_future_season(
    probabilities: PlayoffProbability,
    years_ahead: int,
    rng: RandomSource
) -> PlayoffProbability:
    """
    Project this season's odds onto a season years_ahead in the future.

    Playoff odds drift by up to 10 points per year in either direction and are
    held inside 10-85%, since no roster is safe or hopeless seasons out. The
    deeper milestones keep their ratio to the playoff odds.
    """
    if years_ahead <= 0:
        return probabilities

    drift = (rng.next_float() - 0.5) * PROJECTION_DRIFT_PER_YEAR * years_ahead
    make_playoffs = max(PROJECTION_FLOOR, min(PROJECTION_CEILING, probabilities.make_playoffs + drift))

    if probabilities.make_playoffs > 0:
        scale = make_playoffs / probabilities.make_playoffs
        make_semifinals = probabilities.make_semifinals * scale
        make_finals = probabilities.make_finals * scale
        win_finals = probabilities.win_finals * scale
    else:
        make_semifinals = make_playoffs * SEMIFINAL_SHARE
        make_finals = make_semifinals * FINALS_SHARE
        win_finals = make_finals * TITLE_SHARE

    return PlayoffProbability(
        make_playoffs=round(make_playoffs),
        make_semifinals=round(make_semifinals),
        make_finals=round(make_finals),
        win_finals=round(win_finals)
    )


def build_forecast(
    snapshot: LeagueSnapshot,
    n_trials: int = DEFAULT_TRIALS,
    rng: Optional[RandomSource] = None,
    progress_callback: Optional[callable] = None,
    owner_id: Optional[str] = None,
    forecast_year: Optional[int] = None
) -> ForecastResult:
    """
    Run the forecast for every team in the snapshot.

    Ratings are computed once; only simulated outcomes vary between trials.

    Args:
        snapshot: Normalized league state
        n_trials: Number of Monte Carlo trials
        rng: Random source (a fresh unseeded one if omitted)
        progress_callback: Optional callback for progress updates
        owner_id: Platform user id of the requester; their team gets is_user
        forecast_year: Season to forecast; later than snapshot.season projects the odds

    Returns:
        ForecastResult with teams in current standings order
    """
    if rng is None:
        rng = SeededRandom()
    n_trials = max(1, n_trials)

    if forecast_year is None:
        forecast_year = snapshot.season
    years_ahead = 0
    if forecast_year is not None and snapshot.season is not None:
        years_ahead = forecast_year - snapshot.season

    ratings = {r.team_id: r.rating for r in rate_teams(snapshot.teams, snapshot.rating_mode)}
    states = [SimulatedTeamState.from_stat(team, ratings[team.id]) for team in snapshot.teams]
    ranks = current_ranks(states)

    counters = simulate_playoff_odds(
        states,
        snapshot.remaining_weeks,
        snapshot.playoff_spots,
        rng,
        n_trials=n_trials,
        progress_callback=progress_callback
    )

    forecasts = []
    for team in snapshot.teams:
        probabilities = PlayoffProbability.from_counters(counters[team.id], n_trials)
        probabilities = project_future_season(probabilities, years_ahead, rng)
        status = classify_status(
            probabilities,
            rank=ranks[team.id],
            playoff_spots=snapshot.playoff_spots,
            wins=team.wins,
            losses=team.losses,
            total_weeks=snapshot.total_weeks,
            current_week=snapshot.current_week,
            total_teams=snapshot.total_teams
        )
        forecasts.append(TeamForecast(
            team_id=team.id,
            name=team.name,
            rating=ratings[team.id],
            current_record=team.record_str,
            rank=ranks[team.id],
            probabilities=probabilities,
            status=status.status,
            status_reason=status.reason,
            projected_wins=round(counters[team.id].total_wins / n_trials, 1),
            owner_id=team.owner_id,
            is_user=owner_id is not None and team.owner_id == owner_id
        ))

    forecasts.sort(key=lambda f: f.rank)

    return ForecastResult(
        teams=forecasts,
        total_teams=snapshot.total_teams,
        playoff_spots=snapshot.playoff_spots,
        total_weeks=snapshot.total_weeks,
        current_week=snapshot.current_week,
        rating_mode=snapshot.rating_mode,
        n_trials=n_trials,
        season=snapshot.season,
        league_name=snapshot.league_name,
        forecast_year=forecast_year
    )
