"""
Status classification from aggregated playoff odds.

Rules are checked in order; the first match wins:
1. Clinched: >= 95% playoff odds with more than half the season played
   (the larger of the team's decided games and the league's completed weeks)
2. Eliminated: <= 2% playoff odds after more than 3 games
3. Longshot: < 20% playoff odds
4. Contending: currently holding a playoff spot
5. Contending: >= 50% playoff odds
6. Contending: everyone else (bubble)
"""

from .models import ForecastStatus, PlayoffProbability, StatusResult


CLINCH_THRESHOLD = 95
ELIMINATION_THRESHOLD = 2
ELIMINATION_MIN_GAMES = 3
LONGSHOT_THRESHOLD = 20
STRONG_PATH_THRESHOLD = 50


def classify_status(
    probabilities: PlayoffProbability,
    rank: int,
    playoff_spots: int,
    wins: int,
    losses: int,
    total_weeks: int,
    current_week: int,
    total_teams: int
) -> StatusResult:
    """
    Classify one team's playoff outlook.

    Args:
        probabilities: Aggregated playoff odds for the team
        rank: Current standings rank (1 = first)
        playoff_spots: Number of playoff qualifiers
        wins: Current wins
        losses: Current losses
        total_weeks: Regular-season length in weeks
        current_week: Current week number
        total_teams: Teams in the league

    Returns:
        StatusResult with status and reason
    """
    games_played = wins + losses
    # Week N is in progress, so N - 1 weeks are complete
    completed_weeks = min(max(current_week - 1, 0), total_weeks)
    season_played = max(games_played, completed_weeks)
    odds = probabilities.make_playoffs

    if odds >= CLINCH_THRESHOLD and season_played > total_weeks / 2:
        return StatusResult(
            ForecastStatus.CLINCHED,
            f"{odds}% playoff odds with {season_played} of {total_weeks} weeks played"
        )

    if odds <= ELIMINATION_THRESHOLD and games_played > ELIMINATION_MIN_GAMES:
        return StatusResult(
            ForecastStatus.ELIMINATED,
            f"Playoff odds of {odds}% are below the elimination threshold after {games_played} games"
        )

    if odds < LONGSHOT_THRESHOLD:
        if games_played == 0:
            return StatusResult(
                ForecastStatus.LONGSHOT,
                f"Season has not started; roster projects to only {odds}% playoff odds"
            )
        return StatusResult(
            ForecastStatus.LONGSHOT,
            f"Uphill climb at {wins}-{losses}: {odds}% playoff odds"
        )

    if rank <= playoff_spots:
        return StatusResult(
            ForecastStatus.CONTENDING,
            f"Currently in playoff position at #{rank} of {total_teams}"
        )

    if odds >= STRONG_PATH_THRESHOLD:
        return StatusResult(
            ForecastStatus.CONTENDING,
            f"Strong path to the playoffs from #{rank}: {odds}% odds"
        )

    return StatusResult(
        ForecastStatus.CONTENDING,
        f"Bubble team at #{rank} of {total_teams} with {odds}% playoff odds"
    )
