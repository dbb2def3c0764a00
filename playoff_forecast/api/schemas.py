"""
Pydantic schemas for API request/response validation.
"""

from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field, field_validator

from ..core.config import FORECAST_DEFAULT_TRIALS, FORECAST_MAX_TRIALS, FORECAST_MIN_TRIALS
from ..simulator.models import LeagueSnapshot, RatingMode, Streak, TeamSeasonStat


# ============== Forecast Schemas ==============

class ForecastRunRequest(BaseModel):
    """Forecast a league fetched from a platform."""
    platform: str = Field(default="sleeper", pattern="^(sleeper)$")
    league_id: str = Field(..., min_length=1, max_length=50)
    sport: str = Field(default="football", pattern="^(football|basketball)$")
    n_trials: int = Field(default=FORECAST_DEFAULT_TRIALS, ge=FORECAST_MIN_TRIALS, le=FORECAST_MAX_TRIALS)
    rating_mode: RatingMode = RatingMode.STANDARD
    seed: Optional[int] = None  # Fixed seed gives reproducible results and bypasses the cache
    owner_id: Optional[str] = Field(default=None, max_length=50)
    forecast_year: Optional[int] = Field(default=None, ge=2000, le=2100)


class StreakInput(BaseModel):
    """Current win/loss streak."""
    direction: str = Field(..., pattern="^(W|L)$")
    length: int = Field(default=0, ge=0)


class TeamStatInput(BaseModel):
    """Season-to-date aggregates for one team."""
    id: int
    name: Optional[str] = None
    wins: Optional[float] = 0
    losses: Optional[float] = 0
    ties: Optional[float] = 0
    points_for: Optional[float] = 0
    points_against: Optional[float] = 0
    roster_size: Optional[float] = 0
    starter_count: Optional[float] = 0
    streak: Optional[StreakInput] = None
    owner_id: Optional[str] = None

    def to_stat(self) -> TeamSeasonStat:
        streak = None
        if self.streak is not None:
            streak = Streak(direction=self.streak.direction, length=self.streak.length)
        return TeamSeasonStat(
            id=self.id,
            name=self.name or "",
            wins=self.wins,
            losses=self.losses,
            ties=self.ties,
            points_for=self.points_for,
            points_against=self.points_against,
            roster_size=self.roster_size,
            starter_count=self.starter_count,
            streak=streak,
            owner_id=self.owner_id
        )


class ForecastSimulateRequest(BaseModel):
    """Forecast a league from a snapshot supplied by the caller."""
    teams: List[TeamStatInput] = Field(..., min_length=1)
    playoff_spots: int = Field(..., ge=0)
    total_weeks: int = Field(..., ge=0)
    current_week: int = Field(..., ge=0)
    rating_mode: RatingMode = RatingMode.STANDARD
    league_name: Optional[str] = None
    season: Optional[int] = None
    n_trials: int = Field(default=FORECAST_DEFAULT_TRIALS, ge=FORECAST_MIN_TRIALS, le=FORECAST_MAX_TRIALS)
    seed: Optional[int] = None
    owner_id: Optional[str] = Field(default=None, max_length=50)
    forecast_year: Optional[int] = Field(default=None, ge=2000, le=2100)

    @field_validator("teams")
    @classmethod
    def unique_team_ids(cls, teams: List[TeamStatInput]) -> List[TeamStatInput]:
        seen = set()
        for team in teams:
            if team.id in seen:
                raise ValueError(f"Duplicate team id: {team.id}")
            seen.add(team.id)
        return teams

    def to_snapshot(self) -> LeagueSnapshot:
        return LeagueSnapshot(
            teams=tuple(t.to_stat() for t in self.teams),
            playoff_spots=self.playoff_spots,
            total_weeks=self.total_weeks,
            current_week=self.current_week,
            rating_mode=self.rating_mode,
            league_name=self.league_name,
            season=self.season
        )


class ProbabilityResponse(BaseModel):
    """Milestone percentages (0-100)."""
    make_playoffs: int
    make_semifinals: int
    make_finals: int
    win_finals: int


class TeamForecastResponse(BaseModel):
    """Forecast for a single team."""
    team_id: int
    name: str
    owner_id: Optional[str] = None
    is_user: bool = False
    rating: int
    current_record: str
    rank: int
    probabilities: ProbabilityResponse
    status: str  # clinched, contending, longshot, eliminated
    status_reason: str
    projected_wins: float


class ForecastResponse(BaseModel):
    """Full forecast response."""
    teams: List[TeamForecastResponse]
    total_teams: int
    playoff_spots: int
    total_weeks: int
    current_week: int
    rating_mode: str
    n_trials: int
    season: Optional[int] = None
    league_name: Optional[str] = None
    forecast_year: Optional[int] = None
    platform: Optional[str] = None
    league_id: Optional[str] = None
    cached: bool = False
    generated_at: Optional[datetime] = None


class MatchupRequest(BaseModel):
    """Single-game win probability request."""
    rating_a: float
    rating_b: float


class MatchupResponse(BaseModel):
    """Single-game win probability for each side."""
    rating_a: float
    rating_b: float
    win_probability_a: float
    win_probability_b: float


class CacheInvalidateResponse(BaseModel):
    """Cached forecasts removed for a league."""
    platform: str
    league_id: str
    deleted: int
