"""
Data models for the playoff forecast engine.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple


def coerce_number(value) -> float:
    """Return value as a finite float, or 0.0 when missing or non-finite."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def coerce_count(value) -> int:
    """Return value as a non-negative int, or 0 when missing or non-finite."""
    return max(0, int(coerce_number(value)))


class RatingMode(str, Enum):
    """How team ratings are computed."""
    STANDARD = "standard"
    MOMENTUM = "momentum"


class ForecastStatus(str, Enum):
    """Categorical playoff outlook for a team."""
    CLINCHED = "clinched"
    CONTENDING = "contending"
    LONGSHOT = "longshot"
    ELIMINATED = "eliminated"


class Milestone(str, Enum):
    """Playoff achievement levels tracked per team per trial."""
    MADE_PLAYOFFS = "made_playoffs"
    MADE_SEMIFINALS = "made_semifinals"
    MADE_FINALS = "made_finals"
    WON_CHAMPIONSHIP = "won_championship"


@dataclass(frozen=True)
class Streak:
    """Current win or loss streak."""

    direction: str
    length: int = 0

    @property
    def signed_length(self) -> int:
        if self.direction == "W":
            return self.length
        if self.direction == "L":
            return -self.length
        return 0

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional['Streak']:
        """Parse a streak string like '3W' or 'L2'. Returns None if unreadable."""
        if not value:
            return None
        text = str(value).strip().upper()
        direction = "W" if "W" in text else "L" if "L" in text else None
        digits = "".join(ch for ch in text if ch.isdigit())
        if direction is None or not digits:
            return None
        return cls(direction=direction, length=int(digits))


@dataclass(frozen=True)
class TeamSeasonStat:
    """Season-to-date aggregates for one team. Read-only within the engine."""

    id: int
    name: str = ""
    wins: int = 0
    losses: int = 0
    ties: int = 0
    points_for: float = 0.0
    points_against: float = 0.0
    roster_size: int = 0
    starter_count: int = 0
    streak: Optional[Streak] = None
    owner_id: Optional[str] = None

    def __post_init__(self):
        # Frozen dataclass, so normalize through object.__setattr__
        for name in ("wins", "losses", "ties", "roster_size", "starter_count"):
            object.__setattr__(self, name, coerce_count(getattr(self, name)))
        for name in ("points_for", "points_against"):
            object.__setattr__(self, name, coerce_number(getattr(self, name)))
        if not self.name:
            object.__setattr__(self, "name", f"Team {self.id}")

    @property
    def games_played(self) -> int:
        return self.wins + self.losses + self.ties

    @property
    def record_str(self) -> str:
        if self.ties:
            return f"{self.wins}-{self.losses}-{self.ties}"
        return f"{self.wins}-{self.losses}"


@dataclass(frozen=True)
class TeamRating:
    """Scalar strength rating for one team."""

    team_id: int
    rating: int


@dataclass
class SimulatedTeamState:
    """Per-trial mutable team state."""

    team_id: int
    wins: int = 0
    losses: int = 0
    points_for: float = 0.0
    rating: int = 1000

    @classmethod
    def from_stat(cls, stat: TeamSeasonStat, rating: int) -> 'SimulatedTeamState':
        return cls(
            team_id=stat.id,
            wins=stat.wins,
            losses=stat.losses,
            points_for=stat.points_for,
            rating=rating
        )

    def copy(self) -> 'SimulatedTeamState':
        """Create a copy of this state for a new trial."""
        return SimulatedTeamState(
            team_id=self.team_id,
            wins=self.wins,
            losses=self.losses,
            points_for=self.points_for,
            rating=self.rating
        )


@dataclass
class MilestoneCounters:
    """Milestone counts for one team accumulated across trials."""

    team_id: int
    made_playoffs: int = 0
    made_semifinals: int = 0
    made_finals: int = 0
    won_championship: int = 0
    total_wins: int = 0

    def record(self, milestone: Milestone) -> None:
        setattr(self, milestone.value, getattr(self, milestone.value) + 1)

    def merge(self, other: 'MilestoneCounters') -> 'MilestoneCounters':
        """Return the sum of two counter sets for the same team."""
        if other.team_id != self.team_id:
            raise ValueError(f"Cannot merge counters for team {other.team_id} into team {self.team_id}")
        return MilestoneCounters(
            team_id=self.team_id,
            made_playoffs=self.made_playoffs + other.made_playoffs,
            made_semifinals=self.made_semifinals + other.made_semifinals,
            made_finals=self.made_finals + other.made_finals,
            won_championship=self.won_championship + other.won_championship,
            total_wins=self.total_wins + other.total_wins
        )

    def to_dict(self) -> dict:
        return {
            "team_id": self.team_id,
            "made_playoffs": self.made_playoffs,
            "made_semifinals": self.made_semifinals,
            "made_finals": self.made_finals,
            "won_championship": self.won_championship,
            "total_wins": self.total_wins
        }


def _percent(count: int, n_trials: int) -> int:
    if n_trials <= 0:
        return 0
    return min(100, max(0, round(count / n_trials * 100)))


@dataclass(frozen=True)
class PlayoffProbability:
    """Integer percentages (0-100) for each milestone."""

    make_playoffs: int = 0
    make_semifinals: int = 0
    make_finals: int = 0
    win_finals: int = 0

    @classmethod
    def from_counters(cls, counters: MilestoneCounters, n_trials: int) -> 'PlayoffProbability':
        return cls(
            make_playoffs=_percent(counters.made_playoffs, n_trials),
            make_semifinals=_percent(counters.made_semifinals, n_trials),
            make_finals=_percent(counters.made_finals, n_trials),
            win_finals=_percent(counters.won_championship, n_trials)
        )

    def to_dict(self) -> dict:
        return {
            "make_playoffs": self.make_playoffs,
            "make_semifinals": self.make_semifinals,
            "make_finals": self.make_finals,
            "win_finals": self.win_finals
        }


@dataclass(frozen=True)
class StatusResult:
    """Status plus the reason behind it."""

    status: ForecastStatus
    reason: str


@dataclass(frozen=True)
class LeagueSnapshot:
    """Normalized league state consumed by the engine."""

    teams: Tuple[TeamSeasonStat, ...]
    playoff_spots: int
    total_weeks: int
    current_week: int
    rating_mode: RatingMode = RatingMode.STANDARD
    league_name: Optional[str] = None
    season: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "teams", tuple(self.teams))
        for name in ("playoff_spots", "total_weeks", "current_week"):
            object.__setattr__(self, name, coerce_count(getattr(self, name)))

    @property
    def total_teams(self) -> int:
        return len(self.teams)

    @property
    def remaining_weeks(self) -> int:
        """Weeks still to be played, counting the current week."""
        if self.current_week > self.total_weeks:
            return 0
        return max(0, self.total_weeks - max(self.current_week, 1) + 1)


@dataclass
class TeamForecast:
    """Forecast for a single team."""

    team_id: int
    name: str
    rating: int
    current_record: str
    rank: int
    probabilities: PlayoffProbability
    status: ForecastStatus
    status_reason: str
    projected_wins: float = 0.0
    owner_id: Optional[str] = None
    is_user: bool = False

    def to_dict(self) -> dict:
        return {
            "team_id": self.team_id,
            "name": self.name,
            "owner_id": self.owner_id,
            "is_user": self.is_user,
            "rating": self.rating,
            "current_record": self.current_record,
            "rank": self.rank,
            "probabilities": self.probabilities.to_dict(),
            "status": self.status.value,
            "status_reason": self.status_reason,
            "projected_wins": self.projected_wins
        }


@dataclass
class ForecastResult:
    """Full forecast for a league."""

    teams: List[TeamForecast]
    total_teams: int
    playoff_spots: int
    total_weeks: int
    current_week: int
    rating_mode: RatingMode
    n_trials: int
    season: Optional[int] = None
    league_name: Optional[str] = None
    forecast_year: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "teams": [t.to_dict() for t in self.teams],
            "total_teams": self.total_teams,
            "playoff_spots": self.playoff_spots,
            "total_weeks": self.total_weeks,
            "current_week": self.current_week,
            "rating_mode": self.rating_mode.value,
            "n_trials": self.n_trials,
            "season": self.season,
            "league_name": self.league_name,
            "forecast_year": self.forecast_year
        }


# Type alias for per-team counters keyed by team id
CountersDict = Dict[int, MilestoneCounters]
