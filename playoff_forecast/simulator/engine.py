"""
Monte Carlo simulation engine for playoff probability calculations.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from .bracket import BracketOutcome, simulate_bracket
from .models import CountersDict, Milestone, MilestoneCounters, SimulatedTeamState
from .random_source import RandomSource, shuffled
from .ratings import simulate_game
from .standings import resolve_standings


logger = logging.getLogger(__name__)


DEFAULT_TRIALS = 5000
MIN_TRIALS = 80
MAX_TRIALS = 5000


def clamp_trials(
    n_trials: Optional[int],
    minimum: int = MIN_TRIALS,
    maximum: int = MAX_TRIALS,
    default: int = DEFAULT_TRIALS
) -> int:
    """Keep the trial count inside the supported range."""
    if n_trials is None:
        n_trials = default
    return max(minimum, min(maximum, int(n_trials)))


def simulate_remaining_season(
    states: Sequence[SimulatedTeamState],
    remaining_weeks: int,
    rng: RandomSource
) -> None:
    """
    Simulate the rest of the regular season in place.

    Each week the teams are shuffled and paired sequentially (0v1, 2v3, ...).
    With an odd team count the last team sits out that week. Points-for is
    left untouched; only wins and losses are projected forward.

    Args:
        states: Team states for this trial (mutated)
        remaining_weeks: Weeks left to play; 0 means the season is over
        rng: Random source for pairings and results
    """
    if remaining_weeks <= 0:
        return

    for _ in range(remaining_weeks):
        order = shuffled(states, rng)
        for i in range(0, len(order) - 1, 2):
            home, away = order[i], order[i + 1]
            if simulate_game(home.rating, away.rating, rng):
                winner, loser = home, away
            else:
                winner, loser = away, home
            winner.wins += 1
            loser.losses += 1


@dataclass(frozen=True)
class TrialResult:
    """What happened in one trial."""

    standings: tuple
    playoff_teams: tuple
    bracket: BracketOutcome
    final_wins: Dict[int, int]


def run_trial(
    states: Sequence[SimulatedTeamState],
    remaining_weeks: int,
    playoff_spots: int,
    rng: RandomSource
) -> TrialResult:
    """
    Run one full trial: finish the season, rank it, play the bracket.

    The input states are copied; they are never mutated.
    """
    sim_states = [s.copy() for s in states]

    simulate_remaining_season(sim_states, remaining_weeks, rng)
    standings = resolve_standings(sim_states)
    qualifiers = standings[:max(0, playoff_spots)]
    bracket = simulate_bracket(qualifiers, rng)

    return TrialResult(
        standings=tuple(s.team_id for s in standings),
        playoff_teams=tuple(s.team_id for s in qualifiers),
        bracket=bracket,
        final_wins={s.team_id: s.wins for s in sim_states}
    )


def record_trial(counters: CountersDict, trial: TrialResult) -> None:
    """Increment milestone counters for every team that reached one."""
    for team_id in trial.playoff_teams:
        counters[team_id].record(Milestone.MADE_PLAYOFFS)
    for team_id in trial.bracket.semifinalists:
        counters[team_id].record(Milestone.MADE_SEMIFINALS)
    for team_id in trial.bracket.finalists:
        counters[team_id].record(Milestone.MADE_FINALS)
    for team_id in trial.bracket.champion:
        counters[team_id].record(Milestone.WON_CHAMPIONSHIP)
    for team_id, wins in trial.final_wins.items():
        counters[team_id].total_wins += wins


def merge_counters(shards: Iterable[CountersDict]) -> CountersDict:
    """
    Combine counters from independently run shards of trials.

    Addition is commutative and associative, so shard order does not matter.
    """
    merged: CountersDict = {}
    for shard in shards:
        for team_id, counters in shard.items():
            if team_id in merged:
                merged[team_id] = merged[team_id].merge(counters)
            else:
                merged[team_id] = counters.merge(MilestoneCounters(team_id=team_id))
    return merged


def simulate_playoff_odds(
    states: List[SimulatedTeamState],
    remaining_weeks: int,
    playoff_spots: int,
    rng: RandomSource,
    n_trials: int = DEFAULT_TRIALS,
    progress_callback: Optional[callable] = None
) -> CountersDict:
    """
    Run the Monte Carlo simulation.

    Args:
        states: Current team states (ratings already attached)
        remaining_weeks: Regular-season weeks left
        playoff_spots: Number of playoff qualifiers
        rng: Random source; seed it for reproducible results
        n_trials: Number of trials (not clamped here)
        progress_callback: Optional callback for progress updates (receives percent complete)

    Returns:
        Dict mapping team_id -> MilestoneCounters
    """
    counters: CountersDict = {
        state.team_id: MilestoneCounters(team_id=state.team_id)
        for state in states
    }

    logger.debug(
        "Simulating %d trials for %d teams (%d weeks left, %d playoff spots)",
        n_trials, len(states), remaining_weeks, playoff_spots
    )

    for trial_idx in range(n_trials):
        if progress_callback and trial_idx % 100 == 0:
            progress_callback(trial_idx / n_trials * 100)

        trial = run_trial(states, remaining_weeks, playoff_spots, rng)
        record_trial(counters, trial)

    if progress_callback:
        progress_callback(100)

    return counters
