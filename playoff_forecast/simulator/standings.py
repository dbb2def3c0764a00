"""
Standings resolution.

Order of precedence:
1. Wins
2. Points for
3. Input order (Python's sort is stable)
"""

from typing import List, Sequence

from .models import SimulatedTeamState


def standings_key(state: SimulatedTeamState):
    return (-state.wins, -state.points_for)


def resolve_standings(states: Sequence[SimulatedTeamState]) -> List[SimulatedTeamState]:
    """
    Rank teams best to worst.

    Args:
        states: Team states after the regular season (real or simulated)

    Returns:
        New list in standings order; ties beyond points-for keep input order
    """
    return sorted(states, key=standings_key)


def current_ranks(states: Sequence[SimulatedTeamState]) -> dict:
    """Map team_id -> 1-based standings rank."""
    return {state.team_id: rank for rank, state in enumerate(resolve_standings(states), start=1)}
