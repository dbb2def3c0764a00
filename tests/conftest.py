"""
Shared fixtures and helpers for the forecast tests.
"""

import pytest
from fastapi.testclient import TestClient

from playoff_forecast.main import app
from playoff_forecast.simulator import SimulatedTeamState, TeamSeasonStat


class FixedRandom:
    """RandomSource that always returns the same value."""

    def __init__(self, value: float):
        self.value = value
        self.calls = 0

    def next_float(self) -> float:
        self.calls += 1
        return self.value


def make_states(n: int, rating: int = 1000):
    """Team states seeded 1..n, best record first, equal ratings."""
    return [
        SimulatedTeamState(team_id=i, wins=n - i, losses=i - 1, points_for=1000.0 - i, rating=rating)
        for i in range(1, n + 1)
    ]


def make_league(n: int = 10):
    """League of n teams with distinct records and scoring."""
    return [
        TeamSeasonStat(
            id=i,
            name=f"Team {i}",
            wins=n - i,
            losses=i - 1,
            points_for=1300.0 - i * 20,
            points_against=1100.0 + i * 10,
            roster_size=20,
            starter_count=9,
            owner_id=f"user{i}"
        )
        for i in range(1, n + 1)
    ]


@pytest.fixture
def always_first():
    """Random source under which the first team of every game wins."""
    return FixedRandom(0.0)


@pytest.fixture
def always_second():
    """Random source under which the second team of an even game wins."""
    return FixedRandom(0.999999)


@pytest.fixture(scope="module")
def client() -> TestClient:
    return TestClient(app)
