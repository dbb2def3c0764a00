"""
Tests for the team rating model and win probability.
"""

import math

import pytest

from playoff_forecast.simulator import (
    RatingMode,
    Streak,
    TeamSeasonStat,
    calculate_team_rating,
    rate_teams,
    simulate_game,
    win_probability,
)
from conftest import FixedRandom


class TestCalculateTeamRating:
    """Tests for calculate_team_rating."""

    def test_zero_games_uses_roster_bonuses_only(self):
        """Before any games, only roster and starter bonuses apply."""
        stat = TeamSeasonStat(id=1, roster_size=20, starter_count=9, points_for=500)
        assert calculate_team_rating(stat) == 1000 + 30 + 27

    def test_full_standard_rating(self):
        """Record, scoring, margin and roster terms combine."""
        stat = TeamSeasonStat(
            id=1, wins=6, losses=2, points_for=960, points_against=880,
            roster_size=30, starter_count=9
        )
        # 1000 + 100 (win%) + 40 (ppg) + 15 (margin) + 37.5 (roster cap) + 27 = 1219.5
        assert calculate_team_rating(stat) == 1220

    def test_margin_term_skipped_without_points_against(self):
        """No points-against data means no margin term."""
        stat = TeamSeasonStat(id=1, wins=4, losses=4, points_for=800)
        assert calculate_team_rating(stat) == 1000

    def test_roster_bonus_is_capped(self):
        """Roster sizes beyond 25 add nothing."""
        small = TeamSeasonStat(id=1, roster_size=25)
        large = TeamSeasonStat(id=2, roster_size=40)
        assert calculate_team_rating(small) == calculate_team_rating(large)

    def test_monotonic_in_win_pct(self):
        """More wins with the same scoring means a higher rating."""
        worse = TeamSeasonStat(id=1, wins=3, losses=5, points_for=880, points_against=880)
        better = TeamSeasonStat(id=2, wins=5, losses=3, points_for=880, points_against=880)
        assert calculate_team_rating(better) > calculate_team_rating(worse)

    def test_monotonic_in_scoring_margin(self):
        """A better scoring margin with the same record means a higher rating."""
        worse = TeamSeasonStat(id=1, wins=4, losses=4, points_for=880, points_against=900)
        better = TeamSeasonStat(id=2, wins=4, losses=4, points_for=880, points_against=800)
        assert calculate_team_rating(better) > calculate_team_rating(worse)

    def test_momentum_adds_streak_and_volume(self):
        """Momentum mode adds streak * 10 and a capped volume term."""
        stat = TeamSeasonStat(
            id=1, wins=6, losses=2, points_for=960, points_against=880,
            roster_size=30, starter_count=9, streak=Streak("W", 3)
        )
        # 1219.5 + 30 + 2.88
        assert calculate_team_rating(stat, RatingMode.MOMENTUM) == 1252

    def test_momentum_loss_streak_lowers_rating(self):
        """A losing streak counts against the team."""
        base = TeamSeasonStat(id=1, wins=4, losses=4, points_for=800)
        cold = TeamSeasonStat(id=2, wins=4, losses=4, points_for=800, streak=Streak("L", 4))
        assert (calculate_team_rating(cold, RatingMode.MOMENTUM)
                == calculate_team_rating(base, RatingMode.MOMENTUM) - 40)

    def test_momentum_volume_term_capped(self):
        """The scoring-volume term never exceeds 100."""
        stat = TeamSeasonStat(id=1, points_for=1_000_000)
        assert calculate_team_rating(stat, RatingMode.MOMENTUM) == 1100

    def test_missing_and_non_finite_inputs_default_to_zero(self):
        """None and NaN fields behave like zero."""
        stat = TeamSeasonStat(id=1, wins=None, losses=float("nan"), points_for=float("inf"))
        assert stat.wins == 0
        assert stat.losses == 0
        assert stat.points_for == 0.0
        assert calculate_team_rating(stat) == 1000

    def test_rate_teams(self):
        """rate_teams returns one rating per team in order."""
        teams = [TeamSeasonStat(id=7), TeamSeasonStat(id=3, starter_count=1)]
        ratings = rate_teams(teams)
        assert [r.team_id for r in ratings] == [7, 3]
        assert [r.rating for r in ratings] == [1000, 1003]

    def test_huge_box_scores_stay_finite(self):
        """Scoring that overflows to inf still yields a bounded integer rating."""
        stat = TeamSeasonStat(id=1, wins=1, points_for=1e308, points_against=1e308)
        rating = calculate_team_rating(stat, RatingMode.MOMENTUM)
        assert isinstance(rating, int)
        assert abs(rating) <= 1e9


class TestStreak:
    """Tests for Streak parsing."""

    @pytest.mark.parametrize("text,expected", [
        ("3W", 3),
        ("L2", -2),
        ("w5", 5),
        ("", None),
        (None, None),
        ("hot", None),
    ])
    def test_parse(self, text, expected):
        streak = Streak.parse(text)
        if expected is None:
            assert streak is None
        else:
            assert streak.signed_length == expected


class TestWinProbability:
    """Tests for win_probability and simulate_game."""

    def test_equal_ratings(self):
        assert win_probability(1000, 1000) == pytest.approx(0.5)

    def test_four_hundred_point_gap(self):
        assert win_probability(1400, 1000) == pytest.approx(10 / 11)

    @pytest.mark.parametrize("a,b", [(1000, 1000), (1250, 980), (700, 1500), (3000, 0)])
    def test_symmetric(self, a, b):
        assert win_probability(a, b) + win_probability(b, a) == pytest.approx(1.0)

    def test_bounded_for_extreme_gaps(self):
        p = win_probability(100000, 0)
        assert 0.0 <= p <= 1.0
        assert math.isfinite(p)

    def test_large_deficit_does_not_overflow(self):
        p = win_probability(0, 200000)
        assert 0.0 <= p < 1e-6
        assert win_probability(-1e12, 1e12) >= 0.0
        assert win_probability(1e12, -1e12) == pytest.approx(1.0)

    def test_simulate_game_uses_three_draws(self):
        rng = FixedRandom(0.2)
        assert simulate_game(1000, 1000, rng) is True
        assert rng.calls == 3

    def test_simulate_game_noise_above_probability_loses(self):
        assert simulate_game(1000, 1000, FixedRandom(0.6)) is False

    def test_underdog_can_win(self):
        """A draw below the underdog's probability still wins for them."""
        assert simulate_game(900, 1100, FixedRandom(0.1)) is True
