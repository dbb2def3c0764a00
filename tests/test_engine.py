"""
Tests for the season simulator, standings resolver and aggregator.
"""

import pytest

from playoff_forecast.simulator import (
    SeededRandom,
    SimulatedTeamState,
    clamp_trials,
    merge_counters,
    resolve_standings,
    run_trial,
    shuffled,
    simulate_playoff_odds,
    simulate_remaining_season,
)
from conftest import FixedRandom, make_states


class TestShuffle:
    """Tests for the RandomSource-driven shuffle."""

    def test_is_permutation(self):
        items = list(range(12))
        result = shuffled(items, SeededRandom(3))
        assert sorted(result) == items
        assert items == list(range(12))

    def test_same_seed_same_order(self):
        assert shuffled(range(20), SeededRandom(11)) == shuffled(range(20), SeededRandom(11))

    def test_high_draws_keep_order(self):
        assert shuffled([1, 2, 3, 4], FixedRandom(0.999999)) == [1, 2, 3, 4]


class TestSimulateRemainingSeason:
    """Tests for simulate_remaining_season."""

    def test_zero_weeks_is_noop(self, always_first):
        states = make_states(8)
        before = [(s.wins, s.losses) for s in states]
        simulate_remaining_season(states, 0, always_first)
        assert [(s.wins, s.losses) for s in states] == before
        assert always_first.calls == 0

    def test_every_team_plays_each_week(self):
        states = make_states(8)
        games_before = {s.team_id: s.wins + s.losses for s in states}
        simulate_remaining_season(states, 5, SeededRandom(1))
        for s in states:
            assert s.wins + s.losses == games_before[s.team_id] + 5

    def test_odd_team_count_leaves_one_idle(self):
        states = make_states(7)
        total_before = sum(s.wins + s.losses for s in states)
        simulate_remaining_season(states, 4, SeededRandom(2))
        # Three games a week, two results each
        assert sum(s.wins + s.losses for s in states) == total_before + 4 * 3 * 2

    def test_wins_equal_losses_added(self):
        states = make_states(10)
        wins_before = sum(s.wins for s in states)
        losses_before = sum(s.losses for s in states)
        simulate_remaining_season(states, 3, SeededRandom(5))
        assert sum(s.wins for s in states) - wins_before == 15
        assert sum(s.losses for s in states) - losses_before == 15

    def test_points_for_unchanged(self):
        states = make_states(6)
        before = [s.points_for for s in states]
        simulate_remaining_season(states, 6, SeededRandom(9))
        assert [s.points_for for s in states] == before


class TestResolveStandings:
    """Tests for resolve_standings."""

    def test_wins_then_points_for(self):
        states = [
            SimulatedTeamState(team_id=1, wins=5, points_for=900),
            SimulatedTeamState(team_id=2, wins=7, points_for=800),
            SimulatedTeamState(team_id=3, wins=5, points_for=950),
        ]
        assert [s.team_id for s in resolve_standings(states)] == [2, 3, 1]

    def test_full_ties_keep_input_order(self):
        states = [SimulatedTeamState(team_id=i, wins=4, points_for=700) for i in (5, 2, 9)]
        assert [s.team_id for s in resolve_standings(states)] == [5, 2, 9]

    def test_returns_new_list(self):
        states = make_states(3)[::-1]
        ordered = resolve_standings(states)
        assert [s.team_id for s in states] == [3, 2, 1]
        assert [s.team_id for s in ordered] == [1, 2, 3]


class TestRunTrial:
    """Tests for run_trial."""

    def test_does_not_mutate_input(self):
        states = make_states(8)
        before = [(s.wins, s.losses) for s in states]
        run_trial(states, 4, 4, SeededRandom(0))
        assert [(s.wins, s.losses) for s in states] == before

    def test_completed_season_has_fixed_standings(self):
        """With no weeks left every trial ranks the real records."""
        states = make_states(10)
        rng = SeededRandom(123)
        standings = {run_trial(states, 0, 6, rng).standings for _ in range(50)}
        assert standings == {tuple(range(1, 11))}

    def test_playoff_teams_are_top_of_standings(self):
        trial = run_trial(make_states(10), 3, 4, SeededRandom(8))
        assert trial.playoff_teams == trial.standings[:4]


class TestSimulatePlayoffOdds:
    """Tests for the Monte Carlo aggregator."""

    def test_playoff_appearances_sum_to_trials_times_spots(self):
        n_trials = 500
        counters = simulate_playoff_odds(make_states(12), 5, 6, SeededRandom(4), n_trials=n_trials)
        assert sum(c.made_playoffs for c in counters.values()) == n_trials * 6
        assert sum(c.made_finals for c in counters.values()) == n_trials * 2
        assert sum(c.won_championship for c in counters.values()) == n_trials

    def test_milestones_nested_per_team(self):
        counters = simulate_playoff_odds(make_states(10), 4, 6, SeededRandom(6), n_trials=400)
        for c in counters.values():
            assert c.made_playoffs >= c.made_semifinals >= c.made_finals >= c.won_championship

    @pytest.mark.parametrize("spots", [0, 1])
    def test_fewer_than_two_spots_credit_only_playoffs(self, spots):
        counters = simulate_playoff_odds(make_states(8), 3, spots, SeededRandom(2), n_trials=200)
        assert sum(c.made_playoffs for c in counters.values()) == 200 * spots
        for c in counters.values():
            assert c.made_semifinals == 0
            assert c.made_finals == 0
            assert c.won_championship == 0

    def test_equal_two_team_title_odds_near_even(self):
        states = [
            SimulatedTeamState(team_id=1, wins=5, losses=5, points_for=1000, rating=1000),
            SimulatedTeamState(team_id=2, wins=5, losses=5, points_for=990, rating=1000),
        ]
        n_trials = 5000
        counters = simulate_playoff_odds(states, 0, 2, SeededRandom(2024), n_trials=n_trials)
        for c in counters.values():
            assert abs(c.won_championship / n_trials - 0.5) < 0.05

    def test_top_two_seeds_with_byes_always_reach_semifinals(self):
        """Six of twelve qualify; seeds 1-2 skip the opening round."""
        n_trials = 300
        counters = simulate_playoff_odds(make_states(12), 0, 6, SeededRandom(10), n_trials=n_trials)
        for team_id in (1, 2):
            assert counters[team_id].made_playoffs == n_trials
            assert counters[team_id].made_semifinals == n_trials
        for team_id in (3, 4, 5, 6):
            assert counters[team_id].made_playoffs == n_trials
            assert counters[team_id].made_semifinals < n_trials
        for team_id in range(7, 13):
            assert counters[team_id].made_playoffs == 0

    def test_same_seed_reproducible(self):
        a = simulate_playoff_odds(make_states(10), 4, 4, SeededRandom(99), n_trials=200)
        b = simulate_playoff_odds(make_states(10), 4, 4, SeededRandom(99), n_trials=200)
        assert {k: v.to_dict() for k, v in a.items()} == {k: v.to_dict() for k, v in b.items()}

    def test_total_wins_tracks_final_records(self):
        states = make_states(4)
        counters = simulate_playoff_odds(states, 0, 2, SeededRandom(1), n_trials=100)
        for s in states:
            assert counters[s.team_id].total_wins == s.wins * 100

    def test_progress_callback(self):
        seen = []
        simulate_playoff_odds(make_states(4), 1, 2, SeededRandom(1), n_trials=250,
                              progress_callback=seen.append)
        assert seen[0] == 0
        assert seen[-1] == 100
        assert len(seen) == 4


class TestMergeCounters:
    """Tests for merging sharded counters."""

    def test_shards_add_up(self):
        shard_a = simulate_playoff_odds(make_states(8), 3, 4, SeededRandom(1), n_trials=100)
        shard_b = simulate_playoff_odds(make_states(8), 3, 4, SeededRandom(2), n_trials=150)
        merged = merge_counters([shard_a, shard_b])
        assert sum(c.made_playoffs for c in merged.values()) == 250 * 4
        for team_id, c in merged.items():
            assert c.won_championship == shard_a[team_id].won_championship + shard_b[team_id].won_championship

    def test_order_does_not_matter(self):
        shard_a = simulate_playoff_odds(make_states(6), 2, 4, SeededRandom(3), n_trials=80)
        shard_b = simulate_playoff_odds(make_states(6), 2, 4, SeededRandom(4), n_trials=80)
        ab = merge_counters([shard_a, shard_b])
        ba = merge_counters([shard_b, shard_a])
        assert {k: v.to_dict() for k, v in ab.items()} == {k: v.to_dict() for k, v in ba.items()}

    def test_merge_rejects_other_team(self):
        shard = simulate_playoff_odds(make_states(2), 0, 2, SeededRandom(1), n_trials=80)
        with pytest.raises(ValueError):
            shard[1].merge(shard[2])


class TestClampTrials:
    """Tests for clamp_trials."""

    @pytest.mark.parametrize("requested,expected", [(None, 5000), (10, 80), (1000, 1000), (100000, 5000)])
    def test_clamp(self, requested, expected):
        assert clamp_trials(requested) == expected
