"""Tests for schedule generation."""

from dataclasses import replace

import pytest

from kellysim.core.exceptions import InvalidConfiguration
from kellysim.core.models import DaySchedule
from kellysim.services.outcome_generator import OutcomeGenerator, generate_schedule


class TestOutcomeGenerator:

    def test_fixed_mode_uses_games_per_day(self, base_config, sequence_random):
        config = replace(base_config, day_count=3, games_per_day=2)
        rng = sequence_random([0.1])

        schedule = OutcomeGenerator(config, rng).generate_schedule()

        assert [day.game_count for day in schedule] == [2, 2, 2]
        # Fixed mode draws only outcomes, never game counts
        assert rng.calls == 6

    def test_draw_outcome_wins_below_win_rate(self, base_config, sequence_random):
        generator = OutcomeGenerator(base_config, sequence_random([0.57, 0.58, 0.99]))

        assert generator.draw_outcome(0.58) is True
        assert generator.draw_outcome(0.58) is False
        assert generator.draw_outcome(0.58) is False

    def test_random_mode_draws_count_then_outcomes(self, base_config, sequence_random):
        config = replace(base_config, day_count=2, use_random_game_count=True)
        # Day 1: 0.10 -> 2 games, win then loss. Day 2: 0.0 -> no games.
        rng = sequence_random([0.10, 0.1, 0.9, 0.0])

        schedule = OutcomeGenerator(config, rng).generate_schedule()

        assert schedule[0] == DaySchedule(game_count=2, outcomes=(True, False))
        assert schedule[1] == DaySchedule(game_count=0, outcomes=())
        assert rng.calls == 4

    def test_random_mode_ignores_games_per_day(self, base_config, sequence_random):
        config = replace(base_config, games_per_day=50, use_random_game_count=True)
        generator = OutcomeGenerator(config, sequence_random([0.95]))

        assert generator.draw_daily_game_count() == 6

    def test_whole_schedule_is_built(self, base_config, sequence_random):
        config = replace(base_config, day_count=30, use_random_game_count=True)

        schedule = OutcomeGenerator(config, sequence_random([0.4, 0.2, 0.8])).generate_schedule()

        assert len(schedule) == 30
        assert all(len(day.outcomes) == day.game_count for day in schedule)


class TestGenerateSchedule:

    def test_same_seed_same_schedule(self, base_config):
        config = replace(base_config, day_count=50, use_random_game_count=True)

        assert generate_schedule(config, seed=42) == generate_schedule(config, seed=42)

    def test_injected_source_wins_over_seed(self, base_config, sequence_random):
        schedule = generate_schedule(base_config, rng=sequence_random([0.0]), seed=42)

        assert schedule[0].outcomes == (True, True, True, True)


class TestDaySchedule:

    def test_counts(self):
        day = DaySchedule.from_outcomes([True, True, False, True])

        assert day.game_count == 4
        assert day.wins == 3
        assert day.losses == 1

    def test_length_must_match_game_count(self):
        with pytest.raises(InvalidConfiguration):
            DaySchedule(game_count=3, outcomes=(True,))

    def test_negative_game_count(self):
        with pytest.raises(InvalidConfiguration):
            DaySchedule(game_count=-1, outcomes=())
