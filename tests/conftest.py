"""Shared fixtures for simulator tests."""

from decimal import Decimal

import pytest

from kellysim.core.models import SimulationConfig


class SequenceRandom:
    """Random source that replays a fixed list of draws, cycling when exhausted."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def random(self) -> float:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


class ExplodingRandom:
    """Random source that must never be touched."""

    def random(self) -> float:
        raise AssertionError("random source used before validation")


@pytest.fixture
def sequence_random():
    return SequenceRandom


@pytest.fixture
def exploding_random():
    return ExplodingRandom()


@pytest.fixture
def base_config():
    """Single day, four fixed games, default staking parameters."""
    return SimulationConfig(
        initial_funds=Decimal("1000000"),
        win_rate=0.58,
        fixed_bet_amount=Decimal("20000"),
        day_count=1,
        games_per_day=4,
        use_random_game_count=False,
        odds=Decimal("1.9"),
    )
