"""Generates the day-by-day wager schedule shared by all strategies."""

import logging
import random
from typing import List, Optional, Protocol

from kellysim.core.calculations import game_count_from_draw
from kellysim.core.models import DaySchedule, SimulationConfig

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Anything that yields uniform floats in [0, 1). random.Random qualifies."""

    def random(self) -> float:
        ...


class OutcomeGenerator:
    """Draws game counts and win/loss outcomes from a single random source."""

    def __init__(self, config: SimulationConfig, rng: RandomSource):
        self.config = config
        self.rng = rng

    def draw_daily_game_count(self) -> int:
        """Number of wagers for one day (random table or the fixed count)."""
        if not self.config.use_random_game_count:
            return self.config.games_per_day
        return game_count_from_draw(self.rng.random())

    def draw_outcome(self, win_rate: float) -> bool:
        """True (win) iff the draw falls below win_rate."""
        return self.rng.random() < win_rate

    def generate_schedule(self) -> List[DaySchedule]:
        """
        Build the whole schedule up front.

        Each day draws its game count first, then one outcome per game, so a
        replayed random source always reproduces the same schedule.
        """
        schedule = []
        for _ in range(self.config.day_count):
            game_count = self.draw_daily_game_count()
            outcomes = tuple(self.draw_outcome(self.config.win_rate) for _ in range(game_count))
            schedule.append(DaySchedule(game_count=game_count, outcomes=outcomes))

        logger.debug(
            f"Generated schedule: {len(schedule)} days, "
            f"{sum(day.game_count for day in schedule)} games"
        )
        return schedule


def generate_schedule(
    config: SimulationConfig,
    rng: Optional[RandomSource] = None,
    seed: Optional[int] = None,
) -> List[DaySchedule]:
    """
    Generate a schedule with an injected source, or a fresh seeded one.

    Args:
        config: Validated simulation config
        rng: Random source to draw from (takes precedence over seed)
        seed: Seed for a new random.Random when rng is not given

    Returns:
        One DaySchedule per simulated day
    """
    if rng is None:
        rng = random.Random(seed)
    return OutcomeGenerator(config, rng).generate_schedule()
