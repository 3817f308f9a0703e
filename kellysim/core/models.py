"""Value objects passed between the outcome generator, simulator and API."""

import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Optional, Tuple

from kellysim.core.constants import DEFAULT_ODDS
from kellysim.core.exceptions import InvalidConfiguration


class StrategyKind(str, Enum):
    """Bet-sizing policies compared by the simulator."""
    FLAT = "fixed"
    KELLY = "kelly"
    HALF_KELLY = "halfKelly"


def _to_decimal(name: str, value) -> Decimal:
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise InvalidConfiguration(f"{name} must be a number, got {value!r}")
    if not result.is_finite():
        raise InvalidConfiguration(f"{name} must be finite, got {value!r}")
    return result


@dataclass(frozen=True)
class SimulationConfig:
    """Immutable simulation parameters, validated once per run."""
    initial_funds: Decimal
    win_rate: float  # Probability, 0.0 to 1.0
    fixed_bet_amount: Decimal
    day_count: int
    games_per_day: int = 0  # Only used when use_random_game_count is off
    use_random_game_count: bool = False
    odds: Decimal = DEFAULT_ODDS

    def __post_init__(self):
        # Money is always carried as Decimal
        object.__setattr__(self, "initial_funds", _to_decimal("initial_funds", self.initial_funds))
        object.__setattr__(self, "fixed_bet_amount", _to_decimal("fixed_bet_amount", self.fixed_bet_amount))
        object.__setattr__(self, "odds", _to_decimal("odds", self.odds))

    @classmethod
    def from_form(
        cls,
        initial_funds,
        win_rate_pct: float,
        fixed_bet_amount,
        day_count: int,
        games_per_day: int,
        use_random_game_count: bool,
        odds=DEFAULT_ODDS,
    ) -> "SimulationConfig":
        """Build a config from form input, where the win rate is a percentage."""
        return cls(
            initial_funds=initial_funds,
            win_rate=float(win_rate_pct) / 100,
            fixed_bet_amount=fixed_bet_amount,
            day_count=day_count,
            games_per_day=games_per_day,
            use_random_game_count=use_random_game_count,
            odds=odds,
        )

    @property
    def net_odds(self) -> Decimal:
        return self.odds - 1

    def validate(
        self,
        max_day_count: Optional[int] = None,
        max_games_per_day: Optional[int] = None,
    ) -> None:
        """
        Reject out-of-range parameters.

        Args:
            max_day_count: Upper bound on day_count (None for unbounded)
            max_games_per_day: Upper bound on games_per_day (None for unbounded)

        Raises:
            InvalidConfiguration: naming the first offending field
        """
        if self.initial_funds <= 0:
            raise InvalidConfiguration(f"initial_funds must be positive, got {self.initial_funds}")
        if self.fixed_bet_amount <= 0:
            raise InvalidConfiguration(f"fixed_bet_amount must be positive, got {self.fixed_bet_amount}")
        if isinstance(self.win_rate, bool) or not isinstance(self.win_rate, (int, float)):
            raise InvalidConfiguration(f"win_rate must be a number, got {self.win_rate!r}")
        if math.isnan(self.win_rate) or not 0 <= self.win_rate <= 1:
            raise InvalidConfiguration(f"win_rate must be between 0 and 1, got {self.win_rate}")
        if isinstance(self.day_count, bool) or not isinstance(self.day_count, int):
            raise InvalidConfiguration(f"day_count must be an integer, got {self.day_count!r}")
        if self.day_count <= 0:
            raise InvalidConfiguration(f"day_count must be positive, got {self.day_count}")
        if max_day_count is not None and self.day_count > max_day_count:
            raise InvalidConfiguration(f"day_count must be at most {max_day_count}, got {self.day_count}")
        if isinstance(self.games_per_day, bool) or not isinstance(self.games_per_day, int):
            raise InvalidConfiguration(f"games_per_day must be an integer, got {self.games_per_day!r}")
        if self.games_per_day < 0:
            raise InvalidConfiguration(f"games_per_day must not be negative, got {self.games_per_day}")
        if max_games_per_day is not None and self.games_per_day > max_games_per_day:
            raise InvalidConfiguration(
                f"games_per_day must be at most {max_games_per_day}, got {self.games_per_day}"
            )
        if self.odds <= 1:
            raise InvalidConfiguration(f"odds must be greater than 1, got {self.odds}")


@dataclass(frozen=True)
class DaySchedule:
    """Wagers for one day. Shared by every strategy so they see the same outcomes."""
    game_count: int
    outcomes: Tuple[bool, ...]  # True = win

    def __post_init__(self):
        object.__setattr__(self, "outcomes", tuple(bool(o) for o in self.outcomes))
        if self.game_count < 0:
            raise InvalidConfiguration(f"game_count must not be negative, got {self.game_count}")
        if len(self.outcomes) != self.game_count:
            raise InvalidConfiguration(
                f"expected {self.game_count} outcomes, got {len(self.outcomes)}"
            )

    @classmethod
    def from_outcomes(cls, outcomes) -> "DaySchedule":
        outcomes = tuple(outcomes)
        return cls(game_count=len(outcomes), outcomes=outcomes)

    @property
    def wins(self) -> int:
        return sum(1 for o in self.outcomes if o)

    @property
    def losses(self) -> int:
        return self.game_count - self.wins


@dataclass(frozen=True)
class StrategyDayResult:
    """One strategy's bet and bankroll movement for one day."""
    strategy: StrategyKind
    bet_size: Decimal  # Per wager, fixed for the whole day
    bankroll_before: Decimal
    bankroll_after: Decimal
    bet_size_changed: bool  # Highlight only, no numeric effect

    @property
    def profit(self) -> Decimal:
        return self.bankroll_after - self.bankroll_before


@dataclass(frozen=True)
class DayResult:
    day_index: int  # 0-based
    game_count: int
    wins_today: int
    losses_today: int
    profit_today: Decimal  # Flat reference stake
    per_strategy: Tuple[StrategyDayResult, ...]

    @property
    def day_number(self) -> int:
        return self.day_index + 1

    @property
    def label(self) -> str:
        return f"Day {self.day_number}"

    def for_strategy(self, kind: StrategyKind) -> StrategyDayResult:
        for result in self.per_strategy:
            if result.strategy == kind:
                return result
        raise KeyError(kind)


@dataclass(frozen=True)
class TimeSeriesPoint:
    """End-of-day bankrolls for plotting, one value per strategy."""
    day_label: str
    bankrolls: Tuple[Tuple[StrategyKind, Decimal], ...]
    highlights: Tuple[Tuple[StrategyKind, bool], ...]  # Bet size changed that day

    def bankroll(self, kind: StrategyKind) -> Decimal:
        return dict(self.bankrolls)[kind]

    def highlighted(self, kind: StrategyKind) -> bool:
        return dict(self.highlights).get(kind, False)

    @property
    def fixed_bankroll(self) -> Decimal:
        return self.bankroll(StrategyKind.FLAT)

    @property
    def kelly_bankroll(self) -> Decimal:
        return self.bankroll(StrategyKind.KELLY)

    @property
    def kelly_point_flag(self) -> bool:
        return self.highlighted(StrategyKind.KELLY)

    @property
    def half_kelly_bankroll(self) -> Decimal:
        return self.bankroll(StrategyKind.HALF_KELLY)

    @property
    def half_kelly_point_flag(self) -> bool:
        return self.highlighted(StrategyKind.HALF_KELLY)


@dataclass(frozen=True)
class FinalBankrolls:
    bankrolls: Tuple[Tuple[StrategyKind, Decimal], ...]

    def get(self, kind: StrategyKind) -> Decimal:
        return dict(self.bankrolls)[kind]

    @property
    def fixed(self) -> Decimal:
        return self.get(StrategyKind.FLAT)

    @property
    def kelly(self) -> Decimal:
        return self.get(StrategyKind.KELLY)

    @property
    def half_kelly(self) -> Decimal:
        return self.get(StrategyKind.HALF_KELLY)


@dataclass(frozen=True)
class AggregateStats:
    """Counters derived from the outcome schedule, not from any one strategy."""
    days_with_positive_profit: int
    days_with_negative_profit: int
    total_wins: int
    total_losses: int


@dataclass(frozen=True)
class SimulationResult:
    """Snapshot of a single run. Built fresh on every call."""
    config: SimulationConfig
    time_series: Tuple[TimeSeriesPoint, ...]
    days: Tuple[DayResult, ...]
    final_bankrolls: FinalBankrolls
    aggregate_stats: AggregateStats
    log: Tuple[str, ...]
