"""Bet-sizing policies and the per-run mutable state that goes with them."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple

from kellysim.core import constants
from kellysim.core.calculations import calculate_bet_size
from kellysim.core.models import SimulationConfig, StrategyKind


@dataclass(frozen=True)
class Strategy:
    """
    A bet-sizing policy.

    Flat strategies (kelly_multiplier is None) stake the configured fixed amount
    on every wager. Kelly strategies stake
    kelly * kelly_multiplier / KELLY_DIVISOR of the start-of-day bankroll,
    rounded by calculate_bet_size.
    """
    kind: StrategyKind
    label: str
    kelly_multiplier: Optional[float]
    color: str
    highlight_color: Optional[str] = None
    change_marker: str = ""

    @property
    def tracks_bet_changes(self) -> bool:
        return self.kelly_multiplier is not None

    def bet_size(self, bankroll: Decimal, config: SimulationConfig, kelly: float) -> Decimal:
        if self.kelly_multiplier is None:
            return config.fixed_bet_amount
        fraction = kelly * self.kelly_multiplier / constants.KELLY_DIVISOR
        return calculate_bet_size(bankroll, fraction)

    def point_color(self, bet_size_changed: bool) -> str:
        if bet_size_changed and self.highlight_color:
            return self.highlight_color
        return self.color


@dataclass
class StrategyState:
    """Running bankroll for one strategy. Owned by a single simulation run."""
    strategy: Strategy
    bankroll: Decimal
    last_bet_size: Decimal = Decimal("0")


FLAT = Strategy(
    kind=StrategyKind.FLAT,
    label=constants.FLAT_LABEL,
    kelly_multiplier=None,
    color=constants.FLAT_COLOR,
)

KELLY = Strategy(
    kind=StrategyKind.KELLY,
    label=constants.KELLY_LABEL,
    kelly_multiplier=1.0,
    color=constants.KELLY_COLOR,
    highlight_color=constants.KELLY_HIGHLIGHT_COLOR,
    change_marker=constants.KELLY_CHANGE_MARKER,
)

HALF_KELLY = Strategy(
    kind=StrategyKind.HALF_KELLY,
    label=constants.HALF_KELLY_LABEL,
    kelly_multiplier=0.5,
    color=constants.HALF_KELLY_COLOR,
    highlight_color=constants.HALF_KELLY_HIGHLIGHT_COLOR,
    change_marker=constants.HALF_KELLY_CHANGE_MARKER,
)

DEFAULT_STRATEGIES: Tuple[Strategy, ...] = (FLAT, KELLY, HALF_KELLY)
