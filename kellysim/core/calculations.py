"""Core staking calculations. Pure functions, no randomness or I/O."""

from decimal import Decimal, ROUND_FLOOR
from typing import Union

from kellysim.core.constants import BET_UNIT, GAME_COUNT_TABLE, MAX_RANDOM_GAMES, MIN_KELLY_BET
from kellysim.core.exceptions import InvalidConfiguration

Number = Union[int, float, Decimal]


def calculate_kelly(win_rate: float, odds: Number) -> float:
    """
    Calculate the full Kelly fraction for a binary wager, clamped at zero.

    Args:
        win_rate: Probability of winning (0.0 to 1.0)
        odds: Decimal odds (e.g., 1.9)

    Returns:
        Kelly fraction, 0 when the wager has no edge
    """
    b = float(odds) - 1  # Net odds (profit per unit wagered)
    if b <= 0:
        raise InvalidConfiguration(f"odds must be greater than 1, got {odds}")
    p = win_rate
    q = 1 - p
    kelly = (b * p - q) / b
    return max(kelly, 0)


def calculate_bet_size(bankroll: Decimal, fraction: float) -> Decimal:
    """
    Size a Kelly-derived bet, floored to BET_UNIT with a MIN_KELLY_BET floor.

    Args:
        bankroll: Bankroll at the start of the day
        fraction: Share of the bankroll to stake (already divided down)

    Returns:
        Stake per wager for the whole day
    """
    raw = Decimal(str(bankroll)) * Decimal(str(fraction))
    units = (raw / BET_UNIT).to_integral_value(rounding=ROUND_FLOOR)
    return max(units * BET_UNIT, MIN_KELLY_BET)


def calculate_payout(bet_amount: Decimal, odds: Number, won: bool) -> Decimal:
    """
    Calculate the net result of a single wager.

    Args:
        bet_amount: Amount wagered
        odds: Decimal odds
        won: Whether the wager won

    Returns:
        Net profit/loss (positive if won, negative if lost)
    """
    if not won:
        return -bet_amount
    return bet_amount * (Decimal(str(odds)) - 1)


def game_count_from_draw(r: float) -> int:
    """Map a uniform draw in [0, 1) to a daily game count via GAME_COUNT_TABLE."""
    for upper_bound, games in GAME_COUNT_TABLE:
        if r < upper_bound:
            return games
    return MAX_RANDOM_GAMES


def format_currency(amount: Number, symbol: str = "¥") -> str:
    """Format money for the log, e.g. Decimal("-20000") -> "-¥20,000"."""
    amount = Decimal(str(amount))
    sign = "-" if amount < 0 else ""
    amount = abs(amount)
    if amount == amount.to_integral_value():
        return f"{sign}{symbol}{amount:,.0f}"
    return f"{sign}{symbol}{amount:,.2f}"
