"""Constants for the Kelly staking simulator."""

from decimal import Decimal

# Decimal odds offered on every wager (profit multiplier b = odds - 1)
DEFAULT_ODDS = Decimal("1.9")

# Kelly-derived bets are floored to this unit and never go below the minimum
BET_UNIT = Decimal("10000")
MIN_KELLY_BET = Decimal("10000")

# Both Kelly strategies stake a third of their (possibly halved) Kelly fraction
KELLY_DIVISOR = 3

# Daily game count table for random mode: (exclusive upper bound of r, games).
# Buckets are 5%, 5%, 20%, 20%, 20%, 20% and the remaining 10% plays
# MAX_RANDOM_GAMES. Low counts are deliberately over-weighted.
GAME_COUNT_TABLE = (
    (0.05, 0),
    (0.10, 1),
    (0.30, 2),
    (0.50, 3),
    (0.70, 4),
    (0.90, 5),
)
MAX_RANDOM_GAMES = 6

# Form defaults
DEFAULT_INITIAL_FUNDS = Decimal("1000000")
DEFAULT_WIN_RATE_PCT = 58.0
DEFAULT_FIXED_BET = Decimal("20000")
DEFAULT_DAY_COUNT = 100
DEFAULT_GAMES_PER_DAY = 4
DEFAULT_USE_RANDOM_GAME_COUNT = True

# Chart series styling
FLAT_LABEL = "Flat"
KELLY_LABEL = "Kelly/3"
HALF_KELLY_LABEL = "HalfKelly/3"

FLAT_COLOR = "gray"
KELLY_COLOR = "blue"
KELLY_HIGHLIGHT_COLOR = "red"
HALF_KELLY_COLOR = "green"
HALF_KELLY_HIGHLIGHT_COLOR = "orange"

# Log markers for a day whose bet size changed
KELLY_CHANGE_MARKER = "🔺"
HALF_KELLY_CHANGE_MARKER = "🔸"
