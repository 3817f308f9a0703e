"""
Simulation CLI - Compare flat staking with Kelly/3 and HalfKelly/3.

Usage:
    python -m cli.simulate --days 100 --bankroll 1000000 --win-rate 58 --seed 42
"""

import argparse
import logging
import sys
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from kellysim.config import settings
from kellysim.core import constants
from kellysim.core.calculations import format_currency
from kellysim.core.exceptions import InvalidConfiguration
from kellysim.core.models import SimulationConfig, SimulationResult
from kellysim.services.simulation_service import SimulationService

logger = logging.getLogger(__name__)


def decimal_arg(value: str) -> Decimal:
    """argparse type for money amounts."""
    try:
        return Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid amount: {value!r}")


def print_summary(result: SimulationResult, service: SimulationService, show_log: bool = False) -> None:
    """Print the run in the same banner layout as the backtest report."""
    config = result.config
    stats = result.aggregate_stats

    def money(amount: Decimal) -> str:
        return format_currency(amount, settings.CURRENCY_SYMBOL)

    print("\n" + "=" * 70)
    print("                       SIMULATION RESULTS")
    print("=" * 70)
    print(f" Starting Bankroll: {money(config.initial_funds)}")
    print(f" Win Rate: {config.win_rate * 100:.1f}% @ {config.odds}")
    print(f" Days Simulated: {config.day_count}")
    if config.use_random_game_count:
        print(f" Games Per Day: random (0-{constants.MAX_RANDOM_GAMES})")
    else:
        print(f" Games Per Day: {config.games_per_day}")
    print("=" * 70 + "\n")

    if show_log:
        for entry in result.log:
            print(entry + "\n")

    total_games = stats.total_wins + stats.total_losses
    win_pct = (stats.total_wins / total_games * 100) if total_games > 0 else 0

    print("=" * 70)
    print("                        FINAL RESULTS")
    print("=" * 70)
    for strategy in service.strategies:
        final = result.final_bankrolls.get(strategy.kind)
        total_return = (final - config.initial_funds) / config.initial_funds * 100
        print(
            f" {strategy.label:<12} {money(final):>20}  "
            f"({'+' if total_return >= 0 else ''}{total_return:.2f}%)"
        )
    print("-" * 70)
    print(f" Record: {stats.total_wins}-{stats.total_losses} ({win_pct:.1f}%)")
    print(f" Profitable Days: {stats.days_with_positive_profit}")
    print(f" Losing Days: {stats.days_with_negative_profit}")
    print("=" * 70 + "\n")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run a flat vs. Kelly staking simulation")
    parser.add_argument(
        "--bankroll",
        type=decimal_arg,
        default=constants.DEFAULT_INITIAL_FUNDS,
        help=f"Starting bankroll (default: {constants.DEFAULT_INITIAL_FUNDS})"
    )
    parser.add_argument(
        "--win-rate",
        type=float,
        default=constants.DEFAULT_WIN_RATE_PCT,
        help=f"Win rate in percent (default: {constants.DEFAULT_WIN_RATE_PCT})"
    )
    parser.add_argument(
        "--bet",
        type=decimal_arg,
        default=constants.DEFAULT_FIXED_BET,
        help=f"Flat stake per game (default: {constants.DEFAULT_FIXED_BET})"
    )
    parser.add_argument(
        "--days",
        type=int,
        default=constants.DEFAULT_DAY_COUNT,
        help=f"Number of days to simulate (default: {constants.DEFAULT_DAY_COUNT})"
    )
    parser.add_argument(
        "--games-per-day",
        type=int,
        default=constants.DEFAULT_GAMES_PER_DAY,
        help=f"Games per day with --fixed-games (default: {constants.DEFAULT_GAMES_PER_DAY})"
    )
    parser.add_argument(
        "--fixed-games",
        action="store_true",
        help="Play --games-per-day every day instead of a random count"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for a reproducible run"
    )
    parser.add_argument(
        "--show-log",
        action="store_true",
        help="Print the day-by-day log"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    logger.info(f"Running simulation for {args.days} days (seed={args.seed})")

    service = SimulationService()
    try:
        config = SimulationConfig.from_form(
            initial_funds=args.bankroll,
            win_rate_pct=args.win_rate,
            fixed_bet_amount=args.bet,
            day_count=args.days,
            games_per_day=args.games_per_day,
            use_random_game_count=not args.fixed_games,
        )
        result = service.run(config, seed=args.seed)
    except InvalidConfiguration as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    print_summary(result, service, show_log=args.show_log)
    return 0


if __name__ == "__main__":
    sys.exit(main())
