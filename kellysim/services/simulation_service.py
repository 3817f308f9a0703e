"""Service for running the flat vs. Kelly staking comparison."""

import logging
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence

from kellysim.config import Settings, settings as default_settings
from kellysim.core import constants
from kellysim.core.calculations import calculate_kelly, calculate_payout, format_currency
from kellysim.core.exceptions import InvalidConfiguration
from kellysim.core.models import (
    AggregateStats,
    DayResult,
    DaySchedule,
    FinalBankrolls,
    SimulationConfig,
    SimulationResult,
    StrategyDayResult,
    TimeSeriesPoint,
)
from kellysim.core.strategies import DEFAULT_STRATEGIES, Strategy, StrategyState
from kellysim.services.outcome_generator import RandomSource, generate_schedule

logger = logging.getLogger(__name__)


def format_day_log(
    day: DayResult,
    strategies: Sequence[Strategy],
    currency_symbol: str = "¥",
) -> str:
    """
    Format one day of the run as a multi-line log entry.

    Example:
        Day 1: 3-1 (4 games)
          Flat: ¥20,000 per game (P/L ¥34,000, bankroll ¥1,000,000 → ¥1,034,000)
          Kelly/3: ¥30,000 per game 🔺 (P/L ¥51,000, bankroll ¥1,000,000 → ¥1,051,000)
    """
    def money(amount: Decimal) -> str:
        return format_currency(amount, currency_symbol)

    lines = [f"{day.label}: {day.wins_today}-{day.losses_today} ({day.game_count} games)"]
    for strategy in strategies:
        result = day.for_strategy(strategy.kind)
        marker = f" {strategy.change_marker}" if result.bet_size_changed and strategy.change_marker else ""
        lines.append(
            f"  {strategy.label}: {money(result.bet_size)} per game{marker} "
            f"(P/L {money(result.profit)}, "
            f"bankroll {money(result.bankroll_before)} → {money(result.bankroll_after)})"
        )
    return "\n".join(lines)


class SimulationService:
    """Runs every strategy over one shared outcome schedule."""

    def __init__(
        self,
        strategies: Iterable[Strategy] = DEFAULT_STRATEGIES,
        settings: Optional[Settings] = None,
    ):
        self.strategies = tuple(strategies)
        self.settings = settings or default_settings

    def run(
        self,
        config: SimulationConfig,
        schedule: Optional[Sequence[DaySchedule]] = None,
        rng: Optional[RandomSource] = None,
        seed: Optional[int] = None,
    ) -> SimulationResult:
        """
        Run a complete simulation.

        Args:
            config: Simulation parameters, validated before anything else runs
            schedule: Pre-built schedule to replay instead of drawing a new one
            rng: Random source for schedule generation
            seed: Seed for a fresh random source when rng is not given

        Returns:
            Immutable SimulationResult

        Raises:
            InvalidConfiguration: if the config or injected schedule is invalid, or a
                bankroll grows past MAX_BANKROLL
        """
        config.validate(
            max_day_count=self.settings.MAX_DAY_COUNT,
            max_games_per_day=self.settings.MAX_GAMES_PER_DAY,
        )

        if schedule is None:
            schedule = generate_schedule(config, rng=rng, seed=seed)
        else:
            schedule = self._check_schedule(config, schedule)

        kelly = calculate_kelly(config.win_rate, config.odds)
        states = [StrategyState(strategy=s, bankroll=config.initial_funds) for s in self.strategies]

        days: List[DayResult] = []
        time_series: List[TimeSeriesPoint] = []
        log: List[str] = []
        days_positive = 0
        days_negative = 0
        total_wins = 0
        total_losses = 0

        for day_index, day in enumerate(schedule):
            per_strategy = tuple(self._play_day(state, day, config, kelly) for state in states)
            self._check_bankrolls(day_index, states)

            # Schedule-derived counters priced at the flat stake, independent of self.strategies
            profit_today = sum(
                (calculate_payout(config.fixed_bet_amount, config.odds, won) for won in day.outcomes),
                Decimal("0"),
            )
            total_wins += day.wins
            total_losses += day.losses
            if profit_today > 0:
                days_positive += 1
            elif profit_today < 0:
                days_negative += 1

            day_result = DayResult(
                day_index=day_index,
                game_count=day.game_count,
                wins_today=day.wins,
                losses_today=day.losses,
                profit_today=profit_today,
                per_strategy=per_strategy,
            )
            days.append(day_result)
            time_series.append(TimeSeriesPoint(
                day_label=day_result.label,
                bankrolls=tuple((r.strategy, r.bankroll_after) for r in per_strategy),
                highlights=tuple((r.strategy, r.bet_size_changed) for r in per_strategy),
            ))
            log.append(format_day_log(day_result, self.strategies, self.settings.CURRENCY_SYMBOL))

            logger.debug(
                f"{day_result.label}: {day.wins}-{day.losses}, "
                + ", ".join(f"{s.strategy.label}={s.bankroll}" for s in states)
            )

        final_bankrolls = FinalBankrolls(bankrolls=tuple((s.strategy.kind, s.bankroll) for s in states))
        logger.info(
            f"Simulated {len(days)} days, {total_wins + total_losses} games "
            f"({total_wins}-{total_losses}); final bankrolls: "
            + ", ".join(f"{s.strategy.label}={s.bankroll}" for s in states)
        )

        return SimulationResult(
            config=config,
            time_series=tuple(time_series),
            days=tuple(days),
            final_bankrolls=final_bankrolls,
            aggregate_stats=AggregateStats(
                days_with_positive_profit=days_positive,
                days_with_negative_profit=days_negative,
                total_wins=total_wins,
                total_losses=total_losses,
            ),
            log=tuple(log),
        )

    def _play_day(
        self,
        state: StrategyState,
        day: DaySchedule,
        config: SimulationConfig,
        kelly: float,
    ) -> StrategyDayResult:
        """Apply one day's outcomes to one strategy with a single start-of-day bet size."""
        strategy = state.strategy
        bet_size = strategy.bet_size(state.bankroll, config, kelly)
        changed = strategy.tracks_bet_changes and bet_size != state.last_bet_size

        bankroll_before = state.bankroll
        for won in day.outcomes:
            state.bankroll += calculate_payout(bet_size, config.odds, won)
        state.last_bet_size = bet_size

        return StrategyDayResult(
            strategy=strategy.kind,
            bet_size=bet_size,
            bankroll_before=bankroll_before,
            bankroll_after=state.bankroll,
            bet_size_changed=changed,
        )

    def _check_bankrolls(self, day_index: int, states: Sequence[StrategyState]) -> None:
        """Abort the run once any bankroll leaves the representable range."""
        limit = self.settings.MAX_BANKROLL
        for state in states:
            if abs(state.bankroll) > limit:
                raise InvalidConfiguration(
                    f"{state.strategy.label} bankroll exceeds {format_currency(limit, self.settings.CURRENCY_SYMBOL)} "
                    f"on Day {day_index + 1}; reduce day_count, games_per_day or win_rate"
                )

    def _check_schedule(
        self,
        config: SimulationConfig,
        schedule: Sequence[DaySchedule],
    ) -> List[DaySchedule]:
        """Make sure an injected schedule matches the config it is replayed against."""
        schedule = list(schedule)
        if len(schedule) != config.day_count:
            raise InvalidConfiguration(
                f"schedule has {len(schedule)} days, config expects {config.day_count}"
            )
        for day_index, day in enumerate(schedule):
            if not config.use_random_game_count and day.game_count != config.games_per_day:
                raise InvalidConfiguration(
                    f"Day {day_index + 1} has {day.game_count} games, "
                    f"config expects {config.games_per_day}"
                )
            if day.game_count > self.settings.MAX_GAMES_PER_DAY:
                raise InvalidConfiguration(
                    f"Day {day_index + 1} has {day.game_count} games, "
                    f"at most {self.settings.MAX_GAMES_PER_DAY} allowed"
                )
        return schedule

    def serialize_result(self, result: SimulationResult) -> dict:
        """
        Convert a result into the JSON-ready dict used by the API.

        Returns:
            Dictionary matching SimulationResponse
        """
        config = result.config
        chart_data = []
        for index, point in enumerate(result.time_series):
            entry = {"day": index + 1, "label": point.day_label}
            for kind, bankroll in point.bankrolls:
                entry[kind.value] = float(bankroll)
                entry[f"{kind.value}Changed"] = point.highlighted(kind)
            chart_data.append(entry)

        chart_datasets = []
        for strategy in self.strategies:
            chart_datasets.append({
                "key": strategy.kind.value,
                "label": strategy.label,
                "data": [float(point.bankroll(strategy.kind)) for point in result.time_series],
                "borderColor": strategy.color,
                "pointBackgroundColor": [
                    strategy.point_color(point.highlighted(strategy.kind))
                    for point in result.time_series
                ],
            })

        daily_summaries = []
        for day in result.days:
            daily_summaries.append({
                "day": day.day_number,
                "label": day.label,
                "gameCount": day.game_count,
                "wins": day.wins_today,
                "losses": day.losses_today,
                "profitToday": float(day.profit_today),
                "strategies": [
                    {
                        "strategy": r.strategy.value,
                        "betSize": float(r.bet_size),
                        "bankrollBefore": float(r.bankroll_before),
                        "bankrollAfter": float(r.bankroll_after),
                        "betSizeChanged": r.bet_size_changed,
                    }
                    for r in day.per_strategy
                ],
            })

        stats = result.aggregate_stats
        return {
            "config": {
                "initialFunds": float(config.initial_funds),
                "winProbability": config.win_rate,
                "fixedBetAmount": float(config.fixed_bet_amount),
                "dayCount": config.day_count,
                "gamesPerDay": config.games_per_day,
                "useRandomGameCount": config.use_random_game_count,
                "odds": float(config.odds),
            },
            "chartData": chart_data,
            "chartDatasets": chart_datasets,
            "dailySummaries": daily_summaries,
            "finalBankrolls": {
                kind.value: float(bankroll) for kind, bankroll in result.final_bankrolls.bankrolls
            },
            "stats": {
                "daysWithPositiveProfit": stats.days_with_positive_profit,
                "daysWithNegativeProfit": stats.days_with_negative_profit,
                "totalWins": stats.total_wins,
                "totalLosses": stats.total_losses,
            },
            "log": list(result.log),
        }

    def get_defaults(self) -> dict:
        """Default form values for a new simulation."""
        return {
            "initialFunds": float(constants.DEFAULT_INITIAL_FUNDS),
            "winRate": constants.DEFAULT_WIN_RATE_PCT,
            "fixedBetAmount": float(constants.DEFAULT_FIXED_BET),
            "dayCount": constants.DEFAULT_DAY_COUNT,
            "gamesPerDay": constants.DEFAULT_GAMES_PER_DAY,
            "useRandomGameCount": constants.DEFAULT_USE_RANDOM_GAME_COUNT,
            "odds": float(constants.DEFAULT_ODDS),
            "maxDayCount": self.settings.MAX_DAY_COUNT,
            "maxGamesPerDay": self.settings.MAX_GAMES_PER_DAY,
            "maxBankroll": float(self.settings.MAX_BANKROLL),
        }
