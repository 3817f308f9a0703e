"""Pydantic schemas for simulation endpoints."""

from decimal import Decimal
from typing import Dict, List, Optional
from pydantic import BaseModel

from kellysim.core import constants
from kellysim.core.models import SimulationConfig


class SimulationRequest(BaseModel):
    """Form input for POST /simulation. Range checks happen in SimulationConfig.validate."""
    initialFunds: Decimal = constants.DEFAULT_INITIAL_FUNDS
    winRate: float = constants.DEFAULT_WIN_RATE_PCT  # As percentage (e.g., 58.0)
    fixedBetAmount: Decimal = constants.DEFAULT_FIXED_BET
    dayCount: int = constants.DEFAULT_DAY_COUNT
    gamesPerDay: int = constants.DEFAULT_GAMES_PER_DAY
    useRandomGameCount: bool = constants.DEFAULT_USE_RANDOM_GAME_COUNT
    odds: Decimal = constants.DEFAULT_ODDS
    seed: Optional[int] = None  # Set to replay a run

    def to_config(self) -> SimulationConfig:
        return SimulationConfig.from_form(
            initial_funds=self.initialFunds,
            win_rate_pct=self.winRate,
            fixed_bet_amount=self.fixedBetAmount,
            day_count=self.dayCount,
            games_per_day=self.gamesPerDay,
            use_random_game_count=self.useRandomGameCount,
            odds=self.odds,
        )


class ConfigEcho(BaseModel):
    """Config the run actually used (win rate as a probability)."""
    initialFunds: float
    winProbability: float
    fixedBetAmount: float
    dayCount: int
    gamesPerDay: int
    useRandomGameCount: bool
    odds: float


class ChartDataPoint(BaseModel):
    """End-of-day bankrolls for the chart."""
    day: int
    label: str  # e.g., "Day 1"
    fixed: float
    kelly: float
    kellyChanged: bool
    halfKelly: float
    halfKellyChanged: bool


class ChartDataset(BaseModel):
    """One line of the chart, with per-point colours for bet size changes."""
    key: str
    label: str
    data: List[float]
    borderColor: str
    pointBackgroundColor: List[str]


class StrategyDaySummary(BaseModel):
    strategy: str  # "fixed", "kelly" or "halfKelly"
    betSize: float
    bankrollBefore: float
    bankrollAfter: float
    betSizeChanged: bool


class DailySummary(BaseModel):
    """Summary for a single simulated day."""
    day: int
    label: str
    gameCount: int
    wins: int
    losses: int
    profitToday: float  # Flat stake
    strategies: List[StrategyDaySummary]


class SimulationStats(BaseModel):
    daysWithPositiveProfit: int
    daysWithNegativeProfit: int
    totalWins: int
    totalLosses: int


class SimulationResponse(BaseModel):
    """Schema for the POST /simulation response."""
    config: ConfigEcho
    chartData: List[ChartDataPoint]
    chartDatasets: List[ChartDataset]
    dailySummaries: List[DailySummary]
    finalBankrolls: Dict[str, float]
    stats: SimulationStats
    log: List[str]


class SimulationDefaults(BaseModel):
    """Schema for the GET /simulation/defaults response."""
    initialFunds: float
    winRate: float
    fixedBetAmount: float
    dayCount: int
    gamesPerDay: int
    useRandomGameCount: bool
    odds: float
    maxDayCount: int
    maxGamesPerDay: int
    maxBankroll: float
