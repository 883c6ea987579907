"""Simulation result structures."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from snowball.config.models import RunMode


@dataclass(frozen=True)
class BacktestPoint:
    date: date
    price: float
    units: float
    cost: float
    market_value: float
    net_value: float
    unrealized_gain: float
    unrealized_gain_pct: float
    drawdown: float
    rsi: Optional[float]
    contribution: float
    dividend_cash: float


@dataclass(frozen=True)
class DrawdownPeriod:
    """A stretch below the running peak, from the first losing period to recovery."""

    start: date
    trough: date
    end: Optional[date]
    depth: float


@dataclass(frozen=True)
class BacktestSummary:
    start_date: date
    end_date: date
    months: int
    total_cost: float
    final_market_value: float
    final_net_value: float
    total_return: float
    cagr: float
    max_drawdown: float
    sharpe_ratio: float
    total_dividends: float
    total_units: float
    benchmark_return: float = 0.0
    max_drawdown_start: Optional[date] = None
    max_drawdown_end: Optional[date] = None
    recovery_date: Optional[date] = None
    drawdown_periods: tuple[DrawdownPeriod, ...] = ()


@dataclass(frozen=True)
class BacktestResult:
    timeline: tuple[BacktestPoint, ...]
    summary: BacktestSummary
    mode: RunMode = RunMode.BACKTEST


@dataclass(frozen=True)
class ForecastPoint:
    month: int
    date: date
    capital: float
    p10: float
    p25: float
    p50: float
    p75: float
    p90: float


@dataclass(frozen=True)
class ForecastSummary:
    years: int
    total_capital: float
    conservative: float
    median: float
    optimistic: float
    conservative_return: float
    median_return: float
    optimistic_return: float
    simulations: int
    goal_probability: Optional[float] = None


@dataclass(frozen=True)
class ForecastResult:
    timeline: tuple[ForecastPoint, ...]
    summary: ForecastSummary
    final_values: tuple[float, ...] = ()
    mode: RunMode = RunMode.FORECAST


@dataclass(frozen=True)
class SimulationPoint:
    month: int
    date: date
    value: float
    capital: float
    gain: float
    gain_pct: float


@dataclass(frozen=True)
class SimulationSummary:
    years: int
    annual_return: float
    total_capital: float
    final_value: float
    total_gain: float
    total_gain_pct: float
    double_years: Optional[float]


@dataclass(frozen=True)
class FixedRateResult:
    timeline: tuple[SimulationPoint, ...]
    summary: SimulationSummary
    mode: RunMode = RunMode.SIMULATION


RunResult = BacktestResult | ForecastResult | FixedRateResult
