"""Monte Carlo forecast over a two-state bull/bear regime model."""

from __future__ import annotations

import random
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional, Sequence

from snowball.analytics.calendar import monthly_dates
from snowball.analytics.indicators import normal_random, percentile_of_sorted, safe_ratio
from snowball.config.models import RunMode, SimulationParams
from snowball.data.models import (
    DEFAULT_MONTHLY_RETURN,
    DEFAULT_MONTHLY_STD_DEV,
    HistoricalSeries,
    SeriesStats,
)
from snowball.simulator.models import ForecastPoint, ForecastResult, ForecastSummary
from snowball.simulator.validation import validate_params

BANDS = (0.10, 0.25, 0.50, 0.75, 0.90)


class Regime(str, Enum):
    BULL = "bull"
    BEAR = "bear"

    def other(self) -> "Regime":
        return Regime.BEAR if self == Regime.BULL else Regime.BULL


@dataclass(frozen=True)
class RegimeSpec:
    mean: float
    std_dev: float
    stay_probability: float


def regime_table(stats: Optional[SeriesStats]) -> dict[Regime, RegimeSpec]:
    base_mean = DEFAULT_MONTHLY_RETURN if stats is None else stats.monthly_return
    base_std = DEFAULT_MONTHLY_STD_DEV if stats is None else stats.monthly_std_dev
    return {
        Regime.BULL: RegimeSpec(mean=base_mean * 1.5, std_dev=base_std * 0.8, stay_probability=0.95),
        Regime.BEAR: RegimeSpec(mean=base_mean * -0.5, std_dev=base_std * 1.5, stay_probability=0.90),
    }


def simulate_path(
    rng: random.Random,
    regimes: dict[Regime, RegimeSpec],
    months: int,
    initial_capital: float,
    monthly_investment: float,
) -> list[float]:
    """Portfolio values for months ``0 .. months`` of one path."""
    regime = Regime.BULL if rng.random() > 0.5 else Regime.BEAR
    portfolio = initial_capital
    values = [portfolio]
    for _ in range(months):
        if rng.random() > regimes[regime].stay_probability:
            regime = regime.other()
        current = regimes[regime]
        monthly_return = normal_random(rng, current.mean, current.std_dev)
        portfolio = portfolio * (1.0 + monthly_return) + monthly_investment
        values.append(portfolio)
    return values


def _simulate_chunk(
    seeds: Sequence[int],
    regimes: dict[Regime, RegimeSpec],
    months: int,
    initial_capital: float,
    monthly_investment: float,
) -> list[list[float]]:
    return [
        simulate_path(random.Random(seed), regimes, months, initial_capital, monthly_investment)
        for seed in seeds
    ]


def run_forecast(
    series: Optional[HistoricalSeries],
    params: SimulationParams,
    rng: Optional[random.Random] = None,
) -> ForecastResult:
    validate_params(params, RunMode.FORECAST)
    regimes = regime_table(series.stats if series is not None else None)
    months = params.months
    runs = params.monte_carlo_runs

    master = rng if rng is not None else random.Random(params.seed)
    seeds = [master.getrandbits(64) for _ in range(runs)]
    paths = _generate_paths(seeds, regimes, months, params)

    anchor = params.anchor_date or date.today()
    dates = monthly_dates(anchor, months)
    timeline: list[ForecastPoint] = []
    for month in range(months + 1):
        values = sorted(path[month] for path in paths)
        p10, p25, p50, p75, p90 = (percentile_of_sorted(values, band) for band in BANDS)
        timeline.append(
            ForecastPoint(
                month=month,
                date=dates[month],
                capital=params.initial_capital + params.monthly_investment * month,
                p10=p10,
                p25=p25,
                p50=p50,
                p75=p75,
                p90=p90,
            )
        )

    final_values = sorted(path[-1] for path in paths)
    total_capital = params.initial_capital + params.monthly_investment * months
    conservative = percentile_of_sorted(final_values, 0.10)
    median = percentile_of_sorted(final_values, 0.50)
    optimistic = percentile_of_sorted(final_values, 0.90)

    goal_probability = None
    if params.target_asset is not None:
        reached = sum(1 for value in final_values if value >= params.target_asset)
        goal_probability = reached / len(final_values)

    summary = ForecastSummary(
        years=params.years,
        total_capital=total_capital,
        conservative=conservative,
        median=median,
        optimistic=optimistic,
        conservative_return=safe_ratio(conservative - total_capital, total_capital),
        median_return=safe_ratio(median - total_capital, total_capital),
        optimistic_return=safe_ratio(optimistic - total_capital, total_capital),
        simulations=runs,
        goal_probability=goal_probability,
    )
    return ForecastResult(timeline=tuple(timeline), summary=summary, final_values=tuple(final_values))


def _generate_paths(
    seeds: list[int],
    regimes: dict[Regime, RegimeSpec],
    months: int,
    params: SimulationParams,
) -> list[list[float]]:
    if params.workers <= 1 or len(seeds) < 2:
        return _simulate_chunk(seeds, regimes, months, params.initial_capital, params.monthly_investment)

    chunk_size = -(-len(seeds) // params.workers)
    chunks = [seeds[start : start + chunk_size] for start in range(0, len(seeds), chunk_size)]
    paths: list[list[float]] = []
    with ProcessPoolExecutor(max_workers=params.workers) as executor:
        futures = [
            executor.submit(
                _simulate_chunk,
                chunk,
                regimes,
                months,
                params.initial_capital,
                params.monthly_investment,
            )
            for chunk in chunks
        ]
        for future in futures:
            paths.extend(future.result())
    return paths
