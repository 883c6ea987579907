"""Select a runner by run mode."""

from __future__ import annotations

import random
from typing import Optional

from snowball.config.models import RunMode, SimulationParams
from snowball.data.models import HistoricalSeries
from snowball.simulator.backtest import run_backtest
from snowball.simulator.errors import InsufficientDataError, InvalidParameterError
from snowball.simulator.fixed_rate import run_simulation
from snowball.simulator.forecast import run_forecast
from snowball.simulator.models import RunResult
from snowball.simulator.validation import validate_params


def parse_mode(value: RunMode | str) -> RunMode:
    try:
        return RunMode(value)
    except ValueError as exc:
        raise InvalidParameterError(f"Invalid mode: {value}") from exc


def run(
    mode: RunMode | str,
    params: SimulationParams,
    series: Optional[HistoricalSeries] = None,
    rng: Optional[random.Random] = None,
) -> RunResult:
    mode = parse_mode(mode)
    validate_params(params, mode)
    if mode == RunMode.BACKTEST:
        if series is None:
            raise InsufficientDataError("Backtest requires a historical series")
        return run_backtest(series, params)
    if mode == RunMode.FORECAST:
        return run_forecast(series, params, rng=rng)
    if mode == RunMode.SIMULATION:
        return run_simulation(params)
    raise InvalidParameterError(f"Unsupported mode: {mode}")
