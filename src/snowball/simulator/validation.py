"""Parameter checks performed before any computation."""

from __future__ import annotations

from snowball.config.models import RunMode, SimulationParams
from snowball.simulator.errors import InvalidParameterError


def validate_params(params: SimulationParams, mode: RunMode) -> None:
    if params.years <= 0:
        raise InvalidParameterError(f"years must be positive, got {params.years}")
    if params.initial_capital < 0:
        raise InvalidParameterError("initial_capital must be non-negative")
    if params.monthly_investment < 0:
        raise InvalidParameterError("monthly_investment must be non-negative")
    if params.commission_rate < 0 or params.tax_rate < 0:
        raise InvalidParameterError("Cost rates must be non-negative")
    if params.dip_buy_multiplier < 0:
        raise InvalidParameterError("dip_buy_multiplier must be non-negative")
    if params.rsi_period < 1:
        raise InvalidParameterError("rsi_period must be >= 1")
    if params.workers < 1:
        raise InvalidParameterError("workers must be >= 1")

    if params.use_phases:
        if not params.investment_phases:
            raise InvalidParameterError("use_phases requires at least one investment phase")
        for phase in params.investment_phases:
            if phase.months <= 0:
                raise InvalidParameterError(f"Phase months must be positive, got {phase.months}")
            if phase.amount < 0:
                raise InvalidParameterError(f"Phase amount must be non-negative, got {phase.amount}")

    if (
        params.start_date is not None
        and params.end_date is not None
        and params.start_date > params.end_date
    ):
        raise InvalidParameterError("start_date must not be after end_date")

    if mode == RunMode.FORECAST and params.monte_carlo_runs <= 0:
        raise InvalidParameterError(f"monte_carlo_runs must be positive, got {params.monte_carlo_runs}")
    if mode == RunMode.SIMULATION and params.annual_return <= -1:
        raise InvalidParameterError("annual_return must be greater than -100%")
