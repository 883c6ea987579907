from datetime import date

import pytest

from helpers import make_series
from snowball.config import InvestmentPhase, RunMode, default_params
from snowball.simulator import (
    BacktestResult,
    FixedRateResult,
    ForecastResult,
    InsufficientDataError,
    InvalidParameterError,
    build_investment_schedule,
    contribution_for_period,
    run,
)


def test_run_selects_runner_by_mode():
    series = make_series([100.0 + index for index in range(13)])
    params = default_params(years=1, monte_carlo_runs=10, seed=1)

    assert isinstance(run(RunMode.BACKTEST, params, series), BacktestResult)
    assert isinstance(run("forecast", params, series), ForecastResult)
    assert isinstance(run("simulation", params), FixedRateResult)
    assert run("simulation", params).mode == RunMode.SIMULATION


def test_unknown_mode_is_rejected():
    with pytest.raises(InvalidParameterError):
        run("replay", default_params())


def test_backtest_without_series_is_insufficient():
    with pytest.raises(InsufficientDataError):
        run(RunMode.BACKTEST, default_params())


@pytest.mark.parametrize(
    "overrides",
    [
        {"years": 0},
        {"initial_capital": -1},
        {"monthly_investment": -5},
        {"use_phases": True},
        {"use_phases": True, "investment_phases": (InvestmentPhase(0, 100),)},
        {"use_phases": True, "investment_phases": (InvestmentPhase(3, -100),)},
        {"commission_rate": -0.01},
        {"workers": 0},
    ],
)
def test_invalid_parameters_fail_before_running(overrides):
    with pytest.raises(InvalidParameterError):
        run(RunMode.SIMULATION, default_params(**overrides))


def test_reversed_date_window_is_invalid():
    params = default_params(start_date=date(2021, 1, 1), end_date=date(2020, 1, 1))
    with pytest.raises(InvalidParameterError):
        run(RunMode.BACKTEST, params, make_series([1.0, 2.0]))


def test_phased_schedule_covers_phase_lengths():
    params = default_params(
        initial_capital=50000,
        use_phases=True,
        investment_phases=(InvestmentPhase(12, 5000), InvestmentPhase(24, 10000)),
    )
    schedule = build_investment_schedule(params)
    assert len(schedule) == 36
    assert contribution_for_period(schedule, 0, params.initial_capital) == 50000
    assert [contribution_for_period(schedule, index, 0) for index in range(1, 13)] == [5000] * 12
    assert [contribution_for_period(schedule, index, 0) for index in range(13, 37)] == [10000] * 24
    assert contribution_for_period(schedule, 50, 0) == 10000


def test_flat_schedule_repeats_monthly_amount():
    schedule = build_investment_schedule(default_params(monthly_investment=0))
    assert len(schedule) == 360
    assert set(schedule) == {0.0}
