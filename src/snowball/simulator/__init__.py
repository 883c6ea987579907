"""Backtest, forecast and fixed-rate simulation."""

from snowball.simulator.errors import InsufficientDataError, InvalidParameterError, SimulatorError
from snowball.simulator.backtest import drawdown_periods, run_backtest, select_window, sharpe_ratio
from snowball.simulator.dispatch import parse_mode, run
from snowball.simulator.fixed_rate import run_simulation
from snowball.simulator.forecast import Regime, RegimeSpec, regime_table, run_forecast
from snowball.simulator.goal import GoalAssessment, assess_goal
from snowball.simulator.models import (
    BacktestPoint,
    BacktestResult,
    BacktestSummary,
    DrawdownPeriod,
    FixedRateResult,
    ForecastPoint,
    ForecastResult,
    ForecastSummary,
    RunResult,
    SimulationPoint,
    SimulationSummary,
)
from snowball.simulator.schedule import build_investment_schedule, contribution_for_period
from snowball.simulator.validation import validate_params

__all__ = [
    "BacktestPoint",
    "BacktestResult",
    "BacktestSummary",
    "DrawdownPeriod",
    "FixedRateResult",
    "ForecastPoint",
    "ForecastResult",
    "ForecastSummary",
    "GoalAssessment",
    "InsufficientDataError",
    "InvalidParameterError",
    "Regime",
    "RegimeSpec",
    "RunResult",
    "SimulationPoint",
    "SimulationSummary",
    "SimulatorError",
    "assess_goal",
    "build_investment_schedule",
    "contribution_for_period",
    "drawdown_periods",
    "parse_mode",
    "regime_table",
    "run",
    "run_backtest",
    "run_forecast",
    "run_simulation",
    "select_window",
    "sharpe_ratio",
    "validate_params",
]
