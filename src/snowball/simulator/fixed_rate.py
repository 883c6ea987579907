"""Fixed-rate compounding projection."""

from __future__ import annotations

from datetime import date

from snowball.analytics.calendar import monthly_dates
from snowball.analytics.indicators import safe_ratio
from snowball.config.models import RunMode, SimulationParams
from snowball.simulator.models import FixedRateResult, SimulationPoint, SimulationSummary
from snowball.simulator.validation import validate_params


def monthly_rate(annual_return: float) -> float:
    return (1.0 + annual_return) ** (1.0 / 12.0) - 1.0


def rule_of_72(annual_return: float) -> float | None:
    if annual_return == 0:
        return None
    return 72.0 / (annual_return * 100.0)


def run_simulation(params: SimulationParams) -> FixedRateResult:
    validate_params(params, RunMode.SIMULATION)
    months = params.months
    rate = monthly_rate(params.annual_return)
    dates = monthly_dates(params.anchor_date or date.today(), months)

    portfolio = params.initial_capital
    capital = params.initial_capital
    timeline = [
        SimulationPoint(month=0, date=dates[0], value=portfolio, capital=capital, gain=0.0, gain_pct=0.0)
    ]
    for month in range(1, months + 1):
        portfolio = portfolio * (1.0 + rate) + params.monthly_investment
        capital += params.monthly_investment
        gain = portfolio - capital
        timeline.append(
            SimulationPoint(
                month=month,
                date=dates[month],
                value=portfolio,
                capital=capital,
                gain=gain,
                gain_pct=safe_ratio(gain, capital),
            )
        )

    final = timeline[-1]
    summary = SimulationSummary(
        years=params.years,
        annual_return=params.annual_return,
        total_capital=capital,
        final_value=final.value,
        total_gain=final.gain,
        total_gain_pct=final.gain_pct,
        double_years=rule_of_72(params.annual_return),
    )
    return FixedRateResult(timeline=tuple(timeline), summary=summary)
