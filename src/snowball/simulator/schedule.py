"""Contribution schedules."""

from __future__ import annotations

from typing import Sequence

from snowball.config.models import SimulationParams

FLAT_SCHEDULE_MONTHS = 360


def build_investment_schedule(params: SimulationParams) -> list[float]:
    """Per-period contributions for periods 1, 2, ... of a run.

    Phases are concatenated in order when enabled; otherwise the flat monthly
    amount covers thirty years.
    """
    if params.use_phases and params.investment_phases:
        schedule: list[float] = []
        for phase in params.investment_phases:
            schedule.extend([float(phase.amount)] * phase.months)
        return schedule
    return [float(params.monthly_investment)] * FLAT_SCHEDULE_MONTHS


def contribution_for_period(schedule: Sequence[float], index: int, initial_capital: float) -> float:
    if index == 0:
        return float(initial_capital)
    if not schedule:
        return 0.0
    # the last amount carries on past the end of the schedule
    return schedule[min(index - 1, len(schedule) - 1)]
