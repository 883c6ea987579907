"""Goal checks against forecast outcomes."""

from __future__ import annotations

from dataclasses import dataclass

from snowball.simulator.models import ForecastResult


@dataclass(frozen=True)
class GoalAssessment:
    target: float
    probability: float
    band: str
    shortfall_at_median: float
    meets_median: bool


def assess_goal(result: ForecastResult, target: float) -> GoalAssessment:
    """Share of simulated final values at or above ``target`` and its band."""
    values = result.final_values
    summary = result.summary
    if not values:
        return GoalAssessment(target, 0.0, "unknown", max(0.0, target - summary.median), False)

    reached = sum(1 for value in values if value >= target)
    if target <= summary.conservative:
        band = "below_p10"
    elif target <= summary.median:
        band = "p10_p50"
    elif target <= summary.optimistic:
        band = "p50_p90"
    else:
        band = "above_p90"

    return GoalAssessment(
        target=target,
        probability=reached / len(values),
        band=band,
        shortfall_at_median=max(0.0, target - summary.median),
        meets_median=summary.median >= target,
    )
