"""Numerical and calendar helpers."""

from snowball.analytics.calendar import add_months, month_key, monthly_dates
from snowball.analytics.indicators import (
    mean,
    normal_random,
    percentile_of_sorted,
    population_std_dev,
    rsi_series,
    safe_ratio,
    sma_series,
)

__all__ = [
    "add_months",
    "mean",
    "month_key",
    "monthly_dates",
    "normal_random",
    "percentile_of_sorted",
    "population_std_dev",
    "rsi_series",
    "safe_ratio",
    "sma_series",
]
