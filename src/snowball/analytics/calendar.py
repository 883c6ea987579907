"""Calendar helpers for monthly timelines."""

from __future__ import annotations

from datetime import date

from dateutil.relativedelta import relativedelta


def add_months(day: date, months: int) -> date:
    """Step ``months`` calendar months, clamping to the end of short months."""
    return day + relativedelta(months=months)


def month_key(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}"


def monthly_dates(anchor: date, months: int) -> list[date]:
    """Dates for months ``0 .. months`` counted from ``anchor``."""
    return [add_months(anchor, offset) for offset in range(months + 1)]
