"""Historical series data structures."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from snowball.analytics.calendar import month_key

# assumed when a series carries no statistics
DEFAULT_MONTHLY_RETURN = 0.008
DEFAULT_MONTHLY_STD_DEV = 0.05


@dataclass(frozen=True)
class PricePoint:
    date: date
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0
    adj_close: Optional[float] = None

    @property
    def price(self) -> float:
        if self.adj_close is not None:
            return self.adj_close
        return self.close


@dataclass(frozen=True)
class DividendEvent:
    date: date
    amount: float


@dataclass(frozen=True)
class SeriesStats:
    monthly_return: float
    monthly_std_dev: float
    annualized_return: Optional[float] = None
    annualized_std_dev: Optional[float] = None
    data_points: Optional[int] = None


@dataclass(frozen=True)
class HistoricalSeries:
    name: str
    history: tuple[PricePoint, ...]
    dividends: tuple[DividendEvent, ...] = ()
    stats: Optional[SeriesStats] = None
    symbol: Optional[str] = None
    currency: Optional[str] = None

    def prices(self) -> list[float]:
        return [point.price for point in self.history]

    def dividends_by_month(self) -> dict[str, float]:
        totals: dict[str, float] = {}
        for event in self.dividends:
            key = month_key(event.date)
            totals[key] = totals.get(key, 0.0) + event.amount
        return totals
