"""Historical data input contract."""

from snowball.data.loader import compute_series_stats, load_series, parse_series, with_computed_stats
from snowball.data.models import (
    DEFAULT_MONTHLY_RETURN,
    DEFAULT_MONTHLY_STD_DEV,
    DividendEvent,
    HistoricalSeries,
    PricePoint,
    SeriesStats,
)

__all__ = [
    "DEFAULT_MONTHLY_RETURN",
    "DEFAULT_MONTHLY_STD_DEV",
    "DividendEvent",
    "HistoricalSeries",
    "PricePoint",
    "SeriesStats",
    "compute_series_stats",
    "load_series",
    "parse_series",
    "with_computed_stats",
]
