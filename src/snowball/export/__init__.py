"""Timeline export."""

from snowball.export.csv_export import (
    BACKTEST_COLUMNS,
    FORECAST_COLUMNS,
    SIMULATION_COLUMNS,
    columns_for,
    timeline_rows,
    write_timeline_csv,
)

__all__ = [
    "BACKTEST_COLUMNS",
    "FORECAST_COLUMNS",
    "SIMULATION_COLUMNS",
    "columns_for",
    "timeline_rows",
    "write_timeline_csv",
]
