"""CSV export of run timelines."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Optional

from snowball.simulator.models import BacktestResult, FixedRateResult, ForecastResult, RunResult

BACKTEST_COLUMNS = (
    "date",
    "price",
    "units",
    "cost",
    "market_value",
    "net_value",
    "unrealized_gain",
    "unrealized_gain_pct",
    "drawdown",
    "rsi",
)
FORECAST_COLUMNS = ("date", "capital", "p10", "p50", "p90")
SIMULATION_COLUMNS = ("date", "capital", "value", "gain", "gain_pct")


def _money(value: float) -> str:
    return f"{value:.0f}"


def _pct(value: float) -> str:
    return f"{value * 100:.2f}%"


def _optional(value: Optional[float], digits: int) -> str:
    if value is None:
        return ""
    return f"{value:.{digits}f}"


def columns_for(result: RunResult) -> tuple[str, ...]:
    if isinstance(result, BacktestResult):
        return BACKTEST_COLUMNS
    if isinstance(result, ForecastResult):
        return FORECAST_COLUMNS
    if isinstance(result, FixedRateResult):
        return SIMULATION_COLUMNS
    raise TypeError(f"Unsupported result type: {type(result).__name__}")


def timeline_rows(result: RunResult) -> list[dict[str, str]]:
    if isinstance(result, BacktestResult):
        return [
            {
                "date": point.date.isoformat(),
                "price": f"{point.price:.2f}",
                "units": f"{point.units:.2f}",
                "cost": _money(point.cost),
                "market_value": _money(point.market_value),
                "net_value": _money(point.net_value),
                "unrealized_gain": _money(point.unrealized_gain),
                "unrealized_gain_pct": _pct(point.unrealized_gain_pct),
                "drawdown": _pct(point.drawdown),
                "rsi": _optional(point.rsi, 1),
            }
            for point in result.timeline
        ]
    if isinstance(result, ForecastResult):
        return [
            {
                "date": point.date.isoformat(),
                "capital": _money(point.capital),
                "p10": _money(point.p10),
                "p50": _money(point.p50),
                "p90": _money(point.p90),
            }
            for point in result.timeline
        ]
    if isinstance(result, FixedRateResult):
        return [
            {
                "date": point.date.isoformat(),
                "capital": _money(point.capital),
                "value": _money(point.value),
                "gain": _money(point.gain),
                "gain_pct": _pct(point.gain_pct),
            }
            for point in result.timeline
        ]
    raise TypeError(f"Unsupported result type: {type(result).__name__}")


def write_timeline_csv(result: RunResult, path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    # BOM so spreadsheet tools pick up UTF-8
    with path.open("w", encoding="utf-8-sig", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=list(columns_for(result)))
        writer.writeheader()
        writer.writerows(timeline_rows(result))
    return path
