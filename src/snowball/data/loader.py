"""Parse provider payloads into historical series."""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from datetime import date
from pathlib import Path
from typing import Any, Optional, Sequence

from snowball.analytics.indicators import mean, population_std_dev
from snowball.data.models import (
    DEFAULT_MONTHLY_RETURN,
    DEFAULT_MONTHLY_STD_DEV,
    DividendEvent,
    HistoricalSeries,
    PricePoint,
    SeriesStats,
)

logger = logging.getLogger(__name__)


def load_series(path: str | Path) -> HistoricalSeries:
    path = Path(path)
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError("Series file must contain a JSON object")
    series = parse_series(payload)
    logger.debug("Loaded %s points for %s from %s", len(series.history), series.name, path)
    return series


def parse_series(payload: dict[str, Any]) -> HistoricalSeries:
    history = tuple(_parse_point(item) for item in payload.get("history", []))
    for previous, current in zip(history, history[1:]):
        if current.date <= previous.date:
            raise ValueError(f"History dates must be strictly increasing: {previous.date} -> {current.date}")

    dividends = tuple(_parse_dividend(item) for item in payload.get("dividends", []))
    stats_payload = payload.get("stats")
    stats = _parse_stats(stats_payload) if stats_payload else None

    return HistoricalSeries(
        name=str(payload.get("name") or payload.get("symbol") or "unnamed"),
        history=history,
        dividends=dividends,
        stats=stats,
        symbol=payload.get("symbol"),
        currency=payload.get("currency"),
    )


def compute_series_stats(history: Sequence[PricePoint]) -> SeriesStats:
    """Monthly mean/stddev of simple returns, annualized by compounding."""
    returns = []
    for previous, current in zip(history, history[1:]):
        if previous.price == 0:
            continue
        returns.append((current.price - previous.price) / previous.price)

    avg_return = mean(returns)
    std_dev = population_std_dev(returns)
    return SeriesStats(
        monthly_return=avg_return,
        monthly_std_dev=std_dev,
        annualized_return=(1.0 + avg_return) ** 12 - 1.0,
        annualized_std_dev=std_dev * 12**0.5,
        data_points=len(history),
    )


def with_computed_stats(series: HistoricalSeries) -> HistoricalSeries:
    if series.stats is not None:
        return series
    return replace(series, stats=compute_series_stats(series.history))


def _parse_date(value: Any, key: str) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError as exc:
        raise ValueError(f"Invalid {key}: {value}") from exc


def _positive(value: Any, key: str) -> float:
    number = float(value)
    if number <= 0:
        raise ValueError(f"{key} must be positive, got {value}")
    return number


def _optional_positive(value: Any, key: str) -> Optional[float]:
    if value is None:
        return None
    return _positive(value, key)


def _parse_point(data: dict[str, Any]) -> PricePoint:
    if "date" not in data or data.get("close") is None:
        raise ValueError(f"History entry needs date and close: {data}")
    close = _positive(data["close"], "close")
    volume = float(data.get("volume") or 0.0)
    if volume < 0:
        raise ValueError(f"volume must be non-negative, got {volume}")
    return PricePoint(
        date=_parse_date(data["date"], "date"),
        open=_positive(data.get("open", close), "open"),
        high=_positive(data.get("high", close), "high"),
        low=_positive(data.get("low", close), "low"),
        close=close,
        volume=volume,
        adj_close=_optional_positive(data.get("adjClose", data.get("adj_close")), "adjClose"),
    )


def _parse_dividend(data: dict[str, Any]) -> DividendEvent:
    amount = float(data.get("amount", 0.0))
    if amount < 0:
        raise ValueError(f"Dividend amount must be non-negative, got {amount}")
    return DividendEvent(date=_parse_date(data.get("date"), "dividend date"), amount=amount)


def _parse_stats(data: dict[str, Any]) -> SeriesStats:
    """Read provider statistics; an absent mean or deviation takes the default."""

    def optional_float(value: Any) -> Optional[float]:
        if value is None:
            return None
        return float(value)

    monthly_return = optional_float(data.get("monthlyReturn", data.get("monthly_return")))
    monthly_std_dev = optional_float(data.get("monthlyStdDev", data.get("monthly_std_dev")))
    data_points = data.get("dataPoints", data.get("data_points"))
    return SeriesStats(
        monthly_return=DEFAULT_MONTHLY_RETURN if monthly_return is None else monthly_return,
        monthly_std_dev=DEFAULT_MONTHLY_STD_DEV if monthly_std_dev is None else monthly_std_dev,
        annualized_return=optional_float(data.get("annualizedReturn", data.get("annualized_return"))),
        annualized_std_dev=optional_float(data.get("annualizedStdDev", data.get("annualized_std_dev"))),
        data_points=int(data_points) if data_points is not None else None,
    )
