"""Historical buy-and-hold backtest with periodic contributions."""

from __future__ import annotations

from typing import Optional, Sequence

from snowball.analytics.calendar import month_key
from snowball.analytics.indicators import mean, population_std_dev, rsi_series, safe_ratio
from snowball.config.models import ContributionBasis, DipBuyStrategy, RunMode, SimulationParams
from snowball.data.models import HistoricalSeries, PricePoint
from snowball.simulator.errors import InsufficientDataError
from snowball.simulator.models import BacktestPoint, BacktestResult, BacktestSummary, DrawdownPeriod
from snowball.simulator.schedule import build_investment_schedule, contribution_for_period
from snowball.simulator.validation import validate_params

NEUTRAL_RSI = 50.0
PERIODS_PER_YEAR = 12
_VOLATILITY_EPSILON = 1e-12


def select_window(series: HistoricalSeries, params: SimulationParams) -> list[PricePoint]:
    history = list(series.history)
    if len(history) < 2:
        raise InsufficientDataError(f"{series.name}: at least 2 historical points are required")

    if params.has_date_window():
        window = [
            point
            for point in history
            if (params.start_date is None or point.date >= params.start_date)
            and (params.end_date is None or point.date <= params.end_date)
        ]
    else:
        months = min(params.months, len(history) - 1)
        window = history[len(history) - 1 - months :]

    if len(window) < 2:
        raise InsufficientDataError(f"{series.name}: fewer than 2 points in the selected window")
    return window


def run_backtest(series: HistoricalSeries, params: SimulationParams) -> BacktestResult:
    validate_params(params, RunMode.BACKTEST)
    window = select_window(series, params)
    schedule = build_investment_schedule(params)
    dividends = series.dividends_by_month()
    prices = [point.price for point in window]
    rsi_values = rsi_series(prices, params.rsi_period)

    total_units = 0.0
    total_cost = 0.0
    total_dividends = 0.0
    peak_value = 0.0
    max_drawdown = 0.0
    timeline: list[BacktestPoint] = []
    period_returns: list[float] = []

    for index, point in enumerate(window):
        price = prices[index]
        rsi = rsi_values[index]

        contribution = contribution_for_period(schedule, index, params.initial_capital)
        if _dip_signal(params, rsi):
            contribution *= params.dip_buy_multiplier

        commission = contribution * params.commission_rate
        total_units += (contribution - commission) / price
        total_cost += contribution

        dividend_cash = 0.0
        per_share = dividends.get(month_key(point.date), 0.0)
        if per_share > 0 and params.reinvest_dividends:
            dividend_cash = per_share * total_units
            total_units += dividend_cash / price
            total_dividends += dividend_cash

        market_value = total_units * price
        peak_value = max(peak_value, market_value)
        drawdown = safe_ratio(peak_value - market_value, peak_value)
        max_drawdown = max(max_drawdown, drawdown)

        exit_cost = market_value * (params.commission_rate + params.tax_rate)
        unrealized_gain = market_value - total_cost
        timeline.append(
            BacktestPoint(
                date=point.date,
                price=price,
                units=total_units,
                cost=total_cost,
                market_value=market_value,
                net_value=market_value - exit_cost,
                unrealized_gain=unrealized_gain,
                unrealized_gain_pct=safe_ratio(unrealized_gain, total_cost),
                drawdown=drawdown,
                rsi=rsi,
                contribution=contribution,
                dividend_cash=dividend_cash,
            )
        )

        if index > 0:
            previous_value = timeline[index - 1].market_value
            if params.sharpe_basis == ContributionBasis.FLAT:
                cash_flow = params.monthly_investment
            else:
                cash_flow = contribution
            period_returns.append(safe_ratio(market_value - previous_value - cash_flow, previous_value))

    periods = drawdown_periods(timeline)
    deepest = max(periods, key=lambda period: period.depth, default=None)
    final = timeline[-1]
    months = len(window) - 1
    summary = BacktestSummary(
        start_date=window[0].date,
        end_date=window[-1].date,
        months=months,
        total_cost=total_cost,
        final_market_value=final.market_value,
        final_net_value=final.net_value,
        total_return=final.unrealized_gain_pct,
        cagr=_cagr(final.market_value, total_cost, months / PERIODS_PER_YEAR),
        max_drawdown=max_drawdown,
        sharpe_ratio=sharpe_ratio(period_returns, params.risk_free_rate),
        total_dividends=total_dividends,
        total_units=total_units,
        benchmark_return=safe_ratio(prices[-1] - prices[0], prices[0]),
        max_drawdown_start=deepest.start if deepest else None,
        max_drawdown_end=deepest.trough if deepest else None,
        recovery_date=deepest.end if deepest else None,
        drawdown_periods=tuple(periods),
    )
    return BacktestResult(timeline=tuple(timeline), summary=summary)


def drawdown_periods(timeline: Sequence[BacktestPoint]) -> list[DrawdownPeriod]:
    """Group consecutive periods below the running peak.

    A period ends on the first date market value is back at its peak; one
    still open at the end of the timeline has no end date.
    """
    periods: list[DrawdownPeriod] = []
    start = trough = None
    depth = 0.0
    for point in timeline:
        if point.drawdown > 0:
            if start is None:
                start, trough, depth = point.date, point.date, point.drawdown
            elif point.drawdown > depth:
                trough, depth = point.date, point.drawdown
        elif start is not None:
            periods.append(DrawdownPeriod(start=start, trough=trough, end=point.date, depth=depth))
            start = trough = None
            depth = 0.0
    if start is not None:
        periods.append(DrawdownPeriod(start=start, trough=trough, end=None, depth=depth))
    return periods


def sharpe_ratio(period_returns: list[float], annual_risk_free_rate: float) -> float:
    """Annualized Sharpe ratio of monthly returns; 0 for a flat series."""
    if not period_returns:
        return 0.0
    risk_free = annual_risk_free_rate / PERIODS_PER_YEAR
    std_dev = population_std_dev(period_returns)
    if std_dev <= _VOLATILITY_EPSILON:
        return 0.0
    return (mean(period_returns) - risk_free) / std_dev * PERIODS_PER_YEAR**0.5


def _dip_signal(params: SimulationParams, rsi: Optional[float]) -> bool:
    if params.dip_buy_strategy != DipBuyStrategy.RSI:
        return False
    reading = NEUTRAL_RSI if rsi is None else rsi
    return reading < params.rsi_threshold


def _cagr(final_value: float, total_cost: float, years: float) -> float:
    if total_cost <= 0 or final_value <= 0 or years <= 0:
        return 0.0
    return (final_value / total_cost) ** (1.0 / years) - 1.0
