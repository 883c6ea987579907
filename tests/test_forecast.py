import random
from datetime import date

import pytest

from helpers import flat_stats, make_series
from snowball.config import default_params
from snowball.simulator import InvalidParameterError, Regime, assess_goal, regime_table, run_forecast


def _params(**overrides):
    values = dict(
        initial_capital=100000,
        monthly_investment=10000,
        years=5,
        monte_carlo_runs=200,
        seed=42,
        anchor_date=date(2024, 1, 31),
    )
    values.update(overrides)
    return default_params(**values)


def test_regime_table_scales_base_statistics():
    regimes = regime_table(flat_stats(0.01, 0.04))
    bull = regimes[Regime.BULL]
    bear = regimes[Regime.BEAR]
    assert bull.mean == pytest.approx(0.015)
    assert bull.std_dev == pytest.approx(0.032)
    assert bull.stay_probability == 0.95
    assert bear.mean == pytest.approx(-0.005)
    assert bear.std_dev == pytest.approx(0.06)
    assert bear.stay_probability == 0.90


def test_regime_table_defaults_without_stats():
    regimes = regime_table(None)
    assert regimes[Regime.BULL].mean == pytest.approx(0.008 * 1.5)
    assert regimes[Regime.BEAR].std_dev == pytest.approx(0.05 * 1.5)


def test_percentile_bands_are_ordered():
    result = run_forecast(make_series([100.0, 101.0], stats=flat_stats()), _params())
    assert len(result.timeline) == 5 * 12 + 1
    for point in result.timeline:
        assert point.p10 <= point.p25 <= point.p50 <= point.p75 <= point.p90


def test_first_month_holds_initial_capital():
    result = run_forecast(None, _params())
    first = result.timeline[0]
    assert first.month == 0
    assert first.p10 == first.p90 == 100000
    assert first.capital == 100000


def test_capital_is_path_independent():
    result = run_forecast(None, _params())
    for point in result.timeline:
        assert point.capital == 100000 + 10000 * point.month
    assert result.summary.total_capital == 100000 + 10000 * 60


def test_seeded_runs_are_reproducible():
    first = run_forecast(None, _params())
    second = run_forecast(None, _params())
    assert first.timeline == second.timeline
    assert first.summary == second.summary

    third = run_forecast(None, _params(seed=None), rng=random.Random(5))
    fourth = run_forecast(None, _params(seed=None), rng=random.Random(5))
    assert third.timeline == fourth.timeline


def test_different_seeds_diverge():
    first = run_forecast(None, _params(seed=1))
    second = run_forecast(None, _params(seed=2))
    assert first.summary.median != second.summary.median


def test_worker_count_does_not_change_bands():
    single = run_forecast(None, _params(years=1, monte_carlo_runs=20, workers=1))
    pooled = run_forecast(None, _params(years=1, monte_carlo_runs=20, workers=2))
    assert single.timeline == pooled.timeline
    assert single.final_values == pooled.final_values


def test_summary_uses_final_month_percentiles():
    result = run_forecast(None, _params())
    last = result.timeline[-1]
    summary = result.summary
    assert summary.conservative == last.p10
    assert summary.median == last.p50
    assert summary.optimistic == last.p90
    assert summary.simulations == 200
    assert summary.median_return == pytest.approx((summary.median - summary.total_capital) / summary.total_capital)
    assert summary.goal_probability is None
    assert list(result.final_values) == sorted(result.final_values)


def test_zero_volatility_regimes_stay_ordered():
    series = make_series([100.0, 100.0], stats=flat_stats(0.01, 0.0))
    result = run_forecast(series, _params(monte_carlo_runs=50))
    for point in result.timeline:
        assert point.p10 <= point.p50 <= point.p90


def test_timeline_dates_step_by_calendar_month():
    result = run_forecast(None, _params(years=1, monte_carlo_runs=10))
    assert result.timeline[0].date == date(2024, 1, 31)
    assert result.timeline[1].date == date(2024, 2, 29)
    assert result.timeline[12].date == date(2025, 1, 31)


def test_goal_probability_bounds():
    low = run_forecast(None, _params(target_asset=1.0))
    high = run_forecast(None, _params(target_asset=1e12))
    assert low.summary.goal_probability == 1.0
    assert high.summary.goal_probability == 0.0


def test_assess_goal_bands():
    result = run_forecast(None, _params())
    summary = result.summary

    easy = assess_goal(result, min(result.final_values) * 0.5)
    assert easy.band == "below_p10"
    assert easy.probability == 1.0
    assert easy.meets_median is True

    hard = assess_goal(result, max(result.final_values) * 2)
    assert hard.band == "above_p90"
    assert hard.probability == 0.0
    assert hard.shortfall_at_median == pytest.approx(max(result.final_values) * 2 - summary.median)

    middle = assess_goal(result, summary.median)
    assert middle.band == "p10_p50"
    assert 0.0 < middle.probability <= 1.0


def test_monte_carlo_runs_must_be_positive():
    with pytest.raises(InvalidParameterError):
        run_forecast(None, _params(monte_carlo_runs=0))


def test_years_must_be_positive():
    with pytest.raises(InvalidParameterError):
        run_forecast(None, _params(years=0))
