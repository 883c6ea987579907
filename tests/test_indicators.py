import random
from datetime import date

import pytest

from snowball.analytics import (
    add_months,
    month_key,
    monthly_dates,
    normal_random,
    percentile_of_sorted,
    population_std_dev,
    rsi_series,
    safe_ratio,
    sma_series,
)


def test_rsi_is_100_without_losses():
    prices = [100.0 + index for index in range(20)]
    values = rsi_series(prices, 14)
    assert values[:14] == [None] * 14
    assert values[14:] == [100.0] * 6


def test_rsi_matches_hand_computed_values():
    values = rsi_series([10.0, 11.0, 10.0, 12.0], period=2)
    assert values[:2] == [None, None]
    assert values[2] == pytest.approx(50.0)
    assert values[3] == pytest.approx(100.0 - 100.0 / 3.0)


def test_rsi_stays_within_bounds():
    rng = random.Random(3)
    prices = [100.0]
    for _ in range(200):
        prices.append(max(1.0, prices[-1] * (1.0 + rng.uniform(-0.08, 0.08))))
    values = [value for value in rsi_series(prices, 14) if value is not None]
    assert values
    assert all(0.0 <= value <= 100.0 for value in values)


def test_rsi_is_zero_for_straight_decline():
    prices = [200.0 - 5.0 * index for index in range(16)]
    values = rsi_series(prices, 14)
    assert values[14] == 0.0
    assert values[15] == 0.0


def test_sma_series_warms_up_with_none():
    assert sma_series([1.0, 2.0, 3.0, 4.0], 2) == [None, 1.5, 2.5, 3.5]
    assert sma_series([5.0, 7.0], 3) == [None, None]
    with pytest.raises(ValueError):
        sma_series([1.0], 0)


def test_percentile_uses_nearest_rank_without_interpolation():
    values = [10.0, 20.0, 30.0, 40.0, 50.0, 60.0, 70.0, 80.0, 90.0, 100.0]
    assert percentile_of_sorted(values, 0.10) == 20.0
    # linear interpolation would give 32.5
    assert percentile_of_sorted(values, 0.25) == 30.0
    assert percentile_of_sorted(values, 0.50) == 60.0
    assert percentile_of_sorted(values, 0.90) == 100.0
    assert percentile_of_sorted(values, 1.0) == 100.0
    assert percentile_of_sorted([42.0], 0.9) == 42.0


def test_percentile_rejects_empty_input():
    with pytest.raises(ValueError):
        percentile_of_sorted([], 0.5)


def test_normal_random_is_seeded_and_centered():
    first = [normal_random(random.Random(11), 0.01, 0.05) for _ in range(3)]
    second = [normal_random(random.Random(11), 0.01, 0.05) for _ in range(3)]
    assert first == second

    rng = random.Random(99)
    draws = [normal_random(rng, 5.0, 2.0) for _ in range(20000)]
    assert sum(draws) / len(draws) == pytest.approx(5.0, abs=0.1)
    assert population_std_dev(draws) == pytest.approx(2.0, abs=0.1)


def test_normal_random_with_zero_std_returns_mean():
    assert normal_random(random.Random(1), 0.02, 0.0) == 0.02


def test_safe_ratio_guards_zero_denominator():
    assert safe_ratio(5.0, 0.0) == 0.0
    assert safe_ratio(5.0, 2.0) == 2.5


def test_add_months_from_leap_day():
    leap = date(2024, 2, 29)
    assert add_months(leap, 1) == date(2024, 3, 29)
    assert add_months(leap, 12) == date(2025, 2, 28)
    assert add_months(leap, 48) == date(2028, 2, 29)
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months(date(2023, 12, 15), 1) == date(2024, 1, 15)


def test_monthly_dates_do_not_drift():
    dates = monthly_dates(date(2024, 2, 29), 48)
    assert len(dates) == 49
    assert dates[12] == date(2025, 2, 28)
    assert dates[13] == date(2025, 3, 29)
    assert dates[48] == date(2028, 2, 29)


def test_month_key():
    assert month_key(date(2024, 3, 5)) == "2024-03"
