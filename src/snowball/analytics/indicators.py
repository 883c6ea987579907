"""Indicator and sampling helpers shared by the simulator."""

from __future__ import annotations

import math
import random
from typing import Optional, Sequence


def rsi_series(prices: Sequence[float], period: int = 14) -> list[Optional[float]]:
    """Relative strength index for every index of ``prices``.

    Indices before ``period`` have no value. For index ``i`` the changes
    ``i - period + 1 .. i`` are split into gains and losses and averaged over
    ``period``. A window without losses reads 100.
    """
    if period < 1:
        raise ValueError("period must be >= 1")
    values: list[Optional[float]] = []
    for index in range(len(prices)):
        if index < period:
            values.append(None)
            continue
        gains = 0.0
        losses = 0.0
        for offset in range(index - period + 1, index + 1):
            change = prices[offset] - prices[offset - 1]
            if change > 0:
                gains += change
            else:
                losses -= change
        avg_gain = gains / period
        avg_loss = losses / period
        if avg_loss == 0:
            values.append(100.0)
            continue
        rs = avg_gain / avg_loss
        values.append(100.0 - (100.0 / (1.0 + rs)))
    return values


def sma_series(values: Sequence[float], window: int) -> list[Optional[float]]:
    if window < 1:
        raise ValueError("window must be >= 1")
    result: list[Optional[float]] = []
    running = 0.0
    for index, value in enumerate(values):
        running += value
        if index >= window:
            running -= values[index - window]
        if index < window - 1:
            result.append(None)
        else:
            result.append(running / window)
    return result


def normal_random(rng: random.Random, mean: float = 0.0, std_dev: float = 1.0) -> float:
    """Box-Muller draw of ``mean + std_dev * z`` from two uniforms."""
    u1 = 1.0 - rng.random()  # (0, 1], keeps log finite
    u2 = rng.random()
    z = math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)
    return mean + std_dev * z


def percentile_of_sorted(values: Sequence[float], p: float) -> float:
    """Nearest-rank percentile of an ascending sequence, no interpolation.

    The element at ``floor(n * p)`` is returned, clamped to the last index so
    that ``p == 1.0`` reads the maximum.
    """
    if not values:
        raise ValueError("values must not be empty")
    if not 0.0 <= p <= 1.0:
        raise ValueError("p must be within [0, 1]")
    index = min(int(math.floor(len(values) * p)), len(values) - 1)
    return values[index]


def mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def population_std_dev(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    center = mean(values)
    variance = sum((value - center) ** 2 for value in values) / len(values)
    return variance**0.5


def safe_ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return 0.0
    return numerator / denominator
