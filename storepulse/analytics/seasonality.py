"""
Seasonal Decomposition

Multiplicative decomposition of a monthly unit-sales series:

    units = trend * seasonal_index[month] * noise

1. Trend via centred 12-month moving average.
2. Seasonal ratios = units / trend.
3. Seasonal index = mean ratio per calendar month, normalised to mean 1.
4. Strength = 1 - var(noise) / var(ratios), clamped to [0, 1].

The decomposition is total: short or degenerate series produce a neutral
pattern instead of an error.
"""

import logging
import math
from typing import List, Optional, Sequence

import numpy as np

from storepulse.analytics.rules import MIN_SEASONAL_POINTS, SEASONAL_WINDOW
from storepulse.core.contracts import MonthlySalesPoint, SeasonalPattern

log = logging.getLogger("storepulse.seasonality")


# =====================================================
# HELPERS
# =====================================================

def _is_valid(value: Optional[float]) -> bool:
    return value is not None and not math.isnan(value)


def moving_average(values: Sequence[float], window: int = SEASONAL_WINDOW) -> List[Optional[float]]:
    """
    Centred moving average.

    Position i averages values[i - window//2 : i + window//2]. Positions
    closer than window//2 to either end have no average (None).
    """
    half = window // 2
    n = len(values)
    out: List[Optional[float]] = []

    for i in range(n):
        if i < half or i >= n - half:
            out.append(None)
            continue
        out.append(sum(values[i - half:i + half]) / window)

    return out


def population_variance(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return float(np.var(np.asarray(values, dtype=float)))


def neutral_pattern() -> SeasonalPattern:
    return SeasonalPattern(
        index=(1.0,) * 12,
        strength=0.0,
        trend=(),
        has_enough_data=False,
    )


# =====================================================
# DECOMPOSITION
# =====================================================

def decompose_seasonality(sales: Sequence[MonthlySalesPoint]) -> SeasonalPattern:
    """
    Decompose a monthly unit-sales series into trend, seasonal index and
    seasonality strength.

    Args:
        sales: monthly points, one per (year, month), any order

    Returns:
        SeasonalPattern; neutral (all indices 1, strength 0) when fewer
        than 12 points are available.
    """
    if not sales or len(sales) < MIN_SEASONAL_POINTS:
        log.debug(
            "Insufficient history for seasonality: %s points",
            len(sales) if sales else 0,
        )
        return neutral_pattern()

    ordered = sorted(sales, key=lambda p: p.date)
    units = [float(p.units) for p in ordered]
    months = [p.date.month - 1 for p in ordered]

    # -------------------------------------------------
    # 1. Trend
    # -------------------------------------------------
    trend = moving_average(units, SEASONAL_WINDOW)

    # -------------------------------------------------
    # 2. Seasonal ratios (detrended)
    # -------------------------------------------------
    ratios: List[Optional[float]] = [
        value / t if t is not None and t > 0 else None
        for value, t in zip(units, trend)
    ]

    # -------------------------------------------------
    # 3. Monthly buckets -> raw index
    # -------------------------------------------------
    buckets: List[List[float]] = [[] for _ in range(12)]
    for month, ratio in zip(months, ratios):
        if _is_valid(ratio):
            buckets[month].append(ratio)

    index = [sum(b) / len(b) if b else 1.0 for b in buckets]

    mean_index = sum(index) / 12
    if mean_index > 0:
        index = [v / mean_index for v in index]

    # -------------------------------------------------
    # 4. Strength
    # -------------------------------------------------
    noise: List[Optional[float]] = []
    for value, t, month in zip(units, trend, months):
        if t is not None and t > 0 and index[month]:
            noise.append(value / (t * index[month]))
        else:
            noise.append(None)

    valid_noise = [n for n in noise if _is_valid(n)]
    valid_ratios = [r for r in ratios if _is_valid(r)]

    strength = 0.0
    if valid_noise and valid_ratios:
        ratio_variance = population_variance(valid_ratios)
        if ratio_variance > 0:
            noise_variance = population_variance(valid_noise)
            strength = max(0.0, min(1.0, 1 - noise_variance / ratio_variance))

    return SeasonalPattern(
        index=tuple(index),
        strength=strength,
        trend=tuple(trend),
        has_enough_data=True,
    )
