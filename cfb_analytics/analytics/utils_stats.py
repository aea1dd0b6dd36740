#!/usr/bin/env python3
"""
Statistical utilities for the ranking engine.

Provides helper functions shared by the percentile, composite and scatter
layers: population cleaning, neutral fill, means and padded axis domains.
"""

import numpy as np
import pandas as pd
from typing import Iterable, List, Tuple
import logging

logger = logging.getLogger(__name__)


def clean_population(population: Iterable[float]) -> np.ndarray:
    """
    Drop missing entries from a metric population.

    Args:
        population: Raw metric values (None/NaN allowed)

    Returns:
        Float array of the present values, input order preserved
    """
    series = pd.Series(list(population), dtype=float)
    return series.dropna().to_numpy(dtype=float)


def neutral_fill(values: pd.Series, neutral: float = 50.0) -> pd.Series:
    """
    Replace missing percentiles with the neutral population median.

    Args:
        values: Percentile series with possible NaN entries
        neutral: Value substituted for missing entries

    Returns:
        Series with no missing entries
    """
    missing = int(values.isna().sum())
    if missing:
        logger.debug(f"Neutral-filling {missing} missing percentiles with {neutral}")
    return values.fillna(neutral)


def safe_mean(values: Iterable[float]) -> float:
    """Arithmetic mean of the present values; raises on an empty population."""
    arr = clean_population(values)
    if arr.size == 0:
        raise ValueError("Cannot take the mean of an empty population")
    return float(arr.mean())


def padded_domain(values: Iterable[float], padding: float = 0.1) -> Tuple[float, float]:
    """
    Compute an axis domain that extends the data range on both sides.

    Args:
        values: Axis values
        padding: Fraction of the data range added to each end

    Returns:
        (low, high) tuple; a zero-width range is widened by 0.5 on each side
    """
    arr = clean_population(values)
    if arr.size == 0:
        raise ValueError("Cannot build an axis domain from an empty population")

    low, high = float(arr.min()), float(arr.max())
    pad = (high - low) * padding

    # Identical values would give a zero-width domain
    if pad == 0:
        return low - 0.5, high + 0.5

    return low - pad, high + pad


def linear_ticks(domain: Tuple[float, float], count: int = 6) -> List[float]:
    """
    Evenly spaced tick positions across a domain, both ends included.

    Args:
        domain: (low, high) tuple
        count: Number of ticks (at least 2)

    Returns:
        List of tick values
    """
    if count < 2:
        raise ValueError(f"Tick count must be at least 2, got {count}")
    return np.linspace(domain[0], domain[1], count).tolist()
