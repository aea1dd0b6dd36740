#!/usr/bin/env python3
"""
Percentile normalization for per-team metrics.

Two interchangeable modes convert a raw metric into a 0-100 percentile:

- count-based: share of the population strictly below the value. Ties share
  a percentile and only the one metric column is needed. Used for radar and
  other exploratory comparisons.
- dense-rank: position in the population sorted by goodness, mapped linearly
  so the best team gets 100 and the worst 0. Used for the leaderboard.

Both modes accept a higher_is_better flag; missing values are excluded from
the population rather than treated as zero.
"""

import numpy as np
import pandas as pd
from typing import Iterable, Sequence, Union
import logging

from cfb_analytics.analytics.categories import PercentileMode
from cfb_analytics.analytics.utils_stats import clean_population

logger = logging.getLogger(__name__)


def _require_population(pop: np.ndarray) -> None:
    if pop.size == 0:
        raise ValueError("Percentile population is empty")


def _dense_percentile_from_rank(rank: Union[int, np.ndarray], n: int):
    """Map 1-based rank(s) among n teams to percentile(s); a lone team gets 100."""
    if n == 1:
        return np.full(np.shape(rank), 100.0) if np.ndim(rank) else 100.0
    return (n - np.asarray(rank, dtype=float)) / (n - 1) * 100.0


def count_percentile(value: float, population: Iterable[float], higher_is_better: bool = True) -> float:
    """
    Count-based percentile of one value against a population.

    Args:
        value: Raw metric value (need not be a member of population)
        population: Metric values of the comparison population
        higher_is_better: False for metrics where smaller raw values are better

    Returns:
        Percentile in [0, 100]
    """
    pop = clean_population(population)
    _require_population(pop)

    below = int((pop < value).sum())
    # A value above every member can exceed N - 1
    result = min(below / max(pop.size - 1, 1) * 100.0, 100.0)

    return result if higher_is_better else 100.0 - result


def count_percentiles(values: pd.Series, higher_is_better: bool = True) -> pd.Series:
    """
    Count-based percentile of every entry of a metric column against the column.

    Args:
        values: Metric column; missing entries are excluded from the population
        higher_is_better: Metric direction

    Returns:
        Series aligned with values; missing entries stay NaN
    """
    values = pd.Series(values, dtype=float)
    result = pd.Series(np.nan, index=values.index, dtype=float)

    present = values.dropna()
    if present.empty:
        return result

    ordered = np.sort(present.to_numpy())
    below = np.searchsorted(ordered, present.to_numpy(), side='left')
    pct = below / max(len(ordered) - 1, 1) * 100.0
    if not higher_is_better:
        pct = 100.0 - pct

    result.loc[present.index] = pct
    return result


def dense_rank_percentiles(values: pd.Series, teams: Union[pd.Series, Sequence[str]],
                           higher_is_better: bool = True) -> pd.Series:
    """
    Dense-rank percentiles of a metric column.

    The present values are sorted best first; equal values are ordered by
    team name so the result never depends on input order. Rank r of N maps
    to (N - r) / (N - 1) * 100.

    Args:
        values: Metric column (unique index)
        teams: Team names aligned with values
        higher_is_better: Metric direction

    Returns:
        Series aligned with values; missing entries stay NaN
    """
    values = pd.Series(values, dtype=float)
    if not isinstance(teams, pd.Series):
        teams = pd.Series(list(teams), index=values.index)

    result = pd.Series(np.nan, index=values.index, dtype=float)

    frame = pd.DataFrame({'value': values, 'team': teams.astype(str)}).dropna(subset=['value'])
    n = len(frame)
    if n == 0:
        return result

    ordered = frame.sort_values(['value', 'team'], ascending=[not higher_is_better, True],
                                kind='mergesort')
    ranks = np.arange(1, n + 1)
    result.loc[ordered.index] = _dense_percentile_from_rank(ranks, n)

    logger.debug(f"Dense-rank percentiles over {n} teams "
                 f"(best={ordered['team'].iloc[0]}, worst={ordered['team'].iloc[-1]})")
    return result


def dense_rank_percentile(value: float, population: Iterable[float], higher_is_better: bool = True) -> float:
    """
    Dense-rank percentile of one value against a population.

    Without team names there is no tie-break, so a value tied with other
    members takes the best rank of the tied group.

    Args:
        value: Raw metric value
        population: Metric values of the comparison population
        higher_is_better: Metric direction

    Returns:
        Percentile in [0, 100]
    """
    pop = clean_population(population)
    _require_population(pop)

    better = (pop > value) if higher_is_better else (pop < value)
    rank = 1 + int(better.sum())
    result = float(_dense_percentile_from_rank(rank, pop.size))

    # Non-members worse than every member would rank N + 1
    return float(np.clip(result, 0.0, 100.0))


def percentile(value: float, population: Iterable[float], higher_is_better: bool = True,
               mode: PercentileMode = PercentileMode.COUNT) -> float:
    """
    Percentile of value against population in the requested mode.

    Args:
        value: Raw metric value
        population: Comparison population (non-empty after dropping missing values)
        higher_is_better: Metric direction
        mode: PercentileMode.COUNT or PercentileMode.DENSE_RANK

    Returns:
        Percentile in [0, 100]
    """
    mode = PercentileMode(mode)
    if mode is PercentileMode.COUNT:
        return count_percentile(value, population, higher_is_better)
    return dense_rank_percentile(value, population, higher_is_better)
