#!/usr/bin/env python3
"""
Metric categories and normalization modes used across the ranking engine.
"""

from enum import Enum


class PercentileMode(str, Enum):
    COUNT = "count"  # exploratory / radar comparisons
    DENSE_RANK = "dense_rank"  # leaderboard ranking


class MetricCategory(str, Enum):
    """
    The three components of the composite score.

    Each member knows which raw column feeds it, which percentile column it
    produces and which direction is favorable.
    """

    OFFENSE = "offense"
    DEFENSE = "defense"
    SPECIAL_TEAMS = "special_teams"

    @property
    def value_column(self) -> str:
        return f"{self.value}_value"

    @property
    def percentile_column(self) -> str:
        return f"{self.value}_percentile"

    @property
    def higher_is_better(self) -> bool:
        # Defensive efficiency is EPA allowed
        return self is not MetricCategory.DEFENSE


METRIC_COLUMNS = [category.value_column for category in MetricCategory]
PERCENTILE_COLUMNS = [category.percentile_column for category in MetricCategory]
