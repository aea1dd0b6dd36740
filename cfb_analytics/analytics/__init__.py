"""
Analytics module for the college football ranking engine.

This module provides percentile normalization, composite scoring, the
composite leaderboard and two-metric quadrant comparisons.
"""

from .categories import MetricCategory, PercentileMode
from .percentile import (
    percentile, count_percentile, count_percentiles,
    dense_rank_percentile, dense_rank_percentiles
)
from .composite import CompositeWeights, DEFAULT_WEIGHTS, composite_score, composite_scores
from .ranking_engine import (
    build_ranking, build_standings, filter_population, stat_leaders, usable_records
)
from .quadrant import QuadrantSplit, ScatterPreset, build_scatter, classify, quadrant_label
from .radar import DEFENSE_RADAR_METRICS, OFFENSE_RADAR_METRICS, radar_profile

__all__ = [
    'MetricCategory',
    'PercentileMode',
    'percentile',
    'count_percentile',
    'count_percentiles',
    'dense_rank_percentile',
    'dense_rank_percentiles',
    'CompositeWeights',
    'DEFAULT_WEIGHTS',
    'composite_score',
    'composite_scores',
    'build_ranking',
    'build_standings',
    'filter_population',
    'stat_leaders',
    'usable_records',
    'QuadrantSplit',
    'ScatterPreset',
    'build_scatter',
    'classify',
    'quadrant_label',
    'OFFENSE_RADAR_METRICS',
    'DEFENSE_RADAR_METRICS',
    'radar_profile',
]
