#!/usr/bin/env python3
"""
Radar chart profiles.

A profile places one team on each axis of a fixed metric set using
count-based percentiles against the team population.
"""

import logging
from typing import Any, Iterable, List, Mapping, Sequence, Union

import pandas as pd

from cfb_analytics.analytics.percentile import count_percentile

logger = logging.getLogger(__name__)


class RadarMetric:
    """One radar axis."""

    def __init__(self, label: str, short_label: str, column: str,
                 higher_is_better: bool = True, optional: bool = False):
        self.label = label
        self.short_label = short_label
        self.column = column
        self.higher_is_better = higher_is_better
        self.optional = optional

    def __repr__(self):
        return f"RadarMetric({self.label!r}, column={self.column!r})"


OFFENSE_RADAR_METRICS = (
    RadarMetric('Rush EPA', 'Rush', 'rush_epa'),
    RadarMetric('Pass EPA', 'Pass', 'pass_epa'),
    RadarMetric('Success Rate', 'Success', 'success_rate'),
    RadarMetric('Explosiveness', 'Explosive', 'explosiveness'),
    RadarMetric('3rd Down Rate', '3rd Down', 'third_down_rate', optional=True),
)

DEFENSE_RADAR_METRICS = (
    RadarMetric('EPA Allowed', 'EPA Def', 'epa_allowed', higher_is_better=False),
    RadarMetric('Havoc Rate', 'Havoc', 'havoc_rate'),
    RadarMetric('Stuff Rate', 'Stuffs', 'stuff_rate'),
    RadarMetric('Sacks', 'Sacks', 'sacks'),
    RadarMetric('Interceptions', 'INTs', 'interceptions'),
    RadarMetric('Tackles for Loss', 'TFLs', 'tfls'),
)

PROFILE_COLUMNS = ['label', 'short_label', 'percentile', 'actual_value', 'inverted']


def radar_profile(team: str, population: Union[pd.DataFrame, Iterable[Mapping[str, Any]]],
                  metrics: Sequence[RadarMetric] = OFFENSE_RADAR_METRICS) -> pd.DataFrame:
    """
    Count-based percentile profile of one team.

    Args:
        team: Team to profile (must be in population)
        population: Team rows carrying a team column and the metric columns
        metrics: Radar axes

    Returns:
        DataFrame with one row per axis: label, short_label, percentile,
        actual_value, inverted
    """
    frame = population.copy() if isinstance(population, pd.DataFrame) else pd.DataFrame(list(population))
    if 'team' not in frame.columns or team not in set(frame['team']):
        raise ValueError(f"Team not in radar population: {team}")

    row = frame[frame['team'] == team].iloc[0]
    axes: List[dict] = []

    for metric in metrics:
        if metric.column not in frame.columns:
            if metric.optional:
                continue
            raise ValueError(f"Radar population missing required metric column: {metric.column}")

        column = pd.to_numeric(frame[metric.column], errors='coerce')
        value = pd.to_numeric(pd.Series([row[metric.column]]), errors='coerce').iloc[0]

        if pd.isna(value) or column.notna().sum() == 0:
            if metric.optional:
                continue
            raise ValueError(f"{team} has no value for required radar metric {metric.column}")

        axes.append({
            'label': metric.label,
            'short_label': metric.short_label,
            'percentile': count_percentile(float(value), column, metric.higher_is_better),
            'actual_value': float(value),
            'inverted': not metric.higher_is_better,
        })

    logger.debug(f"Radar profile for {team}: {len(axes)} axes")
    return pd.DataFrame(axes, columns=PROFILE_COLUMNS)
