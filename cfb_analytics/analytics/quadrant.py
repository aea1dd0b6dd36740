#!/usr/bin/env python3
"""
Two-metric comparisons: mean-split quadrants and scatter plot layout.

classify() works in the semantic frame where larger x is "right" and larger
y is "top". Callers comparing a lower-is-better metric orient it first
(build_scatter does this by negating the inverted axis) so "top-right" is
always the favorable corner. Screen projection keeps the raw values and
flips the axis instead.
"""

import logging
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

import numpy as np
import pandas as pd

from cfb_analytics.analytics.utils_stats import linear_ticks, padded_domain

logger = logging.getLogger(__name__)

QUADRANTS = ('top-left', 'top-right', 'bottom-left', 'bottom-right')

# Plot layout in SVG user units
PLOT_WIDTH = 800
PLOT_HEIGHT = 500
MARGIN = {'top': 40, 'right': 40, 'bottom': 60, 'left': 70}


def _coords(point: Any) -> Tuple[float, float]:
    if isinstance(point, dict):
        return float(point['x']), float(point['y'])
    if hasattr(point, 'x') and hasattr(point, 'y'):
        return float(point.x), float(point.y)
    x, y = point
    return float(x), float(y)


class QuadrantSplit:
    """Means of one point population and the quadrant lookup they define."""

    def __init__(self, x_mean: float, y_mean: float, x_invert: bool = False, y_invert: bool = False):
        self.x_mean = x_mean
        self.y_mean = y_mean
        self.x_invert = x_invert
        self.y_invert = y_invert

    def quadrant_of(self, point: Any) -> str:
        """
        Quadrant of a point relative to the means.

        Strictly greater than a mean is right/top; a point on a mean line
        falls left/bottom.
        """
        x, y = _coords(point)
        horizontal = 'right' if x > self.x_mean else 'left'
        vertical = 'top' if y > self.y_mean else 'bottom'
        return f"{vertical}-{horizontal}"

    def quadrants(self, points: Iterable[Any]) -> List[str]:
        return [self.quadrant_of(p) for p in points]

    def __repr__(self):
        return f"QuadrantSplit(x_mean={self.x_mean:.4f}, y_mean={self.y_mean:.4f})"


def classify(points: Any, x_invert: bool = False, y_invert: bool = False) -> QuadrantSplit:
    """
    Split a point population into quadrants around its means.

    Args:
        points: Iterable of {'x', 'y'} dicts, (x, y) pairs or objects with x/y
            attributes, or a DataFrame with x and y columns
        x_invert: Whether the caller oriented x from a lower-is-better metric
        y_invert: Whether the caller oriented y from a lower-is-better metric

    Returns:
        QuadrantSplit with the population means
    """
    if isinstance(points, pd.DataFrame):
        coords = list(zip(points['x'].astype(float), points['y'].astype(float)))
    else:
        coords = [_coords(p) for p in points]

    if not coords:
        raise ValueError("Cannot classify an empty point population")

    xs, ys = zip(*coords)
    split = QuadrantSplit(float(np.mean(xs)), float(np.mean(ys)), x_invert, y_invert)
    logger.debug(f"Classified {len(coords)} points: {split}")
    return split


def quadrant_label(quadrant: str, x_name: str = "X", y_name: str = "Y") -> str:
    """
    Human label for a quadrant, e.g. 'High Y / Low X'.

    Labels are semantic: "High" is the favorable end of an oriented axis.
    """
    if quadrant not in QUADRANTS:
        raise ValueError(f"Unknown quadrant: {quadrant}")
    vertical, horizontal = quadrant.split('-')
    y_part = 'High' if vertical == 'top' else 'Low'
    x_part = 'High' if horizontal == 'right' else 'Low'
    return f"{y_part} {y_name} / {x_part} {x_name}"


class AxisScale:
    """
    Linear projection of raw metric values onto a plot axis.

    The domain is the data range padded by 10% on each side. With invert set,
    larger raw values land nearer range_start.
    """

    def __init__(self, values: Iterable[float], range_start: float, range_end: float,
                 invert: bool = False, padding: float = 0.1):
        self.domain = padded_domain(values, padding)
        self.range_start = range_start
        self.range_end = range_end
        self.invert = invert

    def __call__(self, value: float) -> float:
        low, high = self.domain
        normalized = (value - low) / (high - low)
        if self.invert:
            normalized = 1 - normalized
        return self.range_start + normalized * (self.range_end - self.range_start)

    def ticks(self, count: int = 6) -> List[float]:
        return linear_ticks(self.domain, count)


class ScatterLayout:
    """Projected points plus the scales and split they were built with."""

    def __init__(self, points: pd.DataFrame, split: Optional[QuadrantSplit],
                 x_scale: Optional[AxisScale], y_scale: Optional[AxisScale]):
        self.points = points
        self.split = split
        self.x_scale = x_scale
        self.y_scale = y_scale

    @property
    def raw_means(self) -> Tuple[float, float]:
        """Means in raw metric units (undoing orientation)."""
        if self.split is None:
            raise ValueError("Empty scatter layout has no means")
        x_mean = -self.split.x_mean if self.split.x_invert else self.split.x_mean
        y_mean = -self.split.y_mean if self.split.y_invert else self.split.y_mean
        return x_mean, y_mean

    def mean_lines(self) -> Dict[str, float]:
        """Screen positions of the vertical and horizontal mean reference lines."""
        x_mean, y_mean = self.raw_means
        return {'x': self.x_scale(x_mean), 'y': self.y_scale(y_mean)}


def build_scatter(frame: pd.DataFrame, x_column: str, y_column: str,
                  x_invert: bool = False, y_invert: bool = False,
                  team_column: str = 'team') -> ScatterLayout:
    """
    Lay out a two-metric scatter plot for the current team population.

    Teams missing either metric are left out. Means and quadrants are derived
    from the plotted teams only.

    Args:
        frame: Team metric frame
        x_column: Column for the horizontal axis
        y_column: Column for the vertical axis
        x_invert: Lower x is better
        y_invert: Lower y is better
        team_column: Team identifier column

    Returns:
        ScatterLayout whose points frame carries team, x, y, px, py and
        quadrant plus any color/logo/conference columns
    """
    for column in (team_column, x_column, y_column):
        if column not in frame.columns:
            raise ValueError(f"Missing scatter column: {column}")

    extras = [c for c in ('color', 'logo', 'conference') if c in frame.columns]
    data = frame[[team_column, x_column, y_column] + extras].rename(
        columns={team_column: 'team', x_column: 'x', y_column: 'y'}
    )
    data = data.assign(
        x=pd.to_numeric(data['x'], errors='coerce'),
        y=pd.to_numeric(data['y'], errors='coerce'),
    )

    dropped = int(data[['x', 'y']].isna().any(axis=1).sum())
    if dropped:
        logger.info(f"Scatter {x_column} vs {y_column}: {dropped} teams missing a value")
    data = data.dropna(subset=['x', 'y']).reset_index(drop=True)

    if data.empty:
        empty = data.assign(px=pd.Series(dtype=float), py=pd.Series(dtype=float),
                            quadrant=pd.Series(dtype=object))
        return ScatterLayout(empty, None, None, None)

    oriented = pd.DataFrame({
        'x': -data['x'] if x_invert else data['x'],
        'y': -data['y'] if y_invert else data['y'],
    })
    split = classify(oriented, x_invert, y_invert)

    x_scale = AxisScale(data['x'], MARGIN['left'], PLOT_WIDTH - MARGIN['right'], invert=x_invert)
    y_scale = AxisScale(data['y'], PLOT_HEIGHT - MARGIN['bottom'], MARGIN['top'], invert=y_invert)

    data['px'] = data['x'].map(x_scale)
    data['py'] = data['y'].map(y_scale)
    data['quadrant'] = split.quadrants(oriented.itertuples(index=False))

    return ScatterLayout(data, split, x_scale, y_scale)


class ScatterPreset(str, Enum):
    """Metric pairs offered on the team analytics page."""

    EPA_VS_SUCCESS = "epa_vs_success"
    OFF_VS_DEF = "off_vs_def"
    RUN_VS_PASS = "run_vs_pass"

    @property
    def axes(self) -> Dict[str, Any]:
        return _PRESET_AXES[self]

    def build(self, frame: pd.DataFrame) -> ScatterLayout:
        axes = self.axes
        return build_scatter(frame, axes['x_column'], axes['y_column'],
                             axes['x_invert'], axes['y_invert'])


_PRESET_AXES = {
    ScatterPreset.EPA_VS_SUCCESS: {
        'label': 'EPA vs Success Rate',
        'x_label': 'EPA per Play', 'x_column': 'epa_per_play', 'x_invert': False,
        'y_label': 'Success Rate', 'y_column': 'success_rate', 'y_invert': False,
    },
    ScatterPreset.OFF_VS_DEF: {
        'label': 'Offense vs Defense',
        'x_label': 'Offensive EPA Rank', 'x_column': 'off_epa_rank', 'x_invert': True,
        'y_label': 'Defensive EPA Rank', 'y_column': 'def_epa_rank', 'y_invert': True,
    },
    ScatterPreset.RUN_VS_PASS: {
        'label': 'Run vs Pass EPA',
        'x_label': 'Rushing EPA', 'x_column': 'rush_epa', 'x_invert': False,
        'y_label': 'Passing EPA', 'y_column': 'pass_epa', 'y_invert': False,
    },
}
