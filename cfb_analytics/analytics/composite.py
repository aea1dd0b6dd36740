#!/usr/bin/env python3
"""
Composite scoring: one weighted score per team from its component percentiles.
"""

from dataclasses import asdict, dataclass, fields
import logging
from typing import Any, Dict, Optional

import pandas as pd

from cfb_analytics.analytics.categories import MetricCategory
from cfb_analytics.analytics.utils_stats import neutral_fill

logger = logging.getLogger(__name__)

NEUTRAL_PERCENTILE = 50.0
WEIGHT_SUM_TOLERANCE = 1e-6


@dataclass(frozen=True)
class CompositeWeights:
    """
    Weights applied to the offense, defense and special-teams percentiles.

    Offense and defense are weighted equally and dominate; special teams is
    a tie-breaking third factor. Each weight must be non-negative. Weights
    that do not sum to 1.0 are accepted with a warning, in which case the
    composite is no longer bounded by [0, 100].
    """

    offense: float = 0.40
    defense: float = 0.40
    special_teams: float = 0.20

    def __post_init__(self):
        for f in fields(self):
            weight = getattr(self, f.name)
            if pd.isna(weight) or float(weight) < 0:
                raise ValueError(f"Composite weight '{f.name}' must be non-negative, got {weight}")
            object.__setattr__(self, f.name, float(weight))

        total = self.offense + self.defense + self.special_teams
        if abs(total - 1.0) > WEIGHT_SUM_TOLERANCE:
            logger.warning(f"Composite weights sum to {total:.4f}, expected 1.0 "
                           f"(offense={self.offense}, defense={self.defense}, "
                           f"special_teams={self.special_teams})")

    def for_category(self, category: MetricCategory) -> float:
        return getattr(self, MetricCategory(category).value)

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "CompositeWeights":
        """
        Build weights from the WEIGHTS block of a ranking configuration.

        Missing keys fall back to the documented defaults.
        """
        block = config.get('WEIGHTS') or {}
        unknown = set(block) - {'offense', 'defense', 'special_teams'}
        if unknown:
            raise ValueError(f"Unknown composite weight keys: {sorted(unknown)}")
        return cls(**block)


DEFAULT_WEIGHTS = CompositeWeights()


def _fill(pct: Optional[float], neutral: float) -> float:
    if pd.isna(pct):
        return neutral
    return float(pct)


def composite_score(off_pct: Optional[float], def_pct: Optional[float], st_pct: Optional[float],
                    weights: Optional[CompositeWeights] = None,
                    neutral: float = NEUTRAL_PERCENTILE) -> float:
    """
    Weighted sum of the three component percentiles.

    A missing percentile is replaced by the neutral population median so the
    team is neither penalized nor rewarded for the absent component.

    Args:
        off_pct: Offense percentile (0-100) or None
        def_pct: Defense percentile (0-100) or None
        st_pct: Special-teams percentile (0-100) or None
        weights: Composite weights (defaults 0.40 / 0.40 / 0.20)
        neutral: Percentile substituted for a missing component

    Returns:
        Composite score
    """
    weights = weights or DEFAULT_WEIGHTS
    return (
        _fill(off_pct, neutral) * weights.offense
        + _fill(def_pct, neutral) * weights.defense
        + _fill(st_pct, neutral) * weights.special_teams
    )


def composite_scores(frame: pd.DataFrame, weights: Optional[CompositeWeights] = None,
                     neutral: float = NEUTRAL_PERCENTILE) -> pd.Series:
    """
    Vectorised composite score over a frame of percentile columns.

    Args:
        frame: DataFrame with offense_percentile, defense_percentile and
            special_teams_percentile columns (missing columns count as absent)
        weights: Composite weights
        neutral: Percentile substituted for missing components

    Returns:
        Series of composite scores aligned with frame
    """
    weights = weights or DEFAULT_WEIGHTS
    score = pd.Series(0.0, index=frame.index)

    for category in MetricCategory:
        column = category.percentile_column
        if column in frame.columns:
            pct = pd.to_numeric(frame[column], errors='coerce')
        else:
            pct = pd.Series(float('nan'), index=frame.index)
        score = score + neutral_fill(pct, neutral) * weights.for_category(category)

    return score
