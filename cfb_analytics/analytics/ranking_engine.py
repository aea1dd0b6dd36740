#!/usr/bin/env python3
"""
Composite Ranking Engine

Turns a season's per-team metric population into a dense 1..N leaderboard:
per-metric dense-rank percentiles, a weighted composite score and an
explicitly tie-broken rank. Every call recomputes from scratch against the
population it is given, so filtering the population (e.g. by conference)
re-derives every percentile and rank.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import numpy as np
import pandas as pd

from cfb_analytics.analytics.categories import METRIC_COLUMNS, MetricCategory
from cfb_analytics.analytics.composite import CompositeWeights, NEUTRAL_PERCENTILE, composite_scores
from cfb_analytics.analytics.config import load_config
from cfb_analytics.analytics.percentile import dense_rank_percentiles
from cfb_analytics.schema.team_metrics_schema import RankedTeamSchema, TeamMetricSchema, validate_dataframe

logger = logging.getLogger(__name__)

Records = Union[pd.DataFrame, Iterable[Mapping[str, Any]]]

PASSTHROUGH_COLUMNS = ['conference', 'strength_of_schedule_rank', 'wins', 'losses']

RANKING_COLUMNS = [
    'rank', 'team',
    # Composite
    'composite_score',
    # Component percentiles
    'offense_percentile', 'defense_percentile', 'special_teams_percentile',
    # Raw metrics
    'offense_value', 'defense_value', 'special_teams_value',
]


def records_to_frame(records: Records) -> pd.DataFrame:
    """
    Build a metric frame from a DataFrame or a list of record dicts.

    The input is never modified; metric columns missing from every record
    are added as all-missing. The frame is validated against
    TeamMetricSchema, so a metric that is present but not numeric raises
    instead of being treated as missing.

    Raises:
        ValueError: If non-empty records carry no team column
        pa.errors.SchemaError: If the records violate TeamMetricSchema
    """
    if isinstance(records, pd.DataFrame):
        frame = records.copy()
    else:
        frame = pd.DataFrame(list(records))

    if 'team' not in frame.columns:
        if frame.empty:
            frame['team'] = pd.Series(dtype=object)
        else:
            raise ValueError("Metric records must carry a 'team' column")

    for column in METRIC_COLUMNS:
        if column not in frame.columns:
            frame[column] = np.nan

    frame = validate_dataframe(frame.reset_index(drop=True), TeamMetricSchema)
    return frame


def usable_records(frame: pd.DataFrame) -> pd.DataFrame:
    """
    Drop records with no metric present.

    Args:
        frame: Metric frame from records_to_frame

    Returns:
        Filtered copy with a fresh index
    """
    mask = frame[METRIC_COLUMNS].notna().any(axis=1)
    dropped = int((~mask).sum())
    if dropped:
        logger.info(f"Dropped {dropped} records with no metrics: "
                    f"{frame.loc[~mask, 'team'].tolist()}")
    return frame[mask].reset_index(drop=True)


def filter_population(records: Records, conferences: Optional[Iterable[str]] = None) -> pd.DataFrame:
    """
    Restrict a metric population to a set of conferences.

    Args:
        records: Metric records
        conferences: Conferences to keep; None keeps every record

    Returns:
        Filtered metric frame
    """
    frame = records_to_frame(records)
    if conferences is None:
        return frame

    keep = set(conferences)
    if 'conference' not in frame.columns:
        logger.warning("No conference column present; conference filter removes every team")
        return frame.iloc[0:0].reset_index(drop=True)

    filtered = frame[frame['conference'].isin(keep)].reset_index(drop=True)
    logger.info(f"Conference filter kept {len(filtered)}/{len(frame)} teams")
    return filtered


def _empty_ranking(frame: pd.DataFrame) -> pd.DataFrame:
    extra = [c for c in PASSTHROUGH_COLUMNS if c in frame.columns]
    empty = pd.DataFrame({col: pd.Series(dtype=float) for col in RANKING_COLUMNS + extra})
    empty['rank'] = empty['rank'].astype(int)
    empty['team'] = empty['team'].astype(object)
    return empty


def build_ranking(records: Records, weights: Optional[CompositeWeights] = None,
                  config: Optional[Dict[str, Any]] = None) -> pd.DataFrame:
    """
    Build the composite leaderboard for a metric population.

    Args:
        records: Metric records (DataFrame or list of dicts) for one season
        weights: Composite weights; defaults to the WEIGHTS block of config
        config: Ranking configuration; defaults to the packaged configuration

    Returns:
        DataFrame of ranked teams sorted by rank ascending
    """
    config = config if config is not None else load_config()
    weights = weights or CompositeWeights.from_config(config)
    neutral = float(config.get('NEUTRAL_PERCENTILE', NEUTRAL_PERCENTILE))

    frame = records_to_frame(records)

    # Step 1: Filter
    logger.info("Step 1: Filtering records with no usable metrics")
    frame = usable_records(frame)

    if frame.empty:
        logger.info("No teams to rank")
        return _empty_ranking(frame)

    # Step 2: Per-metric percentiles against the filtered population
    logger.info(f"Step 2: Dense-rank percentiles for {len(frame)} teams")
    for category in MetricCategory:
        frame[category.percentile_column] = dense_rank_percentiles(
            frame[category.value_column], frame['team'], category.higher_is_better
        )
        missing = int(frame[category.percentile_column].isna().sum())
        if missing:
            logger.info(f"  {category.value}: {missing} teams missing, neutral-filled at {neutral}")

    # Step 3: Composite
    logger.info(f"Step 3: Composite scores with {weights}")
    frame['composite_score'] = composite_scores(frame, weights, neutral)
    for category in MetricCategory:
        frame[category.percentile_column] = frame[category.percentile_column].fillna(neutral)

    # Step 4: Rank
    logger.info("Step 4: Assigning ranks")
    if 'strength_of_schedule_rank' in frame.columns:
        sos_key = frame['strength_of_schedule_rank'].astype(float)
    else:
        sos_key = pd.Series(np.nan, index=frame.index)
    frame['_sos_key'] = sos_key.fillna(np.inf)

    frame = frame.sort_values(
        ['composite_score', '_sos_key', 'team'],
        ascending=[False, True, True],
        kind='mergesort'
    ).drop(columns='_sos_key').reset_index(drop=True)
    frame['rank'] = range(1, len(frame) + 1)

    extra = [c for c in PASSTHROUGH_COLUMNS if c in frame.columns]
    result = frame[RANKING_COLUMNS + extra]

    if config.get('VALIDATE_OUTPUT', True):
        result = validate_dataframe(result, RankedTeamSchema)

    logger.info(f"Ranking complete: {len(result)} teams ranked "
                f"(top={result['team'].iloc[0]}, composite={result['composite_score'].iloc[0]:.2f})")
    return result


def build_standings(records: Records, weights: Optional[CompositeWeights] = None,
                    conferences: Optional[Iterable[str]] = None, limit: Optional[int] = None,
                    config: Optional[Dict[str, Any]] = None) -> pd.DataFrame:
    """
    Top composite standings over the FBS conference population.

    Args:
        records: Metric records, optionally carrying conference/wins/losses
        weights: Composite weights
        conferences: Conference set; defaults to FBS_CONFERENCES from config
        limit: Rows to keep; defaults to STANDINGS_LIMIT from config
        config: Ranking configuration

    Returns:
        Leaderboard truncated to the top `limit` teams
    """
    config = config if config is not None else load_config()
    if conferences is None:
        conferences = config.get('FBS_CONFERENCES')
    if limit is None:
        limit = int(config.get('STANDINGS_LIMIT', 10))

    population = filter_population(records, conferences)
    ranking = build_ranking(population, weights, config)
    return ranking.head(limit).reset_index(drop=True)


def stat_leaders(records: Records, columns: Mapping[str, str], limit: Optional[int] = None,
                 config: Optional[Dict[str, Any]] = None) -> Dict[str, pd.DataFrame]:
    """
    Top teams per metric, highest value first.

    Args:
        records: Metric records
        columns: Mapping of leader-board label to column name
        limit: Teams per board; defaults to LEADERS_LIMIT from config
        config: Ranking configuration

    Returns:
        Dictionary of label to DataFrame with team and value columns
    """
    if limit is None:
        config = config if config is not None else load_config()
        limit = int(config.get('LEADERS_LIMIT', 5))

    frame = records_to_frame(records)
    leaders = {}

    for label, column in columns.items():
        if column not in frame.columns:
            raise ValueError(f"Unknown metric column for '{label}': {column}")

        board = frame[['team', column]].rename(columns={column: 'value'})
        board = board.assign(value=board['value'].astype(float)).dropna(subset=['value'])
        board = board.sort_values(['value', 'team'], ascending=[False, True], kind='mergesort')
        leaders[label] = board.head(limit).reset_index(drop=True)

    return leaders


def ranking_records(ranking: pd.DataFrame) -> List[Dict[str, Any]]:
    """Leaderboard rows as plain dicts, rank ascending."""
    return ranking.sort_values('rank').to_dict(orient='records')
