#!/usr/bin/env python3
"""
Composite Weight Sensitivity Harness

Ranks one population under alternate composite weights and compares each
leaderboard against the baseline to show how sensitive the ranking is to
the weight choice.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import numpy as np
import pandas as pd
from scipy.stats import kendalltau, spearmanr

from cfb_analytics.analytics.composite import CompositeWeights
from cfb_analytics.analytics.config import DEFAULT_SCENARIOS_PATH, apply_overrides, load_config, load_yaml
from cfb_analytics.analytics.ranking_engine import Records, build_ranking, records_to_frame

logger = logging.getLogger(__name__)

EMPTY_METRICS = {
    'spearman_correlation': 0.0,
    'kendall_correlation': 0.0,
    'top5_overlap': 0.0,
    'top10_overlap': 0.0,
    'top20_overlap': 0.0,
    'median_rank_delta': 0.0,
    'p90_rank_delta': 0.0,
    'max_rank_delta': 0.0,
    'teams_compared': 0,
}


def _top_k_overlap(base_ranks: pd.Series, test_ranks: pd.Series, k: int) -> float:
    if k == 0:
        return 0.0
    base_top_k = set(base_ranks.nsmallest(k).index)
    test_top_k = set(test_ranks.nsmallest(k).index)
    return len(base_top_k.intersection(test_top_k)) / k


def _correlation(func, a: pd.Series, b: pd.Series) -> float:
    # Fewer than two teams or a constant column leave the coefficient undefined
    if len(a) < 2 or a.nunique() < 2 or b.nunique() < 2:
        return 1.0 if a.tolist() == b.tolist() else 0.0
    coefficient, _ = func(a, b)
    return float(coefficient)


def compare_rankings(df_base: pd.DataFrame, df_test: pd.DataFrame) -> Dict[str, float]:
    """
    Compare two leaderboards and compute stability metrics.

    Args:
        df_base: Baseline leaderboard
        df_test: Test leaderboard

    Returns:
        Dictionary of comparison metrics
    """
    if df_base.empty or df_test.empty:
        return dict(EMPTY_METRICS)

    merged = pd.merge(
        df_base[['team', 'rank']],
        df_test[['team', 'rank']],
        on='team',
        suffixes=('_base', '_test')
    )

    if merged.empty:
        return dict(EMPTY_METRICS)

    merged = merged.set_index('team')
    base_ranks = merged['rank_base']
    test_ranks = merged['rank_test']

    rank_deltas = np.abs(test_ranks - base_ranks)

    return {
        'spearman_correlation': _correlation(spearmanr, base_ranks, test_ranks),
        'kendall_correlation': _correlation(kendalltau, base_ranks, test_ranks),
        'top5_overlap': _top_k_overlap(base_ranks, test_ranks, min(5, len(merged))),
        'top10_overlap': _top_k_overlap(base_ranks, test_ranks, min(10, len(merged))),
        'top20_overlap': _top_k_overlap(base_ranks, test_ranks, min(20, len(merged))),
        'median_rank_delta': float(rank_deltas.median()),
        'p90_rank_delta': float(rank_deltas.quantile(0.9)),
        'max_rank_delta': float(rank_deltas.max()),
        'teams_compared': len(merged),
    }


def rank_deltas(df_base: pd.DataFrame, df_test: pd.DataFrame) -> pd.DataFrame:
    """
    Per-team rank and composite movement between two leaderboards.

    Args:
        df_base: Baseline leaderboard
        df_test: Test leaderboard

    Returns:
        DataFrame sorted by absolute rank delta, largest first
    """
    merged = pd.merge(
        df_base[['team', 'rank', 'composite_score']],
        df_test[['team', 'rank', 'composite_score']],
        on='team',
        suffixes=('_base', '_test')
    )

    merged['rank_delta'] = merged['rank_test'] - merged['rank_base']
    merged['abs_rank_delta'] = np.abs(merged['rank_delta'])
    merged['composite_delta'] = merged['composite_score_test'] - merged['composite_score_base']

    return merged.sort_values(['abs_rank_delta', 'team'], ascending=[False, True]).reset_index(drop=True)


def run_weight_scenarios(records: Records, scenarios: Optional[Union[Dict[str, Any], str, Path]] = None,
                         base_config: Optional[Dict[str, Any]] = None) -> Dict[str, Dict[str, float]]:
    """
    Rank a population under every scenario and compare each to the baseline.

    Args:
        records: Metric records for one season
        scenarios: Scenario overrides keyed by name, or a YAML path; must
            contain 'baseline'. Defaults to the packaged tuning_scenarios.yaml
        base_config: Ranking configuration the overrides are applied to

    Returns:
        Comparison metrics keyed by scenario name (baseline excluded)
    """
    if scenarios is None:
        scenarios = DEFAULT_SCENARIOS_PATH
    if not isinstance(scenarios, dict):
        scenarios = load_yaml(scenarios)
    if 'baseline' not in scenarios:
        raise ValueError("Tuning scenarios must define a 'baseline' scenario")

    base_config = base_config if base_config is not None else load_config()
    frame = records_to_frame(records)

    logger.info("Running baseline ranking...")
    baseline_config = apply_overrides(base_config, scenarios['baseline'])
    df_baseline = build_ranking(frame, CompositeWeights.from_config(baseline_config), baseline_config)
    logger.info(f"Baseline ranking complete: {len(df_baseline)} teams")

    results = {}
    for name, overrides in scenarios.items():
        if name == 'baseline':
            continue

        logger.info(f"Running scenario: {name}")
        scenario_config = apply_overrides(base_config, overrides)
        df_scenario = build_ranking(frame, CompositeWeights.from_config(scenario_config), scenario_config)

        metrics = compare_rankings(df_baseline, df_scenario)
        results[name] = metrics

        logger.info(f"Scenario {name} complete:")
        logger.info(f"  Spearman correlation: {metrics['spearman_correlation']:.3f}")
        logger.info(f"  Top-10 overlap: {metrics['top10_overlap']:.3f}")
        logger.info(f"  Median rank delta: {metrics['median_rank_delta']:.1f}")

    return results
