#!/usr/bin/env python3
"""
Test suite for the composite weight sensitivity harness
"""

import pytest
import yaml

from cfb_analytics.analytics.composite import CompositeWeights
from cfb_analytics.analytics.ranking_engine import build_ranking
from cfb_analytics.analytics.ranking_tuner import (
    EMPTY_METRICS,
    compare_rankings,
    rank_deltas,
    run_weight_scenarios,
)

DEFENSE_ONLY = {'WEIGHTS': {'offense': 0.0, 'defense': 1.0, 'special_teams': 0.0}}


class TestCompareRankings:
    """Test cases for leaderboard comparison"""

    def test_identical_rankings(self, sample_metric_records):
        """Test that a leaderboard compared with itself is perfectly stable"""
        ranking = build_ranking(sample_metric_records)
        metrics = compare_rankings(ranking, ranking)

        assert metrics['spearman_correlation'] == pytest.approx(1.0)
        assert metrics['kendall_correlation'] == pytest.approx(1.0)
        assert metrics['top5_overlap'] == pytest.approx(1.0)
        assert metrics['max_rank_delta'] == 0.0
        assert metrics['teams_compared'] == 5

    def test_reversed_rankings(self, sample_metric_records):
        """Test a fully reversed leaderboard"""
        ranking = build_ranking(sample_metric_records)
        reversed_ranking = ranking.assign(rank=ranking['rank'].values[::-1])
        metrics = compare_rankings(ranking, reversed_ranking)

        assert metrics['spearman_correlation'] == pytest.approx(-1.0)
        assert metrics['max_rank_delta'] == 4.0
        assert metrics['median_rank_delta'] == 2.0

    def test_empty_rankings(self, sample_metric_records):
        """Test comparing against an empty leaderboard"""
        ranking = build_ranking(sample_metric_records)
        assert compare_rankings(ranking, build_ranking([])) == EMPTY_METRICS

    def test_single_team(self):
        """Test that a one-team comparison does not produce NaN correlations"""
        ranking = build_ranking([{'team': 'Solo', 'offense_value': 0.1}])
        metrics = compare_rankings(ranking, ranking)
        assert metrics['spearman_correlation'] == 1.0

    def test_rank_deltas(self, sample_metric_records):
        """Test per-team movement under defense-only weights"""
        base = build_ranking(sample_metric_records)
        test = build_ranking(sample_metric_records, CompositeWeights(0.0, 1.0, 0.0))
        deltas = rank_deltas(base, test)

        assert deltas['team'].tolist()[:2] == ['Georgia', 'Oregon']
        moved = deltas.set_index('team')
        assert moved.loc['Oregon', 'rank_delta'] == 2
        assert moved.loc['Georgia', 'rank_delta'] == -2
        assert moved.loc['Ohio State', 'abs_rank_delta'] == 0
        assert moved.loc['Ohio State', 'composite_delta'] == pytest.approx(20.0)


class TestRunWeightScenarios:
    """Test cases for scenario runs"""

    def test_scenarios_from_dict(self, sample_metric_records):
        """Test scenarios given as a dictionary"""
        results = run_weight_scenarios(
            sample_metric_records, {'baseline': {}, 'defense_only': DEFENSE_ONLY}
        )

        assert list(results) == ['defense_only']
        metrics = results['defense_only']
        assert metrics['teams_compared'] == 5
        assert metrics['max_rank_delta'] == 2.0
        assert metrics['spearman_correlation'] == pytest.approx(0.6)

    def test_scenarios_from_yaml(self, sample_metric_records, temp_data_dir):
        """Test scenarios loaded from a YAML file"""
        path = temp_data_dir / "scenarios.yaml"
        with open(path, 'w') as f:
            yaml.safe_dump({'baseline': {}, 'defense_only': DEFENSE_ONLY}, f)

        results = run_weight_scenarios(sample_metric_records, path)
        assert results['defense_only']['max_rank_delta'] == 2.0

    def test_packaged_scenarios(self, sample_metric_records):
        """Test the packaged scenario set"""
        results = run_weight_scenarios(sample_metric_records)

        assert set(results) == {'offense_heavy', 'defense_heavy', 'no_special_teams', 'equal_thirds'}
        for metrics in results.values():
            assert -1.0 <= metrics['spearman_correlation'] <= 1.0

    def test_baseline_required(self, sample_metric_records):
        """Test that a scenario set without a baseline is rejected"""
        with pytest.raises(ValueError):
            run_weight_scenarios(sample_metric_records, {'defense_only': DEFENSE_ONLY})
