#!/usr/bin/env python3
"""
Test suite for metric population and leaderboard schemas
"""

import pytest
import pandas as pd
import pandera as pa
from pathlib import Path
import sys

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))

from cfb_analytics.analytics.ranking_engine import build_ranking
from cfb_analytics.schema.team_metrics_schema import RankedTeamSchema, TeamMetricSchema, validate_dataframe


class TestTeamMetricSchema:
    """Test cases for TeamMetricSchema validation"""

    def test_valid_data_passes_validation(self, sample_metric_frame):
        """Test that a full season population passes schema validation"""
        validated_df = validate_dataframe(sample_metric_frame)

        assert len(validated_df) == 6
        assert validated_df['offense_value'].dtype == float

    def test_optional_columns_may_be_absent(self):
        """Test that conference, schedule and record columns are optional"""
        df = pd.DataFrame({
            'team': ['A', 'B'],
            'offense_value': [0.1, None],
            'defense_value': [None, 0.2],
            'special_teams_value': [None, None],
        })
        assert len(validate_dataframe(df)) == 2

    def test_duplicate_team_fails_validation(self):
        """Test that a team appearing twice fails validation"""
        df = pd.DataFrame({
            'team': ['A', 'A'],
            'offense_value': [0.1, 0.2],
            'defense_value': [0.0, 0.0],
            'special_teams_value': [0.0, 0.0],
        })
        with pytest.raises((pa.errors.SchemaError, pa.errors.SchemaErrors)):
            validate_dataframe(df)

    def test_invalid_schedule_rank_fails_validation(self):
        """Test that a schedule rank below 1 fails validation"""
        df = pd.DataFrame({
            'team': ['A'],
            'offense_value': [0.1],
            'defense_value': [0.0],
            'special_teams_value': [0.0],
            'strength_of_schedule_rank': [0],
        })
        with pytest.raises((pa.errors.SchemaError, pa.errors.SchemaErrors)):
            validate_dataframe(df)


class TestRankedTeamSchema:
    """Test cases for RankedTeamSchema validation"""

    def test_engine_output_passes(self, sample_metric_records):
        """Test that build_ranking output validates"""
        ranking = build_ranking(sample_metric_records)
        assert len(validate_dataframe(ranking, RankedTeamSchema)) == 5

    def _leaderboard(self, ranks, offense=(100.0, 0.0)):
        return pd.DataFrame({
            'rank': list(ranks),
            'team': ['A', 'B'],
            'composite_score': [80.0, 20.0],
            'offense_percentile': list(offense),
            'defense_percentile': [100.0, 0.0],
            'special_teams_percentile': [50.0, 50.0],
        })

    def test_dense_ranks_pass(self):
        """Test a well-formed two-team leaderboard"""
        assert len(validate_dataframe(self._leaderboard([1, 2]), RankedTeamSchema)) == 2

    def test_gap_in_ranks_fails(self):
        """Test that ranks skipping a position fail validation"""
        with pytest.raises((pa.errors.SchemaError, pa.errors.SchemaErrors)):
            validate_dataframe(self._leaderboard([1, 3]), RankedTeamSchema)

    def test_out_of_range_percentile_fails(self):
        """Test that a percentile above 100 fails validation"""
        with pytest.raises((pa.errors.SchemaError, pa.errors.SchemaErrors)):
            validate_dataframe(self._leaderboard([1, 2], offense=(120.0, 0.0)), RankedTeamSchema)
