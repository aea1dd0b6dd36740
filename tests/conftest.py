#!/usr/bin/env python3
"""
Pytest configuration and fixtures
"""

import pytest
import pandas as pd
import tempfile
import shutil
from pathlib import Path
import sys

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))


@pytest.fixture
def sample_metric_records():
    """One season of team metrics, including a team with no data yet"""
    return [
        {'team': 'Alabama', 'offense_value': 0.25, 'defense_value': -0.05, 'special_teams_value': 1.2,
         'strength_of_schedule_rank': 3, 'conference': 'SEC', 'wins': 10, 'losses': 2},
        {'team': 'Ohio State', 'offense_value': 0.30, 'defense_value': -0.10, 'special_teams_value': 0.8,
         'strength_of_schedule_rank': 10, 'conference': 'Big Ten', 'wins': 12, 'losses': 1},
        {'team': 'Georgia', 'offense_value': 0.20, 'defense_value': -0.08, 'special_teams_value': 1.0,
         'strength_of_schedule_rank': 5, 'conference': 'SEC', 'wins': 11, 'losses': 2},
        {'team': 'Oregon', 'offense_value': 0.28, 'defense_value': 0.02, 'special_teams_value': 2.0,
         'strength_of_schedule_rank': 20, 'conference': 'Big Ten', 'wins': 13, 'losses': 0},
        {'team': 'Montana', 'offense_value': 0.15, 'defense_value': 0.05, 'special_teams_value': None,
         'strength_of_schedule_rank': None, 'conference': 'Big Sky', 'wins': 8, 'losses': 4},
        {'team': 'Ghost U', 'offense_value': None, 'defense_value': None, 'special_teams_value': None,
         'strength_of_schedule_rank': None, 'conference': 'Big Ten', 'wins': 0, 'losses': 0},
    ]


@pytest.fixture
def sample_metric_frame(sample_metric_records):
    """Sample metric population as a DataFrame"""
    return pd.DataFrame(sample_metric_records)


@pytest.fixture
def offense_scenario_records():
    """Three-team offense-only population"""
    return [
        {'team': 'A', 'offense_value': 0.30},
        {'team': 'B', 'offense_value': 0.10},
        {'team': 'C', 'offense_value': 0.20},
    ]


@pytest.fixture
def offense_radar_population():
    """Offensive radar metrics; third-down rate only tracked for some teams"""
    return pd.DataFrame({
        'team': ['Team A', 'Team B', 'Team C', 'Team D'],
        'rush_epa': [0.20, 0.10, 0.05, 0.15],
        'pass_epa': [0.30, 0.25, 0.10, 0.35],
        'success_rate': [0.50, 0.45, 0.40, 0.48],
        'explosiveness': [1.2, 1.0, 1.1, 0.9],
        'third_down_rate': [0.45, None, 0.40, None],
    })


@pytest.fixture
def defense_radar_population():
    """Defensive radar metrics"""
    return pd.DataFrame({
        'team': ['X', 'Y', 'Z'],
        'epa_allowed': [-0.10, 0.00, 0.10],
        'havoc_rate': [0.20, 0.15, 0.10],
        'stuff_rate': [0.25, 0.20, 0.22],
        'sacks': [40, 30, 20],
        'interceptions': [15, 10, 12],
        'tfls': [90, 70, 80],
    })


@pytest.fixture
def rank_scatter_frame():
    """Offense/defense rank pairs for the quadrant scatter"""
    return pd.DataFrame({
        'team': ['A', 'B', 'C'],
        'off_epa_rank': [1, 10, 5],
        'def_epa_rank': [2, 12, None],
        'color': ['#9e1b32', '#bb0000', '#ba0c2f'],
    })


@pytest.fixture
def temp_data_dir():
    """Temporary directory for test data"""
    temp_dir = tempfile.mkdtemp()
    yield Path(temp_dir)
    shutil.rmtree(temp_dir)
