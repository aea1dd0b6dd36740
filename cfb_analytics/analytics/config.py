#!/usr/bin/env python3
"""
Configuration loading for the ranking engine.

The packaged ranking_config.yaml holds the defaults; a caller-supplied YAML
file is layered over it key by key.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "ranking_config.yaml"
DEFAULT_SCENARIOS_PATH = Path(__file__).parent / "tuning_scenarios.yaml"


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a YAML mapping.

    Args:
        path: Path to YAML file

    Returns:
        Parsed dictionary (empty when the file is empty)
    """
    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top of {path}, got {type(data).__name__}")
    return data


def apply_overrides(base_cfg: Dict[str, Any], overrides: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Apply parameter overrides to a base configuration.

    Args:
        base_cfg: Base configuration dictionary
        overrides: Override parameters (top-level keys replace base keys)

    Returns:
        New configuration with overrides applied
    """
    config = copy.deepcopy(base_cfg)
    config.update(copy.deepcopy(overrides or {}))
    return config


def load_config(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load the ranking configuration.

    Args:
        path: Optional YAML file whose keys override the packaged defaults

    Returns:
        Configuration dictionary
    """
    config = load_yaml(DEFAULT_CONFIG_PATH)
    if path is not None:
        logger.info(f"Loading ranking configuration overrides from {path}")
        config = apply_overrides(config, load_yaml(path))
    return config
