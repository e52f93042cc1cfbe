"""
Configuration loading and validation.

This module handles loading of YAML configuration files and
validates the scoring, ranking and evaluation sections.
"""

import logging
from pathlib import Path
from typing import Dict, Any, List

import yaml

from ..scoring.weights import SUBSCORE_NAMES

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def load_config(filepath: str) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        filepath: Path to the YAML configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {filepath}")

    logger.info(f"Loading configuration from {filepath}")
    with open(filepath, "r") as f:
        config = yaml.safe_load(f)

    if config is None:
        raise ValueError(f"Configuration file is empty: {filepath}")

    return config


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration and return list of warnings/errors.

    Args:
        config: Configuration dictionary

    Returns:
        List of warning/error messages (empty if valid)
    """
    issues = []

    sections = {}
    for section in ["global", "scoring", "ranking"]:
        if section not in config:
            issues.append(f"Missing required section: {section}")
        elif not isinstance(config[section], dict):
            # e.g. a YAML key left without a body
            issues.append(f"Section {section} is empty or not a mapping")
        else:
            sections[section] = config[section]

    if "global" in sections:
        log_level = str(sections["global"].get("log_level", "INFO")).upper()
        if log_level not in VALID_LOG_LEVELS:
            issues.append(f"Unknown global.log_level: {log_level}")

    # Check scoring weights cover every sub-score and sum to 1
    if "scoring" in sections:
        weights = sections["scoring"].get("weights")
        if not weights:
            issues.append("Missing scoring.weights")
        elif not isinstance(weights, dict):
            issues.append(f"scoring.weights must be a mapping, got {type(weights).__name__}")
        else:
            missing = [name for name in SUBSCORE_NAMES if name not in weights]
            if missing:
                issues.append(f"Missing scoring.weights entries: {missing}")
            unknown = sorted(set(weights) - set(SUBSCORE_NAMES))
            if unknown:
                issues.append(f"Unknown scoring.weights entries: {unknown}")
            total = sum(float(v) for v in weights.values())
            if abs(total - 1.0) > 0.01:
                issues.append(f"Scoring weights don't sum to 1: {total}")

    if "ranking" in sections:
        ranking = sections["ranking"]
        n_jobs = ranking.get("n_jobs", 1)
        if not isinstance(n_jobs, int) or n_jobs == 0:
            issues.append(f"ranking.n_jobs must be a non-zero integer, got {n_jobs}")
        daily_limit = ranking.get("daily_limit", 10)
        if not isinstance(daily_limit, int) or daily_limit < 1:
            issues.append(f"ranking.daily_limit must be a positive integer, got {daily_limit}")

    return issues


def get_config_value(config: Dict[str, Any], path: str, default: Any = None) -> Any:
    """
    Get a nested configuration value using dot notation.

    Args:
        config: Configuration dictionary
        path: Dot-separated path (e.g., "scoring.weights.religion")
        default: Default value if path doesn't exist

    Returns:
        Configuration value or default
    """
    keys = path.split(".")
    value = config
    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default
    return value
