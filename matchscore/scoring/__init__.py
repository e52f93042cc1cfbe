"""Compatibility scoring: sub-scores, weighted aggregation and match reasons."""

from .scorer import (
    CompatibilityScorer,
    MatchScore,
    ScoreBreakdown,
    calculate_compatibility_score,
    create_scorer_from_config,
)
from .weights import ScoreWeights, DEFAULT_WEIGHTS, SUBSCORE_NAMES
from .reasons import generate_match_reasons, REASON_RULES, MAX_REASONS

__all__ = [
    "CompatibilityScorer",
    "MatchScore",
    "ScoreBreakdown",
    "calculate_compatibility_score",
    "create_scorer_from_config",
    "ScoreWeights",
    "DEFAULT_WEIGHTS",
    "SUBSCORE_NAMES",
    "generate_match_reasons",
    "REASON_RULES",
    "MAX_REASONS",
]
