"""Evaluation module for compatibility score analysis."""

from .metrics import (
    compute_score_distribution_stats,
    compute_breakdown_correlations,
    check_subscore_symmetry,
    EvaluationReport,
    create_evaluation_report
)

__all__ = [
    "compute_score_distribution_stats",
    "compute_breakdown_correlations",
    "check_subscore_symmetry",
    "EvaluationReport",
    "create_evaluation_report"
]
