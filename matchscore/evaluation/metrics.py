"""
Evaluation metrics for compatibility scores.

Scores are rule-based, so evaluation is about behaviour rather than accuracy:
1. Score distribution over a ranked batch
2. How strongly each sub-score drives the final score (rank correlation)
3. Symmetry of the sub-scores that do not depend on who is viewing

This module DOES NOT claim the scores predict real-world outcomes.
"""

import logging
from dataclasses import dataclass, field
from itertools import permutations
from typing import Dict, List, Any, Optional, Sequence
import json

import numpy as np
import pandas as pd
from scipy.stats import spearmanr

from ..profiles.schema import Profile
from ..scoring.weights import SUBSCORE_NAMES
from ..scoring.subscores import (
    location_compatibility,
    education_compatibility,
    religion_compatibility,
)

logger = logging.getLogger(__name__)

# Sub-scores that must not change when viewer and candidate are swapped
SYMMETRIC_SUBSCORES = {
    "location": location_compatibility,
    "education": education_compatibility,
    "religion": religion_compatibility,
}


@dataclass
class ScoreDistributionStats:
    """Statistics about score distribution."""
    count: int
    mean: float
    std: float
    min: float
    max: float
    quantiles: Dict[str, float]  # e.g., {"p10": 52.0, "p50": 68.0, "p90": 84.0}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": int(self.count),
            "mean": float(self.mean),
            "std": float(self.std),
            "min": float(self.min),
            "max": float(self.max),
            "quantiles": {k: float(v) for k, v in self.quantiles.items()}
        }


@dataclass
class SymmetryCheck:
    """Results of swapping viewer and candidate for one sub-score."""
    subscore: str
    n_pairs: int
    n_violations: int

    @property
    def is_symmetric(self) -> bool:
        return self.n_violations == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "subscore": self.subscore,
            "n_pairs": int(self.n_pairs),
            "n_violations": int(self.n_violations),
            "is_symmetric": self.is_symmetric
        }


@dataclass
class EvaluationReport:
    """
    Evaluation report for a scored batch.

    Contains distribution statistics, sub-score correlations and symmetry
    checks. The report documents scorer behaviour WITHOUT claiming predictive
    validity.
    """
    name: str
    distribution_stats: ScoreDistributionStats
    breakdown_correlations: Dict[str, float] = field(default_factory=dict)
    symmetry_checks: List[SymmetryCheck] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "distribution_stats": self.distribution_stats.to_dict(),
            "breakdown_correlations": {k: float(v) for k, v in self.breakdown_correlations.items()},
            "symmetry_checks": [c.to_dict() for c in self.symmetry_checks]
        }

    def save(self, filepath: str) -> None:
        """Save report to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved evaluation report to {filepath}")

    def summary(self) -> str:
        """Generate text summary of the report."""
        stats = self.distribution_stats
        lines = [
            f"Evaluation Report: {self.name}",
            "=" * 50,
            "",
            f"Score Distribution ({stats.count} candidates):",
            f"  Mean: {stats.mean:.2f}",
            f"  Std:  {stats.std:.2f}",
            f"  Min:  {stats.min:.0f}",
            f"  Max:  {stats.max:.0f}",
        ]

        for q_name, q_value in stats.quantiles.items():
            lines.append(f"  {q_name}: {q_value:.1f}")

        if self.breakdown_correlations:
            lines.extend(["", "Sub-score Spearman correlation with final score:"])
            for name, corr in self.breakdown_correlations.items():
                lines.append(f"  {name}: {corr:.3f}")

        if self.symmetry_checks:
            lines.extend(["", "Symmetry Checks:"])
            for check in self.symmetry_checks:
                lines.append(
                    f"  {check.subscore}: {check.n_violations}/{check.n_pairs} violations"
                )

        return "\n".join(lines)


def compute_score_distribution_stats(
    scores: np.ndarray,
    quantiles: Sequence[float] = (0.1, 0.25, 0.5, 0.75, 0.9)
) -> ScoreDistributionStats:
    """
    Compute distribution statistics for scores.

    Args:
        scores: Array of compatibility scores
        quantiles: Quantile values to compute (default: p10, p25, p50, p75, p90)

    Returns:
        ScoreDistributionStats instance
    """
    scores = np.asarray(scores, dtype=float)
    if scores.size == 0:
        raise ValueError("Cannot compute distribution statistics for an empty score array")

    quantile_dict = {
        f"p{int(round(q * 100))}": float(np.percentile(scores, q * 100))
        for q in quantiles
    }

    return ScoreDistributionStats(
        count=int(scores.size),
        mean=float(np.mean(scores)),
        std=float(np.std(scores)),
        min=float(np.min(scores)),
        max=float(np.max(scores)),
        quantiles=quantile_dict
    )


def compute_breakdown_correlations(ranked: pd.DataFrame) -> Dict[str, float]:
    """
    Spearman correlation of each sub-score column with the final score.

    Constant columns have no defined rank correlation and are reported as NaN.

    Args:
        ranked: Ranking output with a score column and one column per sub-score

    Returns:
        Mapping of sub-score name to correlation
    """
    if len(ranked) < 2:
        logger.warning("Need at least 2 scored candidates for correlation analysis")
        return {}

    correlations = {}
    for name in SUBSCORE_NAMES:
        column = ranked[name].to_numpy(dtype=float)
        scores = ranked["score"].to_numpy(dtype=float)
        if np.all(column == column[0]) or np.all(scores == scores[0]):
            correlations[name] = float("nan")
            continue
        corr, _ = spearmanr(column, scores)
        correlations[name] = float(corr)
    return correlations


def check_subscore_symmetry(profiles: Sequence[Profile]) -> List[SymmetryCheck]:
    """
    Swap viewer and candidate over all ordered profile pairs.

    Args:
        profiles: Profiles to pair up

    Returns:
        One SymmetryCheck per sub-score in SYMMETRIC_SUBSCORES
    """
    checks = []
    for name, fn in SYMMETRIC_SUBSCORES.items():
        n_pairs = 0
        n_violations = 0
        for a, b in permutations(profiles, 2):
            n_pairs += 1
            if fn(a, b) != fn(b, a):
                n_violations += 1
        if n_violations:
            logger.warning(f"Sub-score '{name}' asymmetric on {n_violations}/{n_pairs} pairs")
        checks.append(SymmetryCheck(subscore=name, n_pairs=n_pairs, n_violations=n_violations))
    return checks


def create_evaluation_report(
    name: str,
    ranked: pd.DataFrame,
    profiles: Optional[Sequence[Profile]] = None,
    quantiles: Sequence[float] = (0.1, 0.25, 0.5, 0.75, 0.9)
) -> EvaluationReport:
    """
    Create a complete evaluation report.

    Args:
        name: Report name (e.g. the viewer's profile id)
        ranked: Ranking output from rank_candidates
        profiles: Profiles for the symmetry check (skipped if None)
        quantiles: Quantiles to compute

    Returns:
        EvaluationReport instance
    """
    dist_stats = compute_score_distribution_stats(ranked["score"].to_numpy(), quantiles)
    correlations = compute_breakdown_correlations(ranked)

    symmetry = []
    if profiles is not None:
        symmetry = check_subscore_symmetry(profiles)

    return EvaluationReport(
        name=name,
        distribution_stats=dist_stats,
        breakdown_correlations=correlations,
        symmetry_checks=symmetry
    )
