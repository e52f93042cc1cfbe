"""
Profile-to-profile compatibility scoring.

This module combines the six sub-scores into the final match score:
1. Computes age, location, education, religion, lifestyle and preference
   sub-scores for (viewer, candidate)
2. Applies the fixed sub-score weights
3. Rounds and clamps the result to [0, 100]
4. Derives up to three match reasons

Scoring is keyed off the viewer: the viewer's partner preferences are applied
to the candidate, so score(A, B) and score(B, A) generally differ. All
functions are pure and hold no state between calls, so a scorer may be
shared across threads.
"""

import logging
from dataclasses import dataclass, field, asdict
from datetime import date
from typing import Dict, Any, List, Optional

from ..profiles.schema import Profile
from .weights import ScoreWeights, DEFAULT_WEIGHTS
from .reasons import generate_match_reasons
from .subscores import (
    age_compatibility,
    location_compatibility,
    education_compatibility,
    religion_compatibility,
    lifestyle_compatibility,
    preference_match,
    round_half_up,
    clamp_score,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoreBreakdown:
    """
    The six sub-scores behind a match score, each in [0, 100].
    """
    age: int
    location: int
    education: int
    religion: int
    lifestyle: int
    preferences: int

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass
class MatchScore:
    """
    Result of compatibility scoring.

    Attributes:
        score: Final compatibility score in [0, 100]
        breakdown: Sub-score breakdown
        reasons: Up to three human-readable reasons, highest priority first
    """
    score: int
    breakdown: ScoreBreakdown
    reasons: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "score": self.score,
            "reasons": list(self.reasons),
            "breakdown": self.breakdown.to_dict(),
        }


class CompatibilityScorer:
    """
    Compatibility scorer with configurable sub-score weights.

    Attributes:
        weights: ScoreWeights applied when aggregating sub-scores
    """

    def __init__(self, weights: Optional[ScoreWeights] = None):
        """
        Initialize the scorer.

        Args:
            weights: Sub-score weights (defaults to the standard weights)
        """
        self.weights = weights or DEFAULT_WEIGHTS
        self.weights.validate()
        logger.debug(f"Initialized CompatibilityScorer with weights={self.weights.to_dict()}")

    def compute_breakdown(
        self,
        viewer: Profile,
        candidate: Profile,
        today: Optional[date] = None
    ) -> ScoreBreakdown:
        """
        Compute all six sub-scores.

        Args:
            viewer: Profile doing the matching
            candidate: Profile being evaluated
            today: Evaluation date for age derivation

        Returns:
            ScoreBreakdown instance
        """
        return ScoreBreakdown(
            age=age_compatibility(viewer, candidate, today),
            location=location_compatibility(viewer, candidate),
            education=education_compatibility(viewer, candidate),
            religion=religion_compatibility(viewer, candidate),
            lifestyle=lifestyle_compatibility(viewer, candidate),
            preferences=preference_match(viewer, candidate),
        )

    def score(
        self,
        viewer: Profile,
        candidate: Profile,
        today: Optional[date] = None
    ) -> MatchScore:
        """
        Compute the compatibility of a candidate for a viewer.

        Args:
            viewer: Profile doing the matching
            candidate: Profile being evaluated
            today: Evaluation date (defaults to the current date)

        Returns:
            MatchScore with score, breakdown and reasons
        """
        today = today or date.today()
        breakdown = self.compute_breakdown(viewer, candidate, today)
        subscores = breakdown.to_dict()

        score = clamp_score(round_half_up(self.weights.weighted_sum(subscores)))
        reasons = generate_match_reasons(subscores, viewer, candidate)

        logger.debug(
            f"Scored {viewer.profile_id} -> {candidate.profile_id}: "
            f"score={score}, breakdown={subscores}"
        )

        return MatchScore(score=score, breakdown=breakdown, reasons=reasons)


_default_scorer = CompatibilityScorer()


def calculate_compatibility_score(
    viewer: Profile,
    candidate: Profile,
    today: Optional[date] = None,
    weights: Optional[ScoreWeights] = None
) -> MatchScore:
    """
    Compute the compatibility of `candidate` from `viewer`'s point of view.

    Args:
        viewer: Profile doing the matching (its partner preferences apply)
        candidate: Profile being evaluated
        today: Evaluation date for age derivation
        weights: Optional non-default sub-score weights

    Returns:
        MatchScore instance
    """
    scorer = CompatibilityScorer(weights) if weights is not None else _default_scorer
    return scorer.score(viewer, candidate, today)


def create_scorer_from_config(config: Dict[str, Any]) -> CompatibilityScorer:
    """
    Factory function to create a CompatibilityScorer from config.

    Args:
        config: Main configuration dictionary

    Returns:
        Configured CompatibilityScorer instance
    """
    weights = ScoreWeights.from_config(config)
    logger.info(f"Creating scorer with weights: {weights.to_dict()}")
    return CompatibilityScorer(weights)
