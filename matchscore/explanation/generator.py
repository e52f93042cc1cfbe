"""
Human-readable match explanations.

Buckets a match score into a tier and renders a one-line summary:

    >= 90  Excellent match (95%) - Same Hindu community, Both from Mumbai
    >= 80  Great match
    >= 70  Good match
    >= 60  Moderate match
    <  60  Low match (55%) - Limited compatibility

The low tier always uses the fixed suffix and never lists reasons. For the
other tiers an empty reason list renders the label alone, e.g.
"Good match (72%)".
"""

from enum import Enum

from ..scoring.scorer import MatchScore

LOW_MATCH_SUFFIX = "Limited compatibility"


class MatchTier(Enum):
    """Score tiers with their display labels."""
    EXCELLENT = "Excellent match"
    GREAT = "Great match"
    GOOD = "Good match"
    MODERATE = "Moderate match"
    LOW = "Low match"


# Lower bound of each tier, checked in order
TIER_THRESHOLDS = (
    (90, MatchTier.EXCELLENT),
    (80, MatchTier.GREAT),
    (70, MatchTier.GOOD),
    (60, MatchTier.MODERATE),
)


def get_match_tier(score: int) -> MatchTier:
    """Return the tier a score falls into."""
    for threshold, tier in TIER_THRESHOLDS:
        if score >= threshold:
            return tier
    return MatchTier.LOW


def generate_match_explanation(match_score: MatchScore) -> str:
    """
    Render a match score as a one-line explanation.

    Args:
        match_score: Result of compatibility scoring

    Returns:
        Explanation string
    """
    score = match_score.score
    tier = get_match_tier(score)
    header = f"{tier.value} ({score}%)"

    if tier is MatchTier.LOW:
        return f"{header} - {LOW_MATCH_SUFFIX}"
    if not match_score.reasons:
        return header
    return f"{header} - {', '.join(match_score.reasons)}"
