"""
Match reason generation.

Reasons come from one ordered rule table. Each rule pairs a predicate over
(breakdown, viewer, candidate) with a template producing the text. Rules are
evaluated top to bottom and collection stops at MAX_REASONS, so the order of
REASON_RULES is the display priority.
"""

from typing import Callable, Dict, List, NamedTuple

from ..profiles.schema import Profile

MAX_REASONS = 3


class ReasonRule(NamedTuple):
    """A single reason: when it applies and what it says."""
    name: str
    applies: Callable[[Dict[str, int], Profile, Profile], bool]
    render: Callable[[Profile, Profile], str]


def _location_reason(viewer: Profile, candidate: Profile) -> str:
    if viewer.city == candidate.city:
        return f"Both from {candidate.city}"
    return f"Both from {candidate.state}"


REASON_RULES = (
    ReasonRule(
        "religion",
        lambda b, v, c: b["religion"] >= 80,
        lambda v, c: f"Same {c.religion} community",
    ),
    ReasonRule(
        "location",
        lambda b, v, c: b["location"] >= 80,
        _location_reason,
    ),
    ReasonRule(
        "education",
        lambda b, v, c: b["education"] >= 85,
        lambda v, c: "Similar education background",
    ),
    ReasonRule(
        "age",
        lambda b, v, c: b["age"] >= 80,
        lambda v, c: "Compatible age range",
    ),
    ReasonRule(
        "lifestyle",
        lambda b, v, c: b["lifestyle"] >= 80,
        lambda v, c: "Similar lifestyle preferences",
    ),
    ReasonRule(
        "preferences",
        lambda b, v, c: b["preferences"] >= 80,
        lambda v, c: "Matches your preferences",
    ),
    # Independent of the sub-scores
    ReasonRule(
        "profession",
        lambda b, v, c: v.profession == c.profession,
        lambda v, c: f"Both in {c.profession}",
    ),
)


def generate_match_reasons(
    breakdown: Dict[str, int],
    viewer: Profile,
    candidate: Profile,
    limit: int = MAX_REASONS
) -> List[str]:
    """
    Collect the first qualifying reasons in priority order.

    Args:
        breakdown: Sub-scores keyed by name
        viewer: Profile doing the matching
        candidate: Profile being evaluated
        limit: Maximum number of reasons to return

    Returns:
        Up to `limit` reason strings, possibly empty
    """
    reasons: List[str] = []
    for rule in REASON_RULES:
        if len(reasons) >= limit:
            break
        if rule.applies(breakdown, viewer, candidate):
            reasons.append(rule.render(viewer, candidate))
    return reasons
