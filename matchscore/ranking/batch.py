"""
Batch ranking of candidates for a viewer.

Scoring one candidate never depends on another, so a batch is a plain
parallel map over candidates followed by a sort. Parallelism uses joblib's
thread backend since each call is short and allocation-bound.

Ordering:
- score descending
- candidate profile_id ascending on ties (reproducible output)

Daily matches apply the search eligibility rules before ranking:
- candidate is active and visible
- candidate belongs to a different user
- candidate is of the opposite gender
"""

import logging
from datetime import date
from typing import List, Optional, Sequence

import pandas as pd
from joblib import Parallel, delayed

from ..profiles.schema import Profile, Gender
from ..scoring.scorer import CompatibilityScorer, MatchScore
from ..scoring.weights import SUBSCORE_NAMES
from ..explanation.generator import generate_match_explanation

logger = logging.getLogger(__name__)

RANKING_COLUMNS = (
    ["profile_id", "user_id", "score"]
    + list(SUBSCORE_NAMES)
    + ["reasons", "explanation"]
)

DEFAULT_DAILY_LIMIT = 10


def _to_row(candidate: Profile, match: MatchScore) -> dict:
    row = {
        "profile_id": candidate.profile_id,
        "user_id": candidate.user_id,
        "score": match.score,
        "reasons": list(match.reasons),
        "explanation": generate_match_explanation(match),
    }
    row.update(match.breakdown.to_dict())
    return row


def rank_candidates(
    viewer: Profile,
    candidates: Sequence[Profile],
    scorer: Optional[CompatibilityScorer] = None,
    today: Optional[date] = None,
    n_jobs: int = 1,
    top_k: Optional[int] = None
) -> pd.DataFrame:
    """
    Score every candidate for the viewer and sort by score.

    Args:
        viewer: Profile doing the matching
        candidates: Profiles to score
        scorer: Scorer to use (defaults to standard weights)
        today: Evaluation date shared by the whole batch
        n_jobs: Number of worker threads (1 = sequential, -1 = all cores)
        top_k: If set, keep only the top_k rows (must be >= 1)

    Returns:
        DataFrame with RANKING_COLUMNS, best match first

    Raises:
        ValueError: If top_k is set and less than 1
    """
    if top_k is not None and top_k < 1:
        raise ValueError(f"top_k must be a positive integer, got {top_k}")

    scorer = scorer or CompatibilityScorer()
    # Pin the date so every candidate is aged on the same day
    today = today or date.today()

    if not candidates:
        logger.info(f"No candidates to rank for {viewer.profile_id}")
        return pd.DataFrame(columns=RANKING_COLUMNS)

    logger.info(f"Ranking {len(candidates)} candidates for {viewer.profile_id} (n_jobs={n_jobs})")

    if n_jobs == 1:
        matches = [scorer.score(viewer, candidate, today) for candidate in candidates]
    else:
        matches = Parallel(n_jobs=n_jobs, prefer="threads")(
            delayed(scorer.score)(viewer, candidate, today) for candidate in candidates
        )

    rows = [_to_row(candidate, match) for candidate, match in zip(candidates, matches)]
    ranked = (
        pd.DataFrame(rows, columns=RANKING_COLUMNS)
        .sort_values(["score", "profile_id"], ascending=[False, True], kind="mergesort")
        .reset_index(drop=True)
    )

    logger.info(
        f"Ranked {len(rows)} candidates: best={ranked['score'].iloc[0]}, "
        f"median={ranked['score'].median():.1f}"
    )

    if top_k is not None:
        ranked = ranked.head(top_k).reset_index(drop=True)
    return ranked


def is_eligible_candidate(viewer: Profile, candidate: Profile) -> bool:
    """
    Whether a candidate may be suggested to the viewer.

    Args:
        viewer: Profile doing the matching
        candidate: Profile being considered

    Returns:
        True if the candidate is active, visible, another user and of the
        opposite gender
    """
    if not candidate.is_active or not candidate.show_profile:
        return False
    if candidate.user_id == viewer.user_id:
        return False
    opposite = Gender.FEMALE if viewer.gender == Gender.MALE else Gender.MALE
    return candidate.gender == opposite


def filter_eligible(viewer: Profile, candidates: Sequence[Profile]) -> List[Profile]:
    """Keep the candidates the viewer may be shown, preserving order."""
    eligible = [c for c in candidates if is_eligible_candidate(viewer, c)]
    logger.debug(f"{len(eligible)}/{len(candidates)} candidates eligible for {viewer.profile_id}")
    return eligible


def get_daily_matches(
    viewer: Profile,
    candidates: Sequence[Profile],
    limit: int = DEFAULT_DAILY_LIMIT,
    scorer: Optional[CompatibilityScorer] = None,
    today: Optional[date] = None,
    n_jobs: int = 1
) -> pd.DataFrame:
    """
    Select the viewer's top matches for the day.

    Args:
        viewer: Profile receiving suggestions
        candidates: Candidate pool (eligibility is applied here)
        limit: Maximum number of matches to return
        scorer: Scorer to use
        today: Evaluation date
        n_jobs: Number of worker threads

    Returns:
        Ranked DataFrame with at most `limit` rows
    """
    if limit < 1:
        raise ValueError(f"limit must be a positive integer, got {limit}")

    eligible = filter_eligible(viewer, candidates)
    return rank_candidates(
        viewer,
        eligible,
        scorer=scorer,
        today=today,
        n_jobs=n_jobs,
        top_k=limit
    )
