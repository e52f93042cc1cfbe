"""Ranking module for scoring candidate batches."""

from .batch import (
    rank_candidates,
    get_daily_matches,
    is_eligible_candidate,
    filter_eligible,
    RANKING_COLUMNS,
)

__all__ = [
    "rank_candidates",
    "get_daily_matches",
    "is_eligible_candidate",
    "filter_eligible",
    "RANKING_COLUMNS",
]
