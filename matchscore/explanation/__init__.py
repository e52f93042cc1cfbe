"""Explanation module for rendering match scores as text."""

from .generator import generate_match_explanation, get_match_tier, MatchTier

__all__ = ["generate_match_explanation", "get_match_tier", "MatchTier"]
