"""
Compatibility Scoring Engine

This package scores how well a candidate profile fits a viewer on a
matrimony platform and explains the result in plain text.

Key Design Decisions:
- Six rule-based sub-scores (age, location, education, religion, lifestyle,
  partner preferences) combined with fixed weights
- Scores are viewer-keyed: the viewer's partner preferences apply
- Pure functions over immutable inputs, safe to run in parallel
- Reasons follow a fixed priority order and are capped at three
"""

from .scoring import calculate_compatibility_score, MatchScore
from .explanation import generate_match_explanation

__version__ = "1.0.0"

__all__ = ["calculate_compatibility_score", "generate_match_explanation", "MatchScore"]
