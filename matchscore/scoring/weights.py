"""
Weighted aggregation of compatibility sub-scores.

The final score is a fixed-weight sum of the six sub-scores:

    score = 0.15 * age + 0.20 * location + 0.15 * education
          + 0.25 * religion + 0.10 * lifestyle + 0.15 * preferences

rounded to the nearest integer and clamped to [0, 100]. The clamp cannot
change a result computed from in-range sub-scores, but it is part of the
output contract and is always applied.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Dict, Any
import json

logger = logging.getLogger(__name__)

SUBSCORE_NAMES = ("age", "location", "education", "religion", "lifestyle", "preferences")


@dataclass(frozen=True)
class ScoreWeights:
    """
    Weights applied to each sub-score.

    Attributes:
        age: Weight for age compatibility
        location: Weight for location compatibility
        education: Weight for education compatibility
        religion: Weight for religion compatibility
        lifestyle: Weight for lifestyle compatibility
        preferences: Weight for partner preference match
    """
    age: float = 0.15
    location: float = 0.20
    education: float = 0.15
    religion: float = 0.25
    lifestyle: float = 0.10
    preferences: float = 0.15

    def validate(self) -> None:
        """Validate weights are non-negative and sum to 1."""
        for name in SUBSCORE_NAMES:
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"Weight '{name}' must be non-negative, got {value}")
        total = self.total()
        if abs(total - 1.0) > 0.01:
            raise ValueError(f"Weights must sum to 1, got {total:.4f}")

    def total(self) -> float:
        return sum(getattr(self, name) for name in SUBSCORE_NAMES)

    def weighted_sum(self, breakdown: Dict[str, int]) -> float:
        """
        Apply weights to a sub-score mapping.

        Args:
            breakdown: Mapping with one integer per sub-score name

        Returns:
            Unrounded weighted sum
        """
        return sum(breakdown[name] * getattr(self, name) for name in SUBSCORE_NAMES)

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ScoreWeights":
        """Create from dictionary, rejecting unknown sub-score names."""
        unknown = set(d) - set(SUBSCORE_NAMES)
        if unknown:
            raise ValueError(f"Unknown sub-score weights: {sorted(unknown)}")
        return cls(**{k: float(v) for k, v in d.items()})

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "ScoreWeights":
        """Create from main config dictionary (scoring.weights section)."""
        weights_config = (config.get("scoring") or {}).get("weights") or {}
        return cls.from_dict(weights_config)

    def save(self, filepath: str) -> None:
        """Save to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved score weights to {filepath}")

    @classmethod
    def load(cls, filepath: str) -> "ScoreWeights":
        """Load from JSON file."""
        with open(filepath, "r") as f:
            d = json.load(f)
        return cls.from_dict(d)


DEFAULT_WEIGHTS = ScoreWeights()
