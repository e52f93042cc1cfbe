"""
Sub-score functions for profile compatibility.

Each function compares a viewer profile with a candidate profile on one
axis and returns an integer in [0, 100]:

    age          - candidate age against the viewer's preferred range
    location     - city > state > country equality cascade
    education    - distance between ordinal education levels
    religion     - religion and community equality
    lifestyle    - penalties for diet/smoking/drinking mismatches
    preferences  - share of the viewer's partner preferences the candidate meets

Location, education and religion are symmetric under swapping viewer and
candidate. Age and lifestyle are symmetric only when the viewer-keyed parts
(preferred age range, strict vegetarian penalty) agree in both directions.
"""

import logging
import math
from datetime import date
from types import MappingProxyType
from typing import Optional

from ..profiles.schema import Profile, Diet

logger = logging.getLogger(__name__)

# Ordinal education scale; professional degrees rank with masters
EDUCATION_LEVELS = MappingProxyType({
    "high_school": 1,
    "diploma": 2,
    "bachelors": 3,
    "masters": 4,
    "phd": 5,
    "professional": 4,
})

# Unmapped labels are treated as bachelors-equivalent
DEFAULT_EDUCATION_LEVEL = 3

# Fallback when the viewer has no scorable partner preferences
DEFAULT_PREFERENCE_SCORE = 50

PREFERENCE_CHECK_POINTS = 25

STRICT_DIETS = (Diet.VEGETARIAN, Diet.VEGAN)
STRICT_DIET_PENALTY = 30
DIET_PENALTY = 15
SMOKING_PENALTY = 15
DRINKING_PENALTY = 15


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up."""
    return int(math.floor(value + 0.5))


def clamp_score(value: float) -> int:
    """Clamp a score to the [0, 100] integer range."""
    return max(0, min(100, int(value)))


def age_compatibility(
    viewer: Profile,
    candidate: Profile,
    today: Optional[date] = None
) -> int:
    """
    Score the candidate's age against the viewer's preferred range.

    Inside the range the score is max(70, 100 - 2 * age_gap), so being in
    range guarantees 70. Outside it decays by 10 per year of deviation from
    the nearest bound and can reach 0.

    Args:
        viewer: Profile doing the matching
        candidate: Profile being evaluated
        today: Evaluation date for age derivation

    Returns:
        Age compatibility in [0, 100]
    """
    today = today or date.today()
    viewer_age = viewer.age(today)
    candidate_age = candidate.age(today)
    age_range = viewer.partner_preferences.age_range

    if age_range.contains(candidate_age):
        age_gap = abs(viewer_age - candidate_age)
        return clamp_score(max(70, 100 - age_gap * 2))

    deviation = min(
        abs(candidate_age - age_range.min),
        abs(candidate_age - age_range.max)
    )
    return clamp_score(max(0, 70 - deviation * 10))


def location_compatibility(viewer: Profile, candidate: Profile) -> int:
    """Most specific shared location wins: city 100, state 80, country 60, else 30."""
    if viewer.city == candidate.city:
        return 100
    if viewer.state == candidate.state:
        return 80
    if viewer.country == candidate.country:
        return 60
    return 30


def education_level(label: str) -> int:
    """
    Map a free-text education label to its ordinal level.

    Args:
        label: Education label, matched case-insensitively

    Returns:
        Level from EDUCATION_LEVELS, or DEFAULT_EDUCATION_LEVEL if unmapped
    """
    return EDUCATION_LEVELS.get(label.lower(), DEFAULT_EDUCATION_LEVEL)


def education_compatibility(viewer: Profile, candidate: Profile) -> int:
    """Score by education level difference: 0 -> 100, 1 -> 85, 2 -> 70, else >= 50."""
    level_diff = abs(education_level(viewer.education) - education_level(candidate.education))

    if level_diff == 0:
        return 100
    if level_diff == 1:
        return 85
    if level_diff == 2:
        return 70
    return max(50, 70 - level_diff * 10)


def religion_compatibility(viewer: Profile, candidate: Profile) -> int:
    """Same religion and community 100, same religion 80, otherwise 40."""
    if viewer.religion == candidate.religion:
        if viewer.community == candidate.community:
            return 100
        return 80
    # No interfaith override: accepted religions are rewarded by the preference score
    return 40


def lifestyle_compatibility(viewer: Profile, candidate: Profile) -> int:
    """
    Start from 100 and subtract a penalty per mismatching lifestyle axis.

    Diet: 30 when the viewer is vegetarian/vegan and the candidate is
    non-vegetarian, 15 for any other diet mismatch.
    Smoking and drinking: 15 each on any mismatch.

    Returns:
        Lifestyle compatibility, floored at 0
    """
    score = 100

    if viewer.diet != candidate.diet:
        if viewer.diet in STRICT_DIETS and candidate.diet == Diet.NON_VEGETARIAN:
            score -= STRICT_DIET_PENALTY
        else:
            score -= DIET_PENALTY

    if viewer.smoking != candidate.smoking:
        score -= SMOKING_PENALTY

    if viewer.drinking != candidate.drinking:
        score -= DRINKING_PENALTY

    return max(0, score)


def _location_preference_met(tokens, candidate: Profile) -> bool:
    return any(
        token in candidate.city or token in candidate.state or token in candidate.country
        for token in tokens
    )


def preference_match(viewer: Profile, candidate: Profile) -> int:
    """
    Share of the viewer's partner preferences that the candidate satisfies.

    Four checks worth 25 points each: height in range, accepted marital
    status, accepted religion, and any location token found (as a substring)
    in the candidate's city, state or country. A check only counts when the
    viewer has set that preference; with none set the score is
    DEFAULT_PREFERENCE_SCORE.

    Args:
        viewer: Profile whose preferences are applied
        candidate: Profile being evaluated

    Returns:
        round(earned / possible * 100), or DEFAULT_PREFERENCE_SCORE
    """
    prefs = viewer.partner_preferences
    earned = 0
    possible = 0

    if prefs.height_range is not None:
        possible += PREFERENCE_CHECK_POINTS
        if prefs.height_range.contains(candidate.height):
            earned += PREFERENCE_CHECK_POINTS

    if prefs.marital_status:
        possible += PREFERENCE_CHECK_POINTS
        if candidate.marital_status in prefs.marital_status:
            earned += PREFERENCE_CHECK_POINTS

    if prefs.religions:
        possible += PREFERENCE_CHECK_POINTS
        if candidate.religion in prefs.religions:
            earned += PREFERENCE_CHECK_POINTS

    if prefs.locations:
        possible += PREFERENCE_CHECK_POINTS
        if _location_preference_met(prefs.locations, candidate):
            earned += PREFERENCE_CHECK_POINTS

    if possible == 0:
        logger.debug(f"No partner preferences set for {viewer.profile_id}, using default score")
        return DEFAULT_PREFERENCE_SCORE

    return round_half_up(earned / possible * 100)
