"""Profile schema consumed by the scoring engine."""

from .schema import (
    Profile,
    PartnerPreferences,
    Range,
    Gender,
    MaritalStatus,
    Diet,
    Habit,
)

__all__ = [
    "Profile",
    "PartnerPreferences",
    "Range",
    "Gender",
    "MaritalStatus",
    "Diet",
    "Habit",
]
