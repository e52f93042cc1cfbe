"""
Tests for profile schema validation.
"""

from datetime import date, datetime

import pytest

from matchscore.profiles import (
    Profile,
    PartnerPreferences,
    Range,
    Gender,
    MaritalStatus,
    Diet,
    Habit,
)


class TestRange:
    """Test inclusive ranges."""

    def test_contains_inclusive(self):
        r = Range(min=25, max=32)
        assert r.contains(25)
        assert r.contains(32)
        assert not r.contains(24)
        assert not r.contains(33)

    def test_inverted_range(self):
        with pytest.raises(ValueError, match="min must not exceed max"):
            Range(min=40, max=30)


class TestPartnerPreferences:
    """Test preference coercion."""

    def test_nested_dicts_converted(self):
        prefs = PartnerPreferences(
            age_range={"min": 25, "max": 30},
            height_range={"min": 150, "max": 170},
            marital_status=["never_married", "divorced"],
            diet=["vegetarian"],
            smoking=["never"],
        )
        assert prefs.age_range == Range(25, 30)
        assert prefs.height_range == Range(150, 170)
        assert prefs.marital_status == [MaritalStatus.NEVER_MARRIED, MaritalStatus.DIVORCED]
        assert prefs.diet == [Diet.VEGETARIAN]
        assert prefs.smoking == [Habit.NEVER]

    def test_optional_height(self):
        prefs = PartnerPreferences(age_range=Range(20, 30))
        assert prefs.height_range is None
        assert prefs.locations == []

    def test_invalid_marital_status(self):
        with pytest.raises(ValueError, match="marital_status"):
            PartnerPreferences(age_range=Range(20, 30), marital_status=["engaged"])


class TestProfile:
    """Test profile construction."""

    def test_string_values_converted(self, viewer):
        assert viewer.gender is Gender.MALE
        assert viewer.marital_status is MaritalStatus.NEVER_MARRIED
        assert viewer.diet is Diet.VEGETARIAN
        assert viewer.smoking is Habit.NEVER
        assert isinstance(viewer.partner_preferences, PartnerPreferences)

    def test_iso_date_of_birth(self, make_candidate):
        profile = make_candidate(date_of_birth="1997-03-10")
        assert profile.date_of_birth == date(1997, 3, 10)

    def test_iso_datetime_of_birth(self, make_candidate):
        profile = make_candidate(date_of_birth="1997-03-10T00:00:00.000Z")
        assert profile.date_of_birth == date(1997, 3, 10)

    def test_datetime_of_birth(self, make_candidate):
        profile = make_candidate(date_of_birth=datetime(1997, 3, 10, 8, 30))
        assert profile.date_of_birth == date(1997, 3, 10)

    def test_invalid_date(self, make_candidate):
        with pytest.raises(ValueError, match="date_of_birth"):
            make_candidate(date_of_birth="10/03/1997")

    def test_invalid_diet(self, make_candidate):
        with pytest.raises(ValueError, match="diet"):
            make_candidate(diet="pescatarian")

    def test_invalid_height(self, make_candidate):
        with pytest.raises(ValueError, match="height"):
            make_candidate(height=0)

    def test_defaults(self, candidate):
        assert candidate.is_active
        assert candidate.show_profile
        assert candidate.languages == []

    def test_dict_roundtrip(self, viewer):
        assert Profile.from_dict(viewer.to_dict()) == viewer

    def test_from_dict_unknown_field(self, viewer):
        data = viewer.to_dict()
        data["horoscope"] = "leo"
        with pytest.raises(ValueError, match="Unknown profile fields"):
            Profile.from_dict(data)

    def test_from_dict_missing_field(self, viewer):
        data = viewer.to_dict()
        del data["religion"]
        with pytest.raises(ValueError, match="Invalid profile record"):
            Profile.from_dict(data)
