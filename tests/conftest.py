"""
Pytest configuration and shared fixtures.
"""

import json
from datetime import date
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

from matchscore.profiles import Profile

# Every test ages profiles on this fixed day
TODAY = date(2026, 10, 19)

CONFIG_PATH = Path(__file__).parent.parent / "configs" / "config.yaml"


def dob_for_age(age: int) -> date:
    """Birth date giving exactly `age` years on TODAY."""
    return date(TODAY.year - age, 1, 1)


def _base_viewer() -> Dict[str, Any]:
    return {
        "profile_id": "p-viewer",
        "user_id": "u-viewer",
        "first_name": "Arjun",
        "date_of_birth": date(1995, 6, 15),  # 31 on TODAY
        "gender": "male",
        "height": 178,
        "marital_status": "never_married",
        "country": "India",
        "state": "Maharashtra",
        "city": "Mumbai",
        "religion": "Hindu",
        "community": "Brahmin",
        "education": "masters",
        "profession": "Software Engineer",
        "diet": "vegetarian",
        "smoking": "never",
        "drinking": "never",
        "partner_preferences": {
            "age_range": {"min": 25, "max": 32},
            "height_range": {"min": 155, "max": 175},
            "marital_status": ["never_married"],
            "religions": ["Hindu"],
            "locations": ["Mumbai"],
        },
    }


def _base_candidate() -> Dict[str, Any]:
    return {
        "profile_id": "p-candidate",
        "user_id": "u-candidate",
        "first_name": "Priya",
        "date_of_birth": date(1997, 3, 10),  # 29 on TODAY
        "gender": "female",
        "height": 165,
        "marital_status": "never_married",
        "country": "India",
        "state": "Maharashtra",
        "city": "Mumbai",
        "religion": "Hindu",
        "community": "Brahmin",
        "education": "masters",
        "profession": "Software Engineer",
        "diet": "vegetarian",
        "smoking": "never",
        "drinking": "never",
        "partner_preferences": {
            "age_range": {"min": 27, "max": 35},
            "height_range": {"min": 170, "max": 190},
            "marital_status": ["never_married"],
            "religions": ["Hindu"],
            "locations": ["Maharashtra"],
        },
    }


def _build(base: Dict[str, Any], prefs: Dict[str, Any] = None, **overrides) -> Profile:
    data = dict(base)
    data.update(overrides)
    data["partner_preferences"] = {**base["partner_preferences"], **(prefs or {})}
    return Profile(**data)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def make_viewer() -> Callable[..., Profile]:
    """Build a viewer profile; keyword overrides replace fields, `prefs` patches preferences."""
    def factory(prefs: Dict[str, Any] = None, **overrides) -> Profile:
        return _build(_base_viewer(), prefs, **overrides)
    return factory


@pytest.fixture
def make_candidate() -> Callable[..., Profile]:
    """Build a candidate profile; keyword overrides replace fields, `prefs` patches preferences."""
    def factory(prefs: Dict[str, Any] = None, **overrides) -> Profile:
        return _build(_base_candidate(), prefs, **overrides)
    return factory


@pytest.fixture
def viewer(make_viewer) -> Profile:
    return make_viewer()


@pytest.fixture
def candidate(make_candidate) -> Profile:
    """Candidate that matches the viewer on every axis."""
    return make_candidate()


@pytest.fixture
def poor_candidate(make_candidate) -> Profile:
    """Candidate that misses the viewer on every axis."""
    return make_candidate(
        profile_id="p-poor",
        user_id="u-poor",
        date_of_birth=dob_for_age(40),
        height=190,
        marital_status="divorced",
        country="UK",
        state="England",
        city="London",
        religion="Christian",
        community="Catholic",
        education="high_school",
        profession="Chef",
        diet="non_vegetarian",
        smoking="regularly",
        drinking="occasionally",
    )


@pytest.fixture
def candidate_pool(make_candidate, poor_candidate):
    """Mixed pool of candidates for ranking tests."""
    return [
        make_candidate(),
        poor_candidate,
        make_candidate(profile_id="p-pune", user_id="u-pune", city="Pune"),
        make_candidate(profile_id="p-delhi", user_id="u-delhi", state="Delhi", city="New Delhi",
                       community="Agarwal"),
    ]


@pytest.fixture
def profiles_json(tmp_path, viewer, candidate_pool):
    """Viewer and candidate files on disk."""
    viewer_file = tmp_path / "viewer.json"
    viewer_file.write_text(json.dumps(viewer.to_dict()))
    candidates_file = tmp_path / "candidates.json"
    candidates_file.write_text(json.dumps([p.to_dict() for p in candidate_pool], indent=2))
    return viewer_file, candidates_file
