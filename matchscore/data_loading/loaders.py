"""
Profile loading for the scoring engine.

Profiles are read from JSON or YAML snapshots exported by the profile store.
Files hold either a list of profile records or a mapping with a "profiles"
key; a viewer file holds a single record. No scoring is done here.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Any

import pandas as pd
import yaml

from ..profiles.schema import Profile

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = {".json", ".yaml", ".yml"}


def _read_payload(filepath: str) -> Any:
    """Read a JSON or YAML file, chosen by suffix."""
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Profile file not found: {filepath}")

    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ValueError(
            f"Unsupported profile file type '{suffix}', expected one of {sorted(SUPPORTED_SUFFIXES)}"
        )

    with open(path, "r", encoding="utf-8") as f:
        if suffix == ".json":
            payload = json.load(f)
        else:
            payload = yaml.safe_load(f)

    if not payload:
        raise ValueError(f"Profile file is empty: {filepath}")
    return payload


def load_profiles(filepath: str) -> List[Profile]:
    """
    Load a list of profiles from JSON or YAML.

    Args:
        filepath: Path to the profile file

    Returns:
        List of Profile instances, in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or a record is invalid
    """
    payload = _read_payload(filepath)
    if isinstance(payload, dict):
        if "profiles" not in payload:
            raise ValueError(f"Expected a list or a 'profiles' key in {filepath}")
        payload = payload["profiles"]

    if not isinstance(payload, list):
        raise ValueError(f"Profiles must be a list, got {type(payload).__name__}")

    profiles = []
    for index, record in enumerate(payload):
        try:
            profiles.append(Profile.from_dict(record))
        except ValueError as e:
            raise ValueError(f"Invalid profile at index {index} in {filepath}: {e}") from e

    logger.info(f"Loaded {len(profiles)} profiles from {filepath}")
    return profiles


def load_profile(filepath: str) -> Profile:
    """
    Load a single profile (typically the viewer) from JSON or YAML.

    Args:
        filepath: Path to the profile file

    Returns:
        Profile instance
    """
    payload = _read_payload(filepath)
    if not isinstance(payload, dict):
        raise ValueError(f"Expected a single profile object in {filepath}")

    profile = Profile.from_dict(payload)
    logger.info(f"Loaded profile {profile.profile_id} from {filepath}")
    return profile


def profiles_to_frame(profiles: List[Profile]) -> pd.DataFrame:
    """
    Flatten profiles into a summary DataFrame (one row per profile).

    Partner preferences are left out; the frame is meant for inspection
    and joins against ranking output on profile_id.

    Args:
        profiles: Profiles to flatten

    Returns:
        DataFrame indexed by position with one column per scalar field
    """
    rows: List[Dict[str, Any]] = []
    for profile in profiles:
        row = profile.to_dict()
        row.pop("partner_preferences")
        row["languages"] = ", ".join(row["languages"])
        rows.append(row)
    return pd.DataFrame(rows)
