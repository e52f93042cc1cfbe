"""Data loading module for profile snapshots."""

from .loaders import load_profiles, load_profile, profiles_to_frame

__all__ = ["load_profiles", "load_profile", "profiles_to_frame"]
