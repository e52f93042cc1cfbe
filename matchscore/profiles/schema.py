"""
Profile schema for compatibility scoring.

Defines the read-only profile snapshots the scoring engine consumes.
Closed domains (gender, marital status, diet, smoking, drinking) are
enumerations; open domains (religion, community, education, profession,
locations) stay free text and are compared as stored.

Profile layout:
- Identity: profile_id, user_id
- Demographics: date_of_birth, gender, height (cm), marital_status
- Location: country, state, city
- Culture: religion, community
- Socioeconomic: education, profession
- Lifestyle: diet, smoking, drinking
- Partner preferences (nested, used when the profile is the viewer)
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Dict, Any, List
from enum import Enum


class Gender(Enum):
    """Gender options."""
    MALE = "male"
    FEMALE = "female"


class MaritalStatus(Enum):
    """Marital status options."""
    NEVER_MARRIED = "never_married"
    DIVORCED = "divorced"
    WIDOWED = "widowed"
    SEPARATED = "separated"


class Diet(Enum):
    """Diet categorical options."""
    VEGETARIAN = "vegetarian"
    NON_VEGETARIAN = "non_vegetarian"
    VEGAN = "vegan"
    OCCASIONALLY_NON_VEG = "occasionally_non_veg"


class Habit(Enum):
    """Frequency options shared by smoking and drinking."""
    NEVER = "never"
    OCCASIONALLY = "occasionally"
    REGULARLY = "regularly"


def _coerce_enum(enum_cls, value, attr: str):
    """Convert a raw string to an enum member, raising ValueError on unknown values."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = [m.value for m in enum_cls]
        raise ValueError(f"{attr} must be one of {allowed}, got {value!r}") from None


def _coerce_date(value, attr: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            raise ValueError(f"{attr} must be an ISO date (YYYY-MM-DD), got {value!r}") from None
    raise ValueError(f"{attr} must be a date or ISO string, got {type(value)}")


@dataclass
class Range:
    """
    Inclusive integer range used for age and height preferences.

    Attributes:
        min: Lower bound (inclusive)
        max: Upper bound (inclusive)
    """
    min: int
    max: int

    def __post_init__(self):
        """Validate bounds."""
        if self.min > self.max:
            raise ValueError(f"Range min must not exceed max, got {self.min} > {self.max}")

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    def to_dict(self) -> Dict[str, int]:
        return {"min": self.min, "max": self.max}


@dataclass
class PartnerPreferences:
    """
    What the viewer is looking for in a partner.

    Only age_range, height_range, marital_status, religions and locations
    feed the score. The remaining lists mirror the stored profile record so a
    snapshot round-trips without losing data.

    Attributes:
        age_range: Preferred candidate age (inclusive)
        height_range: Preferred candidate height in cm, None if unset
        marital_status: Accepted marital statuses
        religions: Accepted religions
        locations: Free-text tokens matched against candidate city/state/country
    """
    age_range: Range
    height_range: Optional[Range] = None
    marital_status: List[MaritalStatus] = field(default_factory=list)
    religions: List[str] = field(default_factory=list)
    locations: List[str] = field(default_factory=list)
    communities: List[str] = field(default_factory=list)
    education: List[str] = field(default_factory=list)
    professions: List[str] = field(default_factory=list)
    diet: List[Diet] = field(default_factory=list)
    smoking: List[Habit] = field(default_factory=list)
    drinking: List[Habit] = field(default_factory=list)

    def __post_init__(self):
        """Convert nested dicts and raw strings to typed values."""
        if isinstance(self.age_range, dict):
            self.age_range = Range(**self.age_range)
        if isinstance(self.height_range, dict):
            self.height_range = Range(**self.height_range)
        self.marital_status = [
            _coerce_enum(MaritalStatus, v, "partner_preferences.marital_status")
            for v in self.marital_status
        ]
        self.diet = [_coerce_enum(Diet, v, "partner_preferences.diet") for v in self.diet]
        self.smoking = [_coerce_enum(Habit, v, "partner_preferences.smoking") for v in self.smoking]
        self.drinking = [_coerce_enum(Habit, v, "partner_preferences.drinking") for v in self.drinking]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary with string values."""
        return {
            "age_range": self.age_range.to_dict(),
            "height_range": self.height_range.to_dict() if self.height_range else None,
            "marital_status": [m.value for m in self.marital_status],
            "religions": list(self.religions),
            "locations": list(self.locations),
            "communities": list(self.communities),
            "education": list(self.education),
            "professions": list(self.professions),
            "diet": [d.value for d in self.diet],
            "smoking": [s.value for s in self.smoking],
            "drinking": [d.value for d in self.drinking],
        }


@dataclass
class Profile:
    """
    Snapshot of one member's profile.

    Attributes:
        profile_id: Opaque profile identifier
        user_id: Owning user reference
        date_of_birth: Birth date, age is derived from it at evaluation time
        gender: Gender
        height: Height in cm
        marital_status: Current marital status
        country: Country (free text)
        state: State or region (free text)
        city: City (free text)
        religion: Religion (free text)
        community: Community within the religion (free text)
        education: Highest education label (free text)
        profession: Profession (free text)
        diet: Diet choice
        smoking: Smoking habit
        drinking: Drinking habit
        partner_preferences: Partner preferences of this member
        is_active: Whether the account is active
        show_profile: Privacy flag, hidden profiles are not suggested
    """
    profile_id: str
    user_id: str
    date_of_birth: date
    gender: Gender
    height: int
    marital_status: MaritalStatus
    country: str
    state: str
    city: str
    religion: str
    community: str
    education: str
    profession: str
    diet: Diet
    smoking: Habit
    drinking: Habit
    partner_preferences: PartnerPreferences
    first_name: Optional[str] = None
    languages: List[str] = field(default_factory=list)
    is_active: bool = True
    show_profile: bool = True

    def __post_init__(self):
        """Validate and convert raw inputs to typed values."""
        self.date_of_birth = _coerce_date(self.date_of_birth, "date_of_birth")
        self.gender = _coerce_enum(Gender, self.gender, "gender")
        self.marital_status = _coerce_enum(MaritalStatus, self.marital_status, "marital_status")
        self.diet = _coerce_enum(Diet, self.diet, "diet")
        self.smoking = _coerce_enum(Habit, self.smoking, "smoking")
        self.drinking = _coerce_enum(Habit, self.drinking, "drinking")
        if isinstance(self.partner_preferences, dict):
            self.partner_preferences = PartnerPreferences(**self.partner_preferences)

        if not isinstance(self.height, (int, float)) or self.height <= 0:
            raise ValueError(f"height must be a positive number of cm, got {self.height!r}")

    def age(self, today: Optional[date] = None) -> int:
        """
        Whole-year age on the given day.

        Args:
            today: Evaluation date (defaults to the current date)

        Returns:
            Age in completed years
        """
        today = today or date.today()
        years = today.year - self.date_of_birth.year
        if (today.month, today.day) < (self.date_of_birth.month, self.date_of_birth.day):
            years -= 1
        return years

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "profile_id": self.profile_id,
            "user_id": self.user_id,
            "first_name": self.first_name,
            "date_of_birth": self.date_of_birth.isoformat(),
            "gender": self.gender.value,
            "height": self.height,
            "marital_status": self.marital_status.value,
            "country": self.country,
            "state": self.state,
            "city": self.city,
            "religion": self.religion,
            "community": self.community,
            "education": self.education,
            "profession": self.profession,
            "diet": self.diet.value,
            "smoking": self.smoking.value,
            "drinking": self.drinking.value,
            "languages": list(self.languages),
            "is_active": self.is_active,
            "show_profile": self.show_profile,
            "partner_preferences": self.partner_preferences.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Profile":
        """Create from dictionary."""
        known = {f for f in cls.__dataclass_fields__}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown profile fields: {sorted(unknown)}")
        try:
            return cls(**data)
        except TypeError as e:
            # Missing required fields
            raise ValueError(f"Invalid profile record: {e}") from e
