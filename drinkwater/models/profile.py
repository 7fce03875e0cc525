"""
Pydantic models for the hydration profile and its editable settings.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator


# ──────────────────────────────────────────────
# Enums
# ──────────────────────────────────────────────

class Gender(str, Enum):
    male = "male"
    female = "female"
    trans_male_transitioned = "trans-male-transitioned"
    trans_female_transitioned = "trans-female-transitioned"
    intersex_male = "intersex-male"
    intersex_female = "intersex-female"
    non_binary = "non-binary"
    trans_male_transition = "trans-male-transition"
    trans_female_transition = "trans-female-transition"
    other = "other"


class AgeRange(str, Enum):
    child = "5-13"
    youth = "14-24"
    adult = "25-35"
    middle = "36-50"
    senior = "51-65"
    elder = "65+"


class WeightUnit(str, Enum):
    kg = "kg"
    lb = "lb"


# Accepted body weight per unit, inclusive.
WEIGHT_LIMITS: dict[str, tuple[float, float]] = {
    "kg": (10.0, 300.0),
    "lb": (22.0, 660.0),
}

HRT_MONTHS_MAX = 24


def _normalise_medications(value) -> list[str]:
    """Medications arrive either as free text ("a, b") or as a list."""
    if value is None:
        return []
    if isinstance(value, str):
        return [m.strip() for m in value.split(",") if m.strip()]
    return [str(m).strip() for m in value if str(m).strip()]


# ──────────────────────────────────────────────
# Reminder preferences (sub-document)
# ──────────────────────────────────────────────

class NotificationSettings(BaseModel):
    enabled: bool = False
    reminder_interval: int = Field(default=60, ge=5, le=24 * 60, description="Minutes between reminders")
    quiet_hours_start: int = Field(default=22, ge=0, le=23)
    quiet_hours_end: int = Field(default=7, ge=0, le=23)


# ──────────────────────────────────────────────
# Stored profile (engine input)
# ──────────────────────────────────────────────

class UserProfile(BaseModel):
    """
    Everything the hydration engine knows about a person.

    `gender` and `age_range` stay plain strings so that profiles stored with a
    tag this build does not know still load; the engine treats unknown tags
    as neutral.
    """
    gender: str = Gender.male.value
    age_range: str = AgeRange.adult.value
    weight: Optional[float] = Field(default=70, gt=0)
    weight_unit: WeightUnit = WeightUnit.kg
    health_conditions: list[str] = Field(default_factory=list)
    # Informational only, never part of the formula.
    medications: list[str] = Field(default_factory=list)
    hrt_months: Optional[int] = None
    gps_enabled: bool = False
    notification_settings: NotificationSettings = Field(default_factory=NotificationSettings)

    model_config = {"use_enum_values": True}

    @field_validator("medications", mode="before")
    @classmethod
    def _medications(cls, value):
        return _normalise_medications(value)


# ──────────────────────────────────────────────
# Input model (request body)
# ──────────────────────────────────────────────

class ProfileUpdateRequest(BaseModel):
    gender: Gender
    age_range: AgeRange
    weight: Optional[float] = Field(default=None, gt=0)
    weight_unit: WeightUnit = WeightUnit.kg
    health_conditions: list[str] = Field(default_factory=list)
    medications: Union[str, list[str]] = Field(default_factory=list)
    hrt_months: Optional[int] = Field(default=None, description="Months on HRT, clamped to 0-24")
    gps_enabled: bool = False
    notification_settings: Optional[NotificationSettings] = None

    model_config = {"use_enum_values": True}

    @field_validator("hrt_months")
    @classmethod
    def _clamp_hrt_months(cls, value: Optional[int]) -> Optional[int]:
        if value is None:
            return None
        return max(0, min(value, HRT_MONTHS_MAX))

    @field_validator("health_conditions")
    @classmethod
    def _strip_conditions(cls, value: list[str]) -> list[str]:
        return [c.strip() for c in value if c and c.strip()]

    @model_validator(mode="after")
    def _check_weight(self) -> "ProfileUpdateRequest":
        if self.weight is not None:
            low, high = WEIGHT_LIMITS[self.weight_unit]
            if not low <= self.weight <= high:
                raise ValueError(
                    f"Please enter a valid weight ({low:g}-{high:g} {self.weight_unit})"
                )
        return self

    def to_profile(self, previous: Optional[UserProfile] = None) -> UserProfile:
        """Build the stored profile; HRT months are kept only for mid-transition tags."""
        transitioning = self.gender in (
            Gender.trans_male_transition.value,
            Gender.trans_female_transition.value,
        )
        notification_settings = self.notification_settings
        if notification_settings is None:
            notification_settings = previous.notification_settings if previous else NotificationSettings()
        return UserProfile(
            gender=self.gender,
            age_range=self.age_range,
            weight=self.weight,
            weight_unit=self.weight_unit,
            health_conditions=self.health_conditions,
            medications=_normalise_medications(self.medications),
            hrt_months=self.hrt_months if transitioning else None,
            gps_enabled=self.gps_enabled,
            notification_settings=notification_settings,
        )


class ProfileResponse(BaseModel):
    status: str          # "created" | "updated"
    uid: str
    profile: UserProfile
