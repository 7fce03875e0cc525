"""
Factor resolvers for the daily hydration target.

Each resolver maps one part of the profile (or the weather) to a multiplier
around 1.0. Health and environment resolvers also return the per-rule
adjustments, in percent, so the calculator can explain the result.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Union

from drinkwater.models.hydration import WeatherData
from drinkwater.services.formulas import round_half_up


@dataclass
class FactorAdjustment:
    label: str
    value: int      # signed percent of the base amount


@dataclass
class FactorResult:
    factor: float
    adjustments: list[FactorAdjustment] = field(default_factory=list)


# ── Weight baseline (ml per kg) ──────────────────────────────────────────────

def get_weight_baseline(weight_kg: float) -> float:
    # 50 and 100 kg belong to the middle tier
    if weight_kg < 50:
        return 33
    if weight_kg <= 100:
        return 30.5
    return 28


# ── Age ──────────────────────────────────────────────────────────────────────

AGE_FACTORS: dict[str, float] = {
    "5-13":  1.20,
    "14-24": 1.10,
    "65+":   0.95,
}


def get_age_factor(age_range: str) -> float:
    return AGE_FACTORS.get(age_range, 1.0)


# ── Gender ───────────────────────────────────────────────────────────────────

MALE_FACTOR = 1.0
FEMALE_FACTOR = 0.9
NEUTRAL_FACTOR = 0.95
HRT_FULL_EFFECT_MONTHS = 24

FIXED_GENDER_FACTORS: dict[str, float] = {
    "male":                      MALE_FACTOR,
    "trans-male-transitioned":   MALE_FACTOR,
    "intersex-male":             MALE_FACTOR,
    "female":                    FEMALE_FACTOR,
    "trans-female-transitioned": FEMALE_FACTOR,
    "intersex-female":           FEMALE_FACTOR,
    "non-binary":                NEUTRAL_FACTOR,
    "other":                     NEUTRAL_FACTOR,
}

TRANSITION_DIRECTIONS: dict[str, str] = {
    "trans-male-transition":   "to_male",
    "trans-female-transition": "to_female",
}


@dataclass(frozen=True)
class FixedGender:
    tag: str


@dataclass(frozen=True)
class TransitioningGender:
    direction: str                  # "to_male" | "to_female"
    months: Optional[int] = None    # months on HRT, unvalidated


GenderStatus = Union[FixedGender, TransitioningGender]


def resolve_gender(tag: str, hrt_months: Optional[int] = None) -> GenderStatus:
    """HRT months are carried only for mid-transition tags."""
    direction = TRANSITION_DIRECTIONS.get(tag)
    if direction is None:
        return FixedGender(tag)
    return TransitioningGender(direction, hrt_months)


def gender_factor(status: GenderStatus) -> float:
    if isinstance(status, TransitioningGender):
        if status.months is None or status.months > HRT_FULL_EFFECT_MONTHS:
            return NEUTRAL_FACTOR
        progress = status.months / HRT_FULL_EFFECT_MONTHS
        if status.direction == "to_male":
            return 0.90 + 0.10 * progress
        return 1.00 - 0.10 * progress
    return FIXED_GENDER_FACTORS.get(status.tag, 1.0)


def get_gender_factor(gender: str, hrt_months: Optional[int] = None) -> float:
    return gender_factor(resolve_gender(gender, hrt_months))


# ── Health conditions ────────────────────────────────────────────────────────

# normalised key -> (display label, percent delta)
HEALTH_CONDITION_DELTAS: dict[str, tuple[str, int]] = {
    "kidney stones":    ("Kidney Stones",   30),
    "diabetes type 1":  ("Diabetes",        15),
    "diabetes type 2":  ("Diabetes",        15),
    "fever":            ("Fever",           20),
    "heart failure":    ("Heart Failure",  -30),
    "kidney failure":   ("Kidney Failure", -40),
    "uti":              ("UTI",             20),
    "pregnancy":        ("Pregnancy",       15),
    "breastfeeding":    ("Breastfeeding",   25),
    "hyperthyroidism":  ("Hyperthyroidism", 10),
    "asthma":           ("Asthma",           5),
    "liver cirrhosis":  ("Liver Cirrhosis", -15),
}

# Conditions that cap the daily target at RESTRICTED_MAX_ML.
RESTRICTED_CONDITIONS = frozenset({"heart failure", "kidney failure"})

HEALTH_FACTOR_FLOOR = 0.3


def normalise_condition(condition: str) -> str:
    return condition.strip().lower()


def get_health_factor(conditions: Iterable[str]) -> FactorResult:
    factor = 1.0
    adjustments: list[FactorAdjustment] = []
    for condition in conditions:
        entry = HEALTH_CONDITION_DELTAS.get(normalise_condition(condition))
        if entry is None:
            continue
        label, percent = entry
        factor += percent / 100
        adjustments.append(FactorAdjustment(label, percent))
    return FactorResult(max(factor, HEALTH_FACTOR_FLOOR), adjustments)


def has_restricted_condition(conditions: Iterable[str]) -> bool:
    return any(normalise_condition(c) in RESTRICTED_CONDITIONS for c in conditions)


# ── Environment ──────────────────────────────────────────────────────────────

HOT_THRESHOLD_C = 25
HEAT_PER_DEGREE = 0.03
HEAT_CAP = 0.50
HUMID_THRESHOLD_PCT = 70
HUMIDITY_BONUS = 0.10
ALTITUDE_THRESHOLD_M = 1500
ALTITUDE_BONUS = 0.15
UV_THRESHOLD = 6
UV_BONUS = 0.08


def get_environment_factor(weather: Optional[WeatherData]) -> FactorResult:
    if weather is None:
        return FactorResult(1.0)

    factor = 1.0
    adjustments: list[FactorAdjustment] = []

    if weather.temperature > HOT_THRESHOLD_C:
        heat = min((weather.temperature - HOT_THRESHOLD_C) * HEAT_PER_DEGREE, HEAT_CAP)
        factor += heat
        adjustments.append(FactorAdjustment("Temperature", round_half_up(heat * 100)))

    if weather.humidity > HUMID_THRESHOLD_PCT:
        factor += HUMIDITY_BONUS
        adjustments.append(FactorAdjustment("High Humidity", 10))

    if weather.altitude > ALTITUDE_THRESHOLD_M:
        factor += ALTITUDE_BONUS
        adjustments.append(FactorAdjustment("High Altitude", 15))

    if weather.uv_index > UV_THRESHOLD:
        factor += UV_BONUS
        adjustments.append(FactorAdjustment("High UV", 8))

    return FactorResult(factor, adjustments)
