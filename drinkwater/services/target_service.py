"""
Daily hydration target calculation.
Composes the factor resolvers into one result. Pure: no I/O, no clock,
no state. Called on every profile edit, weather refresh and intake change.
"""
from __future__ import annotations

from typing import Optional

from drinkwater.models.hydration import BreakdownEntry, HydrationResult, WeatherData
from drinkwater.models.profile import UserProfile
from drinkwater.services.factors import (
    get_age_factor,
    get_environment_factor,
    get_gender_factor,
    get_health_factor,
    get_weight_baseline,
    has_restricted_condition,
)
from drinkwater.services.formulas import round_half_up, to_kg

# ── Defaults ─────────────────────────────────────────────────────────────────
DEFAULT_WEIGHT_KG = 70

# ── Safety clamps (ml / day) ─────────────────────────────────────────────────
MIN_DAILY_ML = 1500
MAX_ML_PER_KG = 100
ABSOLUTE_MAX_ML = 24000
RESTRICTED_MAX_ML = 2000   # heart / kidney failure

# ── Next-drink suggestion ────────────────────────────────────────────────────
# 30 % of what is left, never below 200 ml and never above 500 ml, even once
# the target is met.
NEXT_DRINK_SHARE = 0.3
NEXT_DRINK_MIN_ML = 200
NEXT_DRINK_MAX_ML = 500


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


def _entry(label: str, amount: float) -> Optional[BreakdownEntry]:
    value = abs(round_half_up(amount))
    if value == 0:
        return None
    return BreakdownEntry(label=label, value=value, is_addition=amount > 0)


def calculate_hydration(
    profile: UserProfile,
    weather: Optional[WeatherData] = None,
    consumed: float = 0,
) -> HydrationResult:
    """
    Pure function – identical inputs always give an identical result.

    target = weight_kg × baseline × age × gender × health × environment,
    clamped to [1500, min(weight_kg × 100, 24000)] (2000 ml ceiling for
    heart or kidney failure).
    """
    weight_kg = to_kg(profile.weight, profile.weight_unit) if profile.weight else DEFAULT_WEIGHT_KG

    base_amount = weight_kg * get_weight_baseline(weight_kg)

    age_factor = get_age_factor(profile.age_range)
    gender_factor = get_gender_factor(profile.gender, profile.hrt_months)
    health = get_health_factor(profile.health_conditions)
    environment = get_environment_factor(weather)

    age_adjustment = base_amount * (age_factor - 1)
    gender_adjustment = base_amount * (gender_factor - 1)
    health_adjustment = base_amount * (health.factor - 1)
    environment_adjustment = base_amount * (environment.factor - 1)

    # Factors compose multiplicatively
    daily_target = base_amount * age_factor * gender_factor * health.factor * environment.factor

    upper = min(weight_kg * MAX_ML_PER_KG, ABSOLUTE_MAX_ML)
    if has_restricted_condition(profile.health_conditions):
        upper = RESTRICTED_MAX_ML
    daily_target = _clamp(daily_target, MIN_DAILY_ML, upper)

    deficit = daily_target - consumed
    next_drink = _clamp(deficit * NEXT_DRINK_SHARE, NEXT_DRINK_MIN_ML, NEXT_DRINK_MAX_ML)

    # ── Breakdown ────────────────────────────────────────────────────────────
    breakdown = [
        BreakdownEntry(label="Base (weight)", value=round_half_up(base_amount), is_addition=True),
    ]
    candidates = [
        _entry(f"Age ({profile.age_range})", age_adjustment),
        _entry("Gender adjustment", gender_adjustment),
    ]
    for adj in health.adjustments + environment.adjustments:
        candidates.append(_entry(adj.label, base_amount * adj.value / 100))
    breakdown.extend(entry for entry in candidates if entry is not None)

    return HydrationResult(
        daily_target=round_half_up(daily_target),
        base_amount=round_half_up(base_amount),
        age_adjustment=round_half_up(age_adjustment),
        gender_adjustment=round_half_up(gender_adjustment),
        health_adjustment=round_half_up(health_adjustment),
        environment_adjustment=round_half_up(environment_adjustment),
        next_drink_amount=round_half_up(next_drink),
        breakdown=breakdown,
    )
