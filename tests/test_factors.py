"""Factor resolvers: weight baseline, age, gender, health and environment."""

import pytest

from drinkwater.models.hydration import WeatherData
from drinkwater.services.factors import (
    FixedGender,
    TransitioningGender,
    gender_factor,
    get_age_factor,
    get_environment_factor,
    get_gender_factor,
    get_health_factor,
    get_weight_baseline,
    has_restricted_condition,
    resolve_gender,
)


# ── Weight baseline ──────────────────────────────────────────────────────────

@pytest.mark.parametrize(
    "weight_kg, expected",
    [(10, 33), (49.99, 33), (50, 30.5), (75, 30.5), (100, 30.5), (100.01, 28), (250, 28)],
)
def test_weight_baseline_tiers(weight_kg, expected):
    assert get_weight_baseline(weight_kg) == expected


# ── Age ──────────────────────────────────────────────────────────────────────

@pytest.mark.parametrize(
    "age_range, expected",
    [("5-13", 1.2), ("14-24", 1.1), ("25-35", 1.0), ("36-50", 1.0), ("51-65", 1.0), ("65+", 0.95), ("unknown", 1.0)],
)
def test_age_factor(age_range, expected):
    assert get_age_factor(age_range) == expected


# ── Gender ───────────────────────────────────────────────────────────────────

@pytest.mark.parametrize(
    "gender, expected",
    [
        ("male", 1.0),
        ("trans-male-transitioned", 1.0),
        ("intersex-male", 1.0),
        ("female", 0.9),
        ("trans-female-transitioned", 0.9),
        ("intersex-female", 0.9),
        ("non-binary", 0.95),
        ("other", 0.95),
        ("something-else", 1.0),
    ],
)
def test_fixed_gender_factors(gender, expected):
    assert get_gender_factor(gender) == expected


def test_fixed_gender_ignores_hrt_months():
    assert resolve_gender("female", 12) == FixedGender("female")
    assert get_gender_factor("female", 12) == 0.9


def test_transition_tags_resolve_to_tagged_variant():
    assert resolve_gender("trans-male-transition", 6) == TransitioningGender("to_male", 6)
    assert resolve_gender("trans-female-transition") == TransitioningGender("to_female", None)


def test_trans_female_transition_midpoint():
    assert get_gender_factor("trans-female-transition", 12) == pytest.approx(0.95)


def test_trans_male_transition_endpoints():
    assert get_gender_factor("trans-male-transition", 0) == pytest.approx(0.90)
    assert get_gender_factor("trans-male-transition", 24) == pytest.approx(1.00)


def test_transition_without_months_falls_back():
    assert get_gender_factor("trans-male-transition") == 0.95
    assert get_gender_factor("trans-female-transition", None) == 0.95


def test_transition_beyond_24_months_falls_back():
    assert get_gender_factor("trans-male-transition", 30) == 0.95


def test_negative_months_extrapolate_without_clamping():
    # Clamping is the input layer's job; the resolver extrapolates
    assert gender_factor(TransitioningGender("to_male", -12)) == pytest.approx(0.85)


def test_transition_interpolation_is_monotonic():
    to_male = [get_gender_factor("trans-male-transition", m) for m in range(25)]
    to_female = [get_gender_factor("trans-female-transition", m) for m in range(25)]
    assert to_male == sorted(to_male)
    assert to_female == sorted(to_female, reverse=True)


# ── Health ───────────────────────────────────────────────────────────────────

def test_health_factor_no_conditions():
    result = get_health_factor([])
    assert result.factor == 1.0
    assert result.adjustments == []


def test_health_factor_is_case_insensitive_and_trims():
    result = get_health_factor(["  Kidney STONES "])
    assert result.factor == pytest.approx(1.30)
    assert [(a.label, a.value) for a in result.adjustments] == [("Kidney Stones", 30)]


def test_health_deltas_add_up():
    result = get_health_factor(["fever", "UTI", "Asthma"])
    assert result.factor == pytest.approx(1.45)
    assert [a.value for a in result.adjustments] == [20, 20, 5]


def test_both_diabetes_types_share_label():
    result = get_health_factor(["Diabetes Type 1", "diabetes type 2"])
    assert [a.label for a in result.adjustments] == ["Diabetes", "Diabetes"]
    assert result.factor == pytest.approx(1.30)


def test_unrecognised_conditions_contribute_nothing():
    result = get_health_factor(["Broken Arm", "migraine"])
    assert result.factor == 1.0
    assert result.adjustments == []


def test_health_factor_is_floored_but_adjustments_are_not():
    result = get_health_factor(["Kidney Failure", "Heart Failure", "Liver Cirrhosis"])
    assert result.factor == 0.3
    assert [a.value for a in result.adjustments] == [-40, -30, -15]


def test_health_factor_floor_holds_for_many_negatives():
    result = get_health_factor(["kidney failure"] * 10)
    assert result.factor >= 0.3


def test_restricted_conditions():
    assert has_restricted_condition(["Heart Failure"])
    assert has_restricted_condition(["asthma", "KIDNEY FAILURE"])
    assert not has_restricted_condition(["kidney stones"])


# ── Environment ──────────────────────────────────────────────────────────────

def test_environment_without_weather():
    result = get_environment_factor(None)
    assert result.factor == 1.0
    assert result.adjustments == []


def test_environment_all_rules():
    weather = WeatherData(temperature=35, humidity=75, altitude=2000, uv_index=8)
    result = get_environment_factor(weather)
    assert result.factor == pytest.approx(1.63)
    assert [(a.label, a.value) for a in result.adjustments] == [
        ("Temperature", 30),
        ("High Humidity", 10),
        ("High Altitude", 15),
        ("High UV", 8),
    ]


def test_heat_adjustment_is_capped_at_half():
    result = get_environment_factor(WeatherData(temperature=48, humidity=10))
    assert result.factor == pytest.approx(1.5)
    assert result.adjustments[0].value == 50


def test_thresholds_are_strict():
    weather = WeatherData(temperature=25, humidity=70, altitude=1500, uv_index=6)
    result = get_environment_factor(weather)
    assert result.factor == 1.0
    assert result.adjustments == []
