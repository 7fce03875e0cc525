import pytest
from pydantic import ValidationError

from drinkwater.models.hydration import FeedbackRequest, HydrationLogRequest
from drinkwater.models.profile import NotificationSettings, ProfileUpdateRequest, UserProfile


def _request(**overrides):
    body = {"gender": "male", "age_range": "25-35", "weight": 70}
    body.update(overrides)
    return ProfileUpdateRequest(**body)


def test_enums_are_stored_as_plain_values():
    profile = _request(weight_unit="lb", weight=150).to_profile()
    assert profile.gender == "male"
    assert profile.weight_unit == "lb"


def test_unknown_gender_is_rejected_on_input():
    with pytest.raises(ValidationError):
        _request(gender="robot")


def test_stored_profile_tolerates_unknown_tags():
    assert UserProfile(gender="robot", age_range="100+").gender == "robot"


@pytest.mark.parametrize("weight, unit", [(9.9, "kg"), (301, "kg"), (21, "lb"), (661, "lb")])
def test_weight_out_of_range(weight, unit):
    with pytest.raises(ValidationError, match="Please enter a valid weight"):
        _request(weight=weight, weight_unit=unit)


@pytest.mark.parametrize("weight, unit", [(10, "kg"), (300, "kg"), (22, "lb"), (660, "lb")])
def test_weight_limits_are_inclusive(weight, unit):
    assert _request(weight=weight, weight_unit=unit).weight == weight


def test_weight_may_be_omitted():
    assert _request(weight=None).to_profile().weight is None


@pytest.mark.parametrize("months, expected", [(-3, 0), (0, 0), (12, 12), (40, 24)])
def test_hrt_months_clamped_on_input(months, expected):
    profile = _request(gender="trans-female-transition", hrt_months=months).to_profile()
    assert profile.hrt_months == expected


def test_hrt_months_dropped_for_fixed_genders():
    assert _request(gender="female", hrt_months=12).to_profile().hrt_months is None


def test_medications_accept_free_text():
    profile = _request(medications="Metformin,  Insulin ,,").to_profile()
    assert profile.medications == ["Metformin", "Insulin"]


def test_health_conditions_are_trimmed():
    profile = _request(health_conditions=[" Fever ", "", "  "]).to_profile()
    assert profile.health_conditions == ["Fever"]


def test_notification_settings_carried_over():
    previous = UserProfile(notification_settings=NotificationSettings(enabled=True, reminder_interval=30))
    profile = _request().to_profile(previous)
    assert profile.notification_settings.enabled
    assert profile.notification_settings.reminder_interval == 30


def test_notification_settings_replaced_when_sent():
    previous = UserProfile(notification_settings=NotificationSettings(enabled=True))
    profile = _request(notification_settings={"enabled": False}).to_profile(previous)
    assert not profile.notification_settings.enabled


def test_reminder_interval_minimum():
    with pytest.raises(ValidationError):
        NotificationSettings(reminder_interval=1)


@pytest.mark.parametrize("amount", [0, -100, 5001])
def test_log_request_amount_bounds(amount):
    with pytest.raises(ValidationError):
        HydrationLogRequest(amount_ml=amount)


@pytest.mark.parametrize("rating", [0, 6])
def test_feedback_rating_bounds(rating):
    with pytest.raises(ValidationError):
        FeedbackRequest(rating=rating)
