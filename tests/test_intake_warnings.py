from datetime import date, datetime, timedelta, timezone

from drinkwater.models.hydration import HydrationLog
from drinkwater.services.intake_warnings import check_water_warnings, last_hour_intake


def test_no_warnings_for_normal_sip():
    warnings = check_water_warnings(200, 800, 250, 2135)
    assert not warnings.hourly
    assert not warnings.daily
    assert not warnings.any


def test_hourly_limit_is_strictly_greater():
    assert not check_water_warnings(750, 750, 250, 2135).hourly
    assert check_water_warnings(750, 750, 251, 2135).hourly


def test_daily_limit_is_150_percent_of_target():
    warnings = check_water_warnings(0, 3000, 300, 2135)
    assert warnings.daily
    assert not warnings.hourly
    assert warnings.any


def test_daily_limit_at_exact_boundary():
    # 2000 × 1.5 = 3000, not exceeded
    assert not check_water_warnings(0, 2750, 250, 2000).daily


def _log(n, amount, at):
    return HydrationLog(id=str(n), amount=amount, timestamp=at, day=date(2026, 10, 19))


def test_last_hour_window_excludes_boundary():
    now = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
    logs = [
        _log(1, 300, now - timedelta(hours=1)),             # exactly one hour ago
        _log(2, 200, now - timedelta(minutes=59)),
        _log(3, 150, now - timedelta(minutes=5)),
        _log(4, 500, now - timedelta(hours=3)),
    ]
    assert last_hour_intake(logs, now) == 350


def test_last_hour_intake_empty():
    assert last_hour_intake([], datetime(2026, 10, 19, tzinfo=timezone.utc)) == 0


def test_hourly_only_scenario():
    warnings = check_water_warnings(900, 0, 200, 2000)
    assert warnings.hourly
    assert not warnings.daily
