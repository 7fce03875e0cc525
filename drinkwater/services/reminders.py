"""
Reminder planning for the notification collaborator.

Produces the next reminder (time + text) from the user's settings and the
latest hydration result; delivery is up to the client.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from drinkwater.models.hydration import HydrationResult
from drinkwater.models.profile import NotificationSettings

REMINDER_TITLE = "Hydration Reminder"


@dataclass
class Reminder:
    send_at: datetime
    title: str
    body: str
    amount_ml: int


def in_quiet_hours(hour: int, prefs: NotificationSettings) -> bool:
    start, end = prefs.quiet_hours_start, prefs.quiet_hours_end
    if start > end:
        # Window wraps midnight, e.g. 22 → 7
        return hour >= start or hour < end
    return start <= hour < end


def _end_of_quiet_hours(moment: datetime, prefs: NotificationSettings) -> datetime:
    candidate = moment.replace(hour=prefs.quiet_hours_end, minute=0, second=0, microsecond=0)
    if candidate <= moment:
        candidate += timedelta(days=1)
    return candidate


def reminder_body(result: HydrationResult, consumed: int) -> str:
    remaining = max(0, result.daily_target - consumed)
    if remaining == 0:
        return f"Goal reached! Keep sipping: about {result.next_drink_amount} ml is a good next glass."
    return (
        f"Time for about {result.next_drink_amount} ml of water. "
        f"{remaining} ml left to reach today's {result.daily_target} ml goal."
    )


def next_reminder(
    now: datetime,
    prefs: NotificationSettings,
    result: HydrationResult,
    consumed: int,
) -> Optional[Reminder]:
    if not prefs.enabled:
        return None

    send_at = now + timedelta(minutes=prefs.reminder_interval)
    if in_quiet_hours(send_at.hour, prefs):
        send_at = _end_of_quiet_hours(send_at, prefs)

    return Reminder(
        send_at=send_at,
        title=REMINDER_TITLE,
        body=reminder_body(result, consumed),
        amount_ml=result.next_drink_amount,
    )
