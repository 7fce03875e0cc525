# Over-consumption checks run before an intake entry is committed.
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable

from drinkwater.models.hydration import HydrationLog, WaterWarnings

HOURLY_LIMIT_ML = 1000
DAILY_LIMIT_RATIO = 1.5
ROLLING_WINDOW = timedelta(hours=1)


def check_water_warnings(
    last_hour_intake: float,
    total_consumed: float,
    amount: float,
    daily_target: float,
) -> WaterWarnings:
    """
    Preview the state after adding `amount`:
    hourly: more than 1 litre within the trailing hour
    daily:  more than 150 % of today's target
    """
    return WaterWarnings(
        hourly=(last_hour_intake + amount) > HOURLY_LIMIT_ML,
        daily=(total_consumed + amount) > daily_target * DAILY_LIMIT_RATIO,
    )


def last_hour_intake(logs: Iterable[HydrationLog], now: datetime) -> int:
    """Sum of entries logged strictly after now − 1 hour."""
    cutoff = now - ROLLING_WINDOW
    return sum(log.amount for log in logs if log.timestamp > cutoff)
