# Daily roll-ups: day rollover, weekly statistics and morning feedback.
from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Optional

from drinkwater.db.stores import HistoryStore, LogStore, ProfileStore
from drinkwater.models.hydration import DailyFeedback, DailyHistoryRecord, WeeklyStats
from drinkwater.models.profile import UserProfile
from drinkwater.services.day_boundary import DayRolledOver
from drinkwater.services.scoring import WEEK_LENGTH, build_weekly_history, weekly_stats
from drinkwater.services.target_service import calculate_hydration

logger = logging.getLogger(__name__)


async def roll_over_day(
    event: DayRolledOver,
    profiles: ProfileStore,
    logs: LogStore,
    history: HistoryStore,
) -> int:
    """
    Finalise the previous day's history for every user who logged on it, then
    drop logs from before the previous day. The previous day stays one more day
    so the rolling-hour warning still sees entries from just before midnight.
    Returns the number of users finalised.

    A record written during the day keeps its target (it may include weather);
    otherwise the target is recomputed without weather.
    """
    finalised = 0
    for uid in await logs.users_with_logs_on(event.previous_day):
        day_logs = await logs.list_for_day(uid, event.previous_day)
        total = sum(log.amount for log in day_logs)

        existing = await history.get_day(uid, event.previous_day)
        if existing is not None:
            target = existing.target
        else:
            profile = await profiles.get(uid) or UserProfile()
            target = calculate_hydration(profile, None, total).daily_target

        await history.upsert_day(
            uid, DailyHistoryRecord(day=event.previous_day, amount=total, target=target)
        )
        finalised += 1

    purged = await logs.purge_before(event.previous_day)
    logger.info(
        "Rollover %s → %s: finalised %d users, purged %d logs",
        event.previous_day, event.current_day, finalised, purged,
    )
    return finalised


async def catch_up_rollover(
    today: date,
    profiles: ProfileStore,
    logs: LogStore,
    history: HistoryStore,
) -> int:
    """
    Roll over every stale day still holding logs (e.g. after downtime across
    midnight), oldest first so each day is finalised before it is purged.
    """
    finalised = 0
    for stale_day in await logs.days_before(today):
        event = DayRolledOver(previous_day=stale_day, current_day=stale_day + timedelta(days=1))
        finalised += await roll_over_day(event, profiles, logs, history)
    return finalised


async def load_weekly_stats(
    uid: str,
    today: date,
    profile: UserProfile,
    history: HistoryStore,
) -> WeeklyStats:
    """Last seven days; missing days count against the profile's current target."""
    start = today - timedelta(days=WEEK_LENGTH - 1)
    records = await history.list_range(uid, start, today)
    default_target = calculate_hydration(profile, None, 0).daily_target
    return weekly_stats(build_weekly_history(records, today, default_target))


async def record_feedback(
    uid: str,
    rating: int,
    day: date,
    history: HistoryStore,
) -> DailyFeedback:
    """Store the morning-survey rating alongside that day's intake and target."""
    record: Optional[DailyHistoryRecord] = await history.get_day(uid, day)
    feedback = DailyFeedback(
        day=day,
        rating=rating,
        daily_target=record.target if record else None,
        total_consumed=record.amount if record else None,
    )
    await history.save_feedback(uid, feedback)
    return feedback
