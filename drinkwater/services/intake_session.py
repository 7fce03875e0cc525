"""
Per-user intake session.

Evaluating the over-consumption warnings and appending the log entry happen
under one asyncio.Lock per uid, so two rapid submissions cannot both pass
their checks against the same stale totals.
"""
from __future__ import annotations

import asyncio
import logging
import weakref
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from bson import ObjectId

from drinkwater.db.stores import HistoryStore, LogStore, ProfileStore
from drinkwater.models.hydration import (
    DailyHistoryRecord,
    DailyProgress,
    HydrationLog,
    HydrationResult,
    WaterWarnings,
    WeatherData,
)
from drinkwater.models.profile import UserProfile
from drinkwater.services.day_boundary import local_day, local_now
from drinkwater.services.intake_warnings import ROLLING_WINDOW, check_water_warnings, last_hour_intake
from drinkwater.services.scoring import summarize_progress
from drinkwater.services.target_service import calculate_hydration

logger = logging.getLogger(__name__)


class ProfileNotFound(LookupError):
    """No profile stored for the uid."""


@dataclass
class IntakeOutcome:
    committed: bool
    warnings: WaterWarnings
    result: HydrationResult
    total_consumed: int
    log: Optional[HydrationLog] = None


@dataclass
class DaySnapshot:
    profile: UserProfile
    logs: list[HydrationLog]
    total_consumed: int
    result: HydrationResult
    progress: DailyProgress


class IntakeCoordinator:
    def __init__(self):
        # A lock lives only while a session holds or waits on it
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = weakref.WeakValueDictionary()

    def _lock_for(self, uid: str) -> asyncio.Lock:
        lock = self._locks.get(uid)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[uid] = lock
        return lock

    @staticmethod
    async def _require_profile(uid: str, profiles: ProfileStore) -> UserProfile:
        profile = await profiles.get(uid)
        if profile is None:
            raise ProfileNotFound(uid)
        return profile

    async def add_intake(
        self,
        uid: str,
        amount: int,
        *,
        profiles: ProfileStore,
        logs: LogStore,
        history: HistoryStore,
        weather: Optional[WeatherData] = None,
        confirm: bool = False,
        now: Optional[datetime] = None,
    ) -> IntakeOutcome:
        """
        Check warnings for `amount` against today's total and the trailing hour,
        and append it unless a
        warning fired and the caller did not confirm.
        """
        now = now or local_now()
        today = local_day(now)

        async with self._lock_for(uid):
            profile = await self._require_profile(uid, profiles)
            today_logs = await logs.list_for_day(uid, today)
            total = sum(log.amount for log in today_logs)

            # The rolling hour may reach back across midnight
            recent_logs = await logs.list_since(uid, now - ROLLING_WINDOW)

            current = calculate_hydration(profile, weather, total)
            warnings = check_water_warnings(
                last_hour_intake(recent_logs, now),
                total,
                amount,
                current.daily_target,
            )

            if warnings.any and not confirm:
                logger.warning(
                    "Intake of %d ml for %s held for confirmation (hourly=%s, daily=%s)",
                    amount, uid, warnings.hourly, warnings.daily,
                )
                return IntakeOutcome(
                    committed=False,
                    warnings=warnings,
                    result=current,
                    total_consumed=total,
                )

            log = HydrationLog(id=str(ObjectId()), amount=amount, timestamp=now, day=today)
            await logs.append(uid, log)
            total += amount

            result = calculate_hydration(profile, weather, total)
            await history.upsert_day(
                uid, DailyHistoryRecord(day=today, amount=total, target=result.daily_target)
            )

        logger.info("Logged %d ml for %s (total today %d ml)", amount, uid, total)
        return IntakeOutcome(
            committed=True,
            warnings=warnings,
            result=result,
            total_consumed=total,
            log=log,
        )

    async def remove_intake(
        self,
        uid: str,
        log_id: str,
        *,
        profiles: ProfileStore,
        logs: LogStore,
        history: HistoryStore,
        weather: Optional[WeatherData] = None,
        now: Optional[datetime] = None,
    ) -> bool:
        """
        Without a weather reading the day keeps the target it already recorded,
        which may include the weather seen when the entries were logged.
        """
        now = now or local_now()
        today = local_day(now)

        async with self._lock_for(uid):
            if not await logs.remove(uid, log_id):
                return False
            profile = await profiles.get(uid)
            if profile is not None:
                total = sum(log.amount for log in await logs.list_for_day(uid, today))
                existing = await history.get_day(uid, today)
                if weather is None and existing is not None:
                    target = existing.target
                else:
                    target = calculate_hydration(profile, weather, total).daily_target
                await history.upsert_day(
                    uid, DailyHistoryRecord(day=today, amount=total, target=target)
                )
        return True

    async def today_snapshot(
        self,
        uid: str,
        *,
        profiles: ProfileStore,
        logs: LogStore,
        weather: Optional[WeatherData] = None,
        now: Optional[datetime] = None,
    ) -> DaySnapshot:
        now = now or local_now()
        profile = await self._require_profile(uid, profiles)
        today_logs = await logs.list_for_day(uid, local_day(now))
        total = sum(log.amount for log in today_logs)
        result = calculate_hydration(profile, weather, total)
        return DaySnapshot(
            profile=profile,
            logs=today_logs,
            total_consumed=total,
            result=result,
            progress=summarize_progress(total, result.daily_target),
        )


# Shared by every request in the process
intake_coordinator = IntakeCoordinator()
