"""
Local calendar handling.

DayBoundaryService turns the wall clock into discrete "day rolled over"
events. The scheduler polls it; consumers (history roll-up) react to the
event instead of comparing date strings themselves.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

import pytz

from drinkwater.core.config import settings

logger = logging.getLogger(__name__)


def _tz(tz_name: Optional[str] = None):
    try:
        return pytz.timezone(tz_name or settings.APP_TIMEZONE)
    except pytz.UnknownTimeZoneError:
        return pytz.utc


def local_now(tz_name: Optional[str] = None) -> datetime:
    """Timezone-aware current time in the application timezone."""
    return datetime.now(_tz(tz_name))


def local_day(moment: datetime, tz_name: Optional[str] = None) -> date:
    """Calendar day of `moment` in the application timezone (naive = UTC)."""
    if moment.tzinfo is None:
        moment = pytz.utc.localize(moment)
    return moment.astimezone(_tz(tz_name)).date()


@dataclass(frozen=True)
class DayRolledOver:
    previous_day: date
    current_day: date


class DayBoundaryService:
    """Remembers the current local day and reports when it changes."""

    def __init__(self, tz_name: Optional[str] = None, start: Optional[datetime] = None):
        self._tz_name = tz_name or settings.APP_TIMEZONE
        self._current_day = local_day(start or local_now(self._tz_name), self._tz_name)

    @property
    def current_day(self) -> date:
        return self._current_day

    def check(self, now: Optional[datetime] = None) -> Optional[DayRolledOver]:
        today = local_day(now or local_now(self._tz_name), self._tz_name)
        # Clock corrections backwards are ignored
        if today <= self._current_day:
            return None
        event = DayRolledOver(previous_day=self._current_day, current_day=today)
        self._current_day = today
        logger.info("Day rolled over: %s → %s", event.previous_day, event.current_day)
        return event
