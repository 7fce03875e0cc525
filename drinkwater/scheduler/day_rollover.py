"""
Day rollover job.

run_day_boundary_check() polls the DayBoundaryService; when the local date
has changed it finalises yesterday's history and purges old logs.

APScheduler 3.x (AsyncIOScheduler) is used so the job runs in the same
asyncio event loop as FastAPI, avoiding thread-safety issues with Motor.
"""

import logging
from datetime import datetime
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from drinkwater.core.config import settings
from drinkwater.db.stores import get_history_store, get_log_store, get_profile_store
from drinkwater.services.day_boundary import DayBoundaryService
from drinkwater.services.history_service import catch_up_rollover, roll_over_day

logger = logging.getLogger(__name__)

# Process-wide clock watcher shared by the scheduled job and startup check.
day_boundary = DayBoundaryService()


async def run_day_boundary_check(
    service: Optional[DayBoundaryService] = None,
    now: Optional[datetime] = None,
) -> int:
    """Returns the number of users whose previous day was finalised."""
    service = service or day_boundary
    event = service.check(now)
    if event is None:
        return 0
    return await roll_over_day(
        event,
        await get_profile_store(),
        await get_log_store(),
        await get_history_store(),
    )


async def run_startup_catch_up(service: Optional[DayBoundaryService] = None) -> int:
    """Finalise days that ended while the process was not running."""
    service = service or day_boundary
    return await catch_up_rollover(
        service.current_day,
        await get_profile_store(),
        await get_log_store(),
        await get_history_store(),
    )


def create_scheduler() -> AsyncIOScheduler:
    """
    Create and configure the APScheduler AsyncIOScheduler.
    Call scheduler.start() from the FastAPI lifespan context.
    """
    scheduler = AsyncIOScheduler(timezone=settings.APP_TIMEZONE)

    scheduler.add_job(
        run_day_boundary_check,
        trigger="interval",
        seconds=settings.DAY_CHECK_INTERVAL_SECONDS,
        id="day_boundary_check",
        name="Day boundary check",
        replace_existing=True,
        misfire_grace_time=60,
        max_instances=1,
    )

    return scheduler
