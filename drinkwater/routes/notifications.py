# Reminder routes: next reminder preview and reminder settings.
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from drinkwater.db.stores import LogStore, ProfileStore, get_log_store, get_profile_store
from drinkwater.models.profile import NotificationSettings
from drinkwater.services.day_boundary import local_now
from drinkwater.services.intake_session import intake_coordinator
from drinkwater.services.reminders import next_reminder
from drinkwater.services.weather_service import weather_for_profile

router = APIRouter(tags=["Notifications"])

_PROFILE_MISSING = "Profile not found. Please complete onboarding first."


@router.get("/next", summary="When and what to remind next")
async def get_next_reminder(
    uid: str = Query(..., description="User id"),
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lon: Optional[float] = Query(None, ge=-180, le=180),
    profiles: ProfileStore = Depends(get_profile_store),
    logs: LogStore = Depends(get_log_store),
):
    profile = await profiles.get(uid)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_PROFILE_MISSING)

    now = local_now()
    weather = await weather_for_profile(profile.gps_enabled, lat, lon)
    snapshot = await intake_coordinator.today_snapshot(
        uid, profiles=profiles, logs=logs, weather=weather, now=now,
    )
    reminder = next_reminder(now, profile.notification_settings, snapshot.result, snapshot.total_consumed)
    if reminder is None:
        return {"enabled": False, "reminder": None}
    return {
        "enabled": True,
        "reminder": {
            "send_at":   reminder.send_at.isoformat(),
            "title":     reminder.title,
            "body":      reminder.body,
            "amount_ml": reminder.amount_ml,
        },
    }


@router.put("/settings", response_model=NotificationSettings, summary="Update reminder settings")
async def put_settings(
    body: NotificationSettings,
    uid: str = Query(..., description="User id"),
    profiles: ProfileStore = Depends(get_profile_store),
) -> NotificationSettings:
    profile = await profiles.get(uid)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_PROFILE_MISSING)
    await profiles.save(uid, profile.model_copy(update={"notification_settings": body}))
    return body
