# Hydration routes: daily target, warning preview, intake logging.
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from drinkwater.db.stores import (
    HistoryStore,
    LogStore,
    ProfileStore,
    get_history_store,
    get_log_store,
    get_profile_store,
)
from drinkwater.models.hydration import (
    HydrationLogRequest,
    HydrationResult,
    WarningCheckRequest,
    WaterWarnings,
)
from drinkwater.models.profile import UserProfile
from drinkwater.services.intake_session import ProfileNotFound, intake_coordinator
from drinkwater.services.intake_warnings import check_water_warnings
from drinkwater.services.target_service import calculate_hydration
from drinkwater.services.weather_service import weather_for_profile

router = APIRouter(prefix="/hydration", tags=["Hydration"])

_PROFILE_MISSING = "Profile not found. Please complete onboarding first."


async def _load_profile(uid: str, store: ProfileStore) -> UserProfile:
    profile = await store.get(uid)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_PROFILE_MISSING)
    return profile


@router.get("/target", response_model=HydrationResult, summary="Compute today's hydration target")
async def get_target(
    uid: str = Query(..., description="User id"),
    consumed: int = Query(0, ge=0, description="ml already consumed today"),
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lon: Optional[float] = Query(None, ge=-180, le=180),
    profiles: ProfileStore = Depends(get_profile_store),
) -> HydrationResult:
    profile = await _load_profile(uid, profiles)
    weather = await weather_for_profile(profile.gps_enabled, lat, lon)
    return calculate_hydration(profile, weather, consumed)


@router.post("/warnings", response_model=WaterWarnings, summary="Preview over-consumption warnings")
def preview_warnings(body: WarningCheckRequest) -> WaterWarnings:
    return check_water_warnings(
        body.last_hour_intake,
        body.total_consumed,
        body.amount,
        body.daily_target,
    )


@router.post("/log", status_code=status.HTTP_201_CREATED, summary="Log a hydration entry")
async def log_intake(
    body: HydrationLogRequest,
    uid: str = Query(..., description="User id"),
    profiles: ProfileStore = Depends(get_profile_store),
    logs: LogStore = Depends(get_log_store),
    history: HistoryStore = Depends(get_history_store),
):
    """
    Adds the entry unless it would trip the hourly (>1 l in 60 min) or daily
    (>150 % of target) warning; in that case answers 409 and the client
    resubmits with confirm=true.
    """
    profile = await _load_profile(uid, profiles)
    weather = await weather_for_profile(profile.gps_enabled, body.latitude, body.longitude)

    try:
        outcome = await intake_coordinator.add_intake(
            uid,
            body.amount_ml,
            profiles=profiles,
            logs=logs,
            history=history,
            weather=weather,
            confirm=body.confirm,
        )
    except ProfileNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_PROFILE_MISSING)

    if not outcome.committed:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "message":        "Intake needs confirmation",
                "warnings":       outcome.warnings.model_dump(),
                "total_consumed": outcome.total_consumed,
                "daily_target":   outcome.result.daily_target,
            },
        )

    return {
        "status":         "ok",
        "entry":          outcome.log,
        "warnings":       outcome.warnings,
        "total_consumed": outcome.total_consumed,
        "result":         outcome.result,
    }


@router.delete("/log/{log_id}", summary="Remove a hydration entry")
async def delete_intake(
    log_id: str,
    uid: str = Query(..., description="User id"),
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lon: Optional[float] = Query(None, ge=-180, le=180),
    profiles: ProfileStore = Depends(get_profile_store),
    logs: LogStore = Depends(get_log_store),
    history: HistoryStore = Depends(get_history_store),
):
    profile = await profiles.get(uid)
    weather = await weather_for_profile(profile.gps_enabled, lat, lon) if profile else None
    removed = await intake_coordinator.remove_intake(
        uid, log_id, profiles=profiles, logs=logs, history=history, weather=weather,
    )
    if not removed:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Log entry not found")
    return {"status": "ok", "removed": log_id}


@router.get("/today", summary="Today's entries, target and progress")
async def get_today(
    uid: str = Query(..., description="User id"),
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lon: Optional[float] = Query(None, ge=-180, le=180),
    profiles: ProfileStore = Depends(get_profile_store),
    logs: LogStore = Depends(get_log_store),
):
    profile = await _load_profile(uid, profiles)
    weather = await weather_for_profile(profile.gps_enabled, lat, lon)
    snapshot = await intake_coordinator.today_snapshot(
        uid, profiles=profiles, logs=logs, weather=weather,
    )
    return {
        "entries":        snapshot.logs,
        "total_consumed": snapshot.total_consumed,
        "result":         snapshot.result,
        "progress":       snapshot.progress,
        "weather":        weather,
    }
