# Statistics routes: weekly history and morning hydration feedback.
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, Query, status

from drinkwater.db.stores import HistoryStore, ProfileStore, get_history_store, get_profile_store
from drinkwater.models.hydration import DailyFeedback, FeedbackRequest, WeeklyStats
from drinkwater.services.day_boundary import local_now
from drinkwater.services.history_service import load_weekly_stats, record_feedback

router = APIRouter(prefix="/stats", tags=["Stats"])


@router.get("/weekly", response_model=WeeklyStats, summary="Last seven days of intake")
async def get_weekly(
    uid: str = Query(..., description="User id"),
    profiles: ProfileStore = Depends(get_profile_store),
    history: HistoryStore = Depends(get_history_store),
) -> WeeklyStats:
    profile = await profiles.get(uid)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Profile not found. Please complete onboarding first.",
        )
    return await load_weekly_stats(uid, local_now().date(), profile, history)


@router.post(
    "/feedback",
    response_model=DailyFeedback,
    status_code=status.HTTP_201_CREATED,
    summary="Rate how yesterday's hydration felt",
)
async def post_feedback(
    body: FeedbackRequest,
    uid: str = Query(..., description="User id"),
    history: HistoryStore = Depends(get_history_store),
) -> DailyFeedback:
    day = body.day or (local_now().date() - timedelta(days=1))
    return await record_feedback(uid, body.rating, day, history)
