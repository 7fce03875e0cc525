# Profile management routes: onboarding choices, create/replace and fetch.
from fastapi import APIRouter, Depends, HTTPException, Query, status

from drinkwater.db.stores import ProfileStore, get_profile_store
from drinkwater.models.profile import ProfileResponse, ProfileUpdateRequest, UserProfile
from drinkwater.services.reference import (
    AGE_RANGE_OPTIONS,
    GENDER_OPTIONS,
    HEALTH_CONDITION_OPTIONS,
    MEDICATION_OPTIONS,
    search_medications,
)

router = APIRouter(tags=["Profile"])


@router.get("/options", summary="Choice lists for onboarding and profile editing")
def get_options():
    return {
        "genders":           GENDER_OPTIONS,
        "age_ranges":        AGE_RANGE_OPTIONS,
        "health_conditions": HEALTH_CONDITION_OPTIONS,
        "medications":       MEDICATION_OPTIONS,
    }


@router.get("/medications", summary="Medication autocomplete")
def get_medications(
    q: str = Query("", description="Search text"),
    selected: list[str] = Query([], description="Already chosen medications"),
) -> list[str]:
    return search_medications(q, selected)


@router.put(
    "/{uid}",
    response_model=ProfileResponse,
    summary="Create or replace a user profile",
)
async def put_profile(
    uid: str,
    body: ProfileUpdateRequest,
    store: ProfileStore = Depends(get_profile_store),
) -> ProfileResponse:
    """
    Saves the profile built from onboarding / profile edit.
    Reminder settings are kept from the previous profile unless sent.
    """
    existing = await store.get(uid)
    profile = body.to_profile(existing)
    await store.save(uid, profile)
    return ProfileResponse(
        status="updated" if existing else "created",
        uid=uid,
        profile=profile,
    )


@router.get("/{uid}", response_model=UserProfile, summary="Get profile by uid")
async def get_profile(
    uid: str,
    store: ProfileStore = Depends(get_profile_store),
) -> UserProfile:
    profile = await store.get(uid)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Profile not found. Please complete onboarding first.",
        )
    return profile
