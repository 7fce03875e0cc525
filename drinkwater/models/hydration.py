"""
Pydantic models for hydration targets, intake logs and history.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field


# ── Environment ──────────────────────────────────────────────────────────────

class WeatherData(BaseModel):
    temperature : float          # °C
    humidity    : float          # %
    altitude    : float = 0.0    # metres
    uv_index    : float = 0.0
    city        : str   = ""


# ── Calculator output ────────────────────────────────────────────────────────

class BreakdownEntry(BaseModel):
    label       : str
    value       : int            # ml, unsigned
    is_addition : bool


class HydrationResult(BaseModel):
    daily_target          : int
    base_amount           : int
    age_adjustment        : int
    gender_adjustment     : int
    health_adjustment     : int
    environment_adjustment: int
    next_drink_amount     : int
    breakdown             : list[BreakdownEntry]


class WaterWarnings(BaseModel):
    hourly : bool
    daily  : bool

    @property
    def any(self) -> bool:
        return self.hourly or self.daily


class WarningCheckRequest(BaseModel):
    last_hour_intake : int = Field(..., ge=0)
    total_consumed   : int = Field(..., ge=0)
    amount           : int = Field(..., gt=0, le=5000)
    daily_target     : int = Field(..., gt=0)


# ── Intake logs ──────────────────────────────────────────────────────────────

class HydrationLog(BaseModel):
    id        : str
    amount    : int = Field(..., gt=0)
    timestamp : datetime
    day       : date


class HydrationLogRequest(BaseModel):
    amount_ml : int             = Field(..., gt=0, le=5000, description="ml of water consumed")
    confirm   : bool            = Field(False, description="Add even if an over-consumption warning fires")
    latitude  : Optional[float] = Field(None, ge=-90, le=90)
    longitude : Optional[float] = Field(None, ge=-180, le=180)


# ── History ──────────────────────────────────────────────────────────────────

class DailyHistoryRecord(BaseModel):
    day    : date
    amount : int = 0
    target : int


class DailyFeedback(BaseModel):
    day            : date
    rating         : int = Field(..., ge=1, le=5)
    daily_target   : Optional[int] = None
    total_consumed : Optional[int] = None


class FeedbackRequest(BaseModel):
    """Morning survey: 1 = dehydrated … 5 = over-hydrated."""
    rating : int            = Field(..., ge=1, le=5)
    day    : Optional[date] = Field(None, description="Day being rated, defaults to yesterday")


class DailyProgress(BaseModel):
    percentage : int
    remaining  : int
    score      : int
    status     : str   # goal_achieved | almost_there | halfway | keep_going


class WeeklyDay(BaseModel):
    day    : date
    label  : str       # "Mon" … "Sun"
    amount : int
    target : int


class WeeklyStats(BaseModel):
    days           : list[WeeklyDay]
    average_intake : int
    goal_days      : int
    current_streak : int
