"""Shared fixtures: in-memory stores standing in for MongoDB, and an API client."""

from __future__ import annotations

import asyncio
from datetime import date, datetime, timezone
from typing import Optional

import pytest

from drinkwater.models.hydration import DailyFeedback, DailyHistoryRecord, HydrationLog
from drinkwater.models.profile import UserProfile


class InMemoryProfileStore:
    def __init__(self):
        self.profiles: dict[str, UserProfile] = {}

    async def get(self, uid: str) -> Optional[UserProfile]:
        await asyncio.sleep(0)
        return self.profiles.get(uid)

    async def save(self, uid: str, profile: UserProfile) -> None:
        await asyncio.sleep(0)
        self.profiles[uid] = profile


class InMemoryLogStore:
    def __init__(self):
        self.logs: dict[str, list[HydrationLog]] = {}

    async def append(self, uid: str, log: HydrationLog) -> None:
        await asyncio.sleep(0)
        self.logs.setdefault(uid, []).append(log)

    async def remove(self, uid: str, log_id: str) -> bool:
        await asyncio.sleep(0)
        entries = self.logs.get(uid, [])
        for i, log in enumerate(entries):
            if log.id == log_id:
                del entries[i]
                return True
        return False

    async def list_for_day(self, uid: str, day: date) -> list[HydrationLog]:
        # Yield so concurrent callers interleave like a real driver would
        await asyncio.sleep(0)
        return [log for log in self.logs.get(uid, []) if log.day == day]

    async def list_since(self, uid: str, cutoff: datetime) -> list[HydrationLog]:
        await asyncio.sleep(0)
        return [log for log in self.logs.get(uid, []) if log.timestamp > cutoff]

    async def users_with_logs_on(self, day: date) -> list[str]:
        await asyncio.sleep(0)
        return sorted(uid for uid, logs in self.logs.items() if any(log.day == day for log in logs))

    async def days_before(self, day: date) -> list[date]:
        await asyncio.sleep(0)
        return sorted({log.day for logs in self.logs.values() for log in logs if log.day < day})

    async def purge_before(self, day: date) -> int:
        await asyncio.sleep(0)
        purged = 0
        for uid, logs in self.logs.items():
            kept = [log for log in logs if log.day >= day]
            purged += len(logs) - len(kept)
            self.logs[uid] = kept
        return purged


class InMemoryHistoryStore:
    def __init__(self):
        self.records: dict[tuple[str, date], DailyHistoryRecord] = {}
        self.feedback: dict[tuple[str, date], DailyFeedback] = {}

    async def upsert_day(self, uid: str, record: DailyHistoryRecord) -> None:
        await asyncio.sleep(0)
        self.records[(uid, record.day)] = record

    async def get_day(self, uid: str, day: date) -> Optional[DailyHistoryRecord]:
        await asyncio.sleep(0)
        return self.records.get((uid, day))

    async def list_range(self, uid: str, start: date, end: date) -> list[DailyHistoryRecord]:
        await asyncio.sleep(0)
        return sorted(
            (r for (u, d), r in self.records.items() if u == uid and start <= d <= end),
            key=lambda r: r.day,
        )

    async def save_feedback(self, uid: str, feedback: DailyFeedback) -> None:
        await asyncio.sleep(0)
        self.feedback[(uid, feedback.day)] = feedback


@pytest.fixture
def profiles():
    return InMemoryProfileStore()


@pytest.fixture
def logs():
    return InMemoryLogStore()


@pytest.fixture
def history():
    return InMemoryHistoryStore()


@pytest.fixture
def noon():
    return datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def default_profile():
    """70 kg male, 25-35, no conditions: target 2135 ml."""
    return UserProfile(gender="male", age_range="25-35", weight=70, weight_unit="kg")


@pytest.fixture
def client(profiles, logs, history):
    from fastapi.testclient import TestClient

    from drinkwater.db.stores import get_history_store, get_log_store, get_profile_store
    from drinkwater.main import app

    app.dependency_overrides[get_profile_store] = lambda: profiles
    app.dependency_overrides[get_log_store] = lambda: logs
    app.dependency_overrides[get_history_store] = lambda: history
    # No lifespan: the scheduler and Mongo client are never started
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """Pin the clock zone and force synthetic weather regardless of the local .env."""
    from drinkwater.core.config import settings

    monkeypatch.setattr(settings, "APP_TIMEZONE", "UTC")
    monkeypatch.setattr(settings, "OPENWEATHER_API_KEY", "")
