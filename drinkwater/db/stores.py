"""
Repository interfaces for profiles, intake logs and daily history, with their
MongoDB implementations.

Services depend on the Protocols only; routes receive the Mongo-backed stores
through FastAPI dependencies (and tests swap in in-memory ones).
"""
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional, Protocol

from motor.motor_asyncio import AsyncIOMotorCollection

from drinkwater.db.mongo import (
    get_daily_feedback_collection,
    get_daily_history_collection,
    get_hydration_logs_collection,
    get_profiles_collection,
)
from drinkwater.models.hydration import DailyFeedback, DailyHistoryRecord, HydrationLog
from drinkwater.models.profile import UserProfile


# ─────────────────────────────────────────────────────────────────────────────
# Interfaces
# ─────────────────────────────────────────────────────────────────────────────

class ProfileStore(Protocol):
    async def get(self, uid: str) -> Optional[UserProfile]: ...

    async def save(self, uid: str, profile: UserProfile) -> None: ...


class LogStore(Protocol):
    async def append(self, uid: str, log: HydrationLog) -> None: ...

    async def remove(self, uid: str, log_id: str) -> bool: ...

    async def list_for_day(self, uid: str, day: date) -> list[HydrationLog]: ...

    async def list_since(self, uid: str, cutoff: datetime) -> list[HydrationLog]: ...

    async def users_with_logs_on(self, day: date) -> list[str]: ...

    async def days_before(self, day: date) -> list[date]: ...

    async def purge_before(self, day: date) -> int: ...


class HistoryStore(Protocol):
    async def upsert_day(self, uid: str, record: DailyHistoryRecord) -> None: ...

    async def get_day(self, uid: str, day: date) -> Optional[DailyHistoryRecord]: ...

    async def list_range(self, uid: str, start: date, end: date) -> list[DailyHistoryRecord]: ...

    async def save_feedback(self, uid: str, feedback: DailyFeedback) -> None: ...


# ─────────────────────────────────────────────────────────────────────────────
# MongoDB implementations
# ─────────────────────────────────────────────────────────────────────────────

class MongoProfileStore:
    def __init__(self, collection: AsyncIOMotorCollection):
        self._col = collection

    async def get(self, uid: str) -> Optional[UserProfile]:
        doc = await self._col.find_one({"uid": uid}, {"_id": 0, "uid": 0, "updated_at": 0})
        if not doc:
            return None
        return UserProfile(**doc)

    async def save(self, uid: str, profile: UserProfile) -> None:
        await self._col.update_one(
            {"uid": uid},
            {
                "$set":         {**profile.model_dump(mode="json"), "updated_at": datetime.now(timezone.utc)},
                "$setOnInsert": {"uid": uid},
            },
            upsert=True,
        )


class MongoLogStore:
    def __init__(self, collection: AsyncIOMotorCollection):
        self._col = collection

    @staticmethod
    def _from_doc(doc: dict) -> HydrationLog:
        return HydrationLog(
            id=doc["log_id"],
            amount=doc["amount"],
            timestamp=doc["timestamp"],
            day=date.fromisoformat(doc["day"]),
        )

    async def append(self, uid: str, log: HydrationLog) -> None:
        await self._col.insert_one({
            "uid":       uid,
            "log_id":    log.id,
            "amount":    log.amount,
            "timestamp": log.timestamp,
            "day":       log.day.isoformat(),
        })

    async def remove(self, uid: str, log_id: str) -> bool:
        result = await self._col.delete_one({"uid": uid, "log_id": log_id})
        return result.deleted_count == 1

    async def list_for_day(self, uid: str, day: date) -> list[HydrationLog]:
        cursor = self._col.find(
            {"uid": uid, "day": day.isoformat()},
            {"_id": 0},
        ).sort("log_id", 1)
        return [self._from_doc(doc) for doc in await cursor.to_list(length=1000)]

    async def list_since(self, uid: str, cutoff: datetime) -> list[HydrationLog]:
        cursor = self._col.find(
            {"uid": uid, "timestamp": {"$gt": cutoff}},
            {"_id": 0},
        ).sort("timestamp", 1)
        return [self._from_doc(doc) for doc in await cursor.to_list(length=1000)]

    async def users_with_logs_on(self, day: date) -> list[str]:
        return sorted(await self._col.distinct("uid", {"day": day.isoformat()}))

    async def days_before(self, day: date) -> list[date]:
        days = await self._col.distinct("day", {"day": {"$lt": day.isoformat()}})
        return sorted(date.fromisoformat(d) for d in days)

    async def purge_before(self, day: date) -> int:
        # ISO dates sort lexicographically
        result = await self._col.delete_many({"day": {"$lt": day.isoformat()}})
        return result.deleted_count


class MongoHistoryStore:
    def __init__(
        self,
        history: AsyncIOMotorCollection,
        feedback: AsyncIOMotorCollection,
    ):
        self._history = history
        self._feedback = feedback

    @staticmethod
    def _from_doc(doc: dict) -> DailyHistoryRecord:
        return DailyHistoryRecord(
            day=date.fromisoformat(doc["day"]),
            amount=doc.get("amount", 0),
            target=doc["target"],
        )

    async def upsert_day(self, uid: str, record: DailyHistoryRecord) -> None:
        await self._history.update_one(
            {"uid": uid, "day": record.day.isoformat()},
            {
                "$set": {
                    "amount":     record.amount,
                    "target":     record.target,
                    "updated_at": datetime.now(timezone.utc),
                },
                "$setOnInsert": {"uid": uid, "day": record.day.isoformat()},
            },
            upsert=True,
        )

    async def get_day(self, uid: str, day: date) -> Optional[DailyHistoryRecord]:
        doc = await self._history.find_one({"uid": uid, "day": day.isoformat()}, {"_id": 0})
        return self._from_doc(doc) if doc else None

    async def list_range(self, uid: str, start: date, end: date) -> list[DailyHistoryRecord]:
        cursor = self._history.find(
            {"uid": uid, "day": {"$gte": start.isoformat(), "$lte": end.isoformat()}},
            {"_id": 0},
        ).sort("day", 1)
        return [self._from_doc(doc) for doc in await cursor.to_list(length=400)]

    async def save_feedback(self, uid: str, feedback: DailyFeedback) -> None:
        await self._feedback.update_one(
            {"uid": uid, "day": feedback.day.isoformat()},
            {
                "$set": {
                    "rating":         feedback.rating,
                    "daily_target":   feedback.daily_target,
                    "total_consumed": feedback.total_consumed,
                    "created_at":     datetime.now(timezone.utc),
                },
                "$setOnInsert": {"uid": uid, "day": feedback.day.isoformat()},
            },
            upsert=True,
        )


# ─────────────────────────────────────────────────────────────────────────────
# FastAPI dependencies
# ─────────────────────────────────────────────────────────────────────────────

async def get_profile_store() -> ProfileStore:
    return MongoProfileStore(await get_profiles_collection())


async def get_log_store() -> LogStore:
    return MongoLogStore(await get_hydration_logs_collection())


async def get_history_store() -> HistoryStore:
    return MongoHistoryStore(
        await get_daily_history_collection(),
        await get_daily_feedback_collection(),
    )
