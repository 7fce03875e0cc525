"""
MongoDB async connection using Motor driver.
Single client instance for connection pooling.
"""
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection

from drinkwater.core.config import settings

# Module-level singleton client (created once, reused across requests)
_client: AsyncIOMotorClient | None = None


def get_client() -> AsyncIOMotorClient:
    global _client
    if _client is None:
        # tz_aware so log timestamps come back comparable with local_now()
        _client = AsyncIOMotorClient(settings.MONGO_URI, tz_aware=True)
    return _client


def close_client() -> None:
    global _client
    if _client is not None:
        _client.close()
        _client = None


def _db():
    return get_client()[settings.MONGO_DB_NAME]


async def get_profiles_collection() -> AsyncIOMotorCollection:
    """One profile document per uid."""
    collection = _db()["profiles"]
    # Idempotent: only creates the index if it doesn't exist
    await collection.create_index("uid", unique=True)
    return collection


async def get_hydration_logs_collection() -> AsyncIOMotorCollection:
    """Intake events; rollover keeps the current and previous day."""
    collection = _db()["hydration_logs"]
    await collection.create_index("log_id", unique=True)
    await collection.create_index([("uid", 1), ("day", 1)])
    await collection.create_index([("uid", 1), ("timestamp", 1)])
    return collection


async def get_daily_history_collection() -> AsyncIOMotorCollection:
    """Compound unique index: one roll-up per user per day."""
    collection = _db()["daily_history"]
    await collection.create_index([("uid", 1), ("day", 1)], unique=True)
    return collection


async def get_daily_feedback_collection() -> AsyncIOMotorCollection:
    collection = _db()["daily_feedback"]
    await collection.create_index([("uid", 1), ("day", 1)], unique=True)
    return collection
