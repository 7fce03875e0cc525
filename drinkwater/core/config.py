"""
Centralised application settings loaded from environment variables / .env file.
Every setting has a development default; OPENWEATHER_API_KEY left empty switches
the weather collaborator to its synthetic reading.
"""
import os

import pytz
from dotenv import load_dotenv

load_dotenv()


def _int_env(key: str, default: int) -> int:
    """Read an integer env var, falling back to `default` on blank/garbage."""
    raw = os.getenv(key, "").strip()
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


def _timezone_env(key: str, default: str = "UTC") -> str:
    name = os.getenv(key, "").strip() or default
    try:
        pytz.timezone(name)
    except pytz.UnknownTimeZoneError:
        return default
    return name


class _Settings:
    # ── Storage ───────────────────────────────────────────────────────────────
    MONGO_URI: str      = os.getenv("MONGO_URI", "mongodb://localhost:27017")
    MONGO_DB_NAME: str  = os.getenv("MONGO_DB_NAME", "drinkwater")

    # ── Weather ───────────────────────────────────────────────────────────────
    OPENWEATHER_API_KEY: str     = os.getenv("OPENWEATHER_API_KEY", "").strip()
    WEATHER_TIMEOUT_SECONDS: int = _int_env("WEATHER_TIMEOUT_SECONDS", 10)

    # ── Day boundary ──────────────────────────────────────────────────────────
    # Local calendar used to decide what "today" means for logs and history.
    APP_TIMEZONE: str               = _timezone_env("APP_TIMEZONE")
    DAY_CHECK_INTERVAL_SECONDS: int = _int_env("DAY_CHECK_INTERVAL_SECONDS", 60)

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = _Settings()
