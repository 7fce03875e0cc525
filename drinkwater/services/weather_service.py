# Weather acquisition for the environment factor, with synthetic and fallback readings.

import asyncio
import logging
from datetime import datetime
from typing import Optional

import requests

from drinkwater.core.config import settings
from drinkwater.models.hydration import WeatherData
from drinkwater.services.day_boundary import local_now
from drinkwater.services.formulas import round_half_up

logger = logging.getLogger(__name__)

OPENWEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"

# Served whenever the live lookup fails.
FALLBACK_WEATHER = WeatherData(
    temperature=25,
    humidity=60,
    altitude=100,
    uv_index=5,
    city="Unknown",
)


def _one_decimal(value: float) -> float:
    return round_half_up(value * 10) / 10


def synthetic_weather(now: Optional[datetime] = None) -> WeatherData:
    """
    Deterministic reading from season and time of day, used when no API key
    is configured. Northern-hemisphere seasons; warmest around noon.
    """
    now = now or local_now()
    hour = now.hour

    base_temp = 22 if 5 <= now.month <= 9 else 12

    if 6 <= hour < 12:
        variation = (hour - 6) / 6 * 8
    elif 12 <= hour < 18:
        variation = 8 - (hour - 12) / 6 * 4
    elif 18 <= hour < 22:
        variation = 4 - (hour - 18) / 4 * 4
    else:
        variation = -2

    return WeatherData(
        temperature=_one_decimal(base_temp + variation),
        humidity=60,
        altitude=100,
        uv_index=6.5 if 10 <= hour <= 16 else 2.0,
        city="Your Location",
    )


def fetch_openweather(lat: float, lon: float) -> WeatherData:
    """Live lookup. Raises on network, HTTP or payload errors."""
    response = requests.get(
        OPENWEATHER_URL,
        params={
            "lat": lat,
            "lon": lon,
            "units": "metric",
            "appid": settings.OPENWEATHER_API_KEY,
        },
        timeout=settings.WEATHER_TIMEOUT_SECONDS,
    )
    response.raise_for_status()
    data = response.json()
    return WeatherData(
        temperature=_one_decimal(float(data["main"]["temp"])),
        humidity=float(data["main"]["humidity"]),
        # Not provided by the current-weather endpoint
        altitude=0,
        uv_index=5,
        city=data.get("name") or "",
    )


def get_weather(lat: float, lon: float, now: Optional[datetime] = None) -> WeatherData:
    """Never raises: no key → synthetic reading, lookup failure → fallback reading."""
    if not settings.OPENWEATHER_API_KEY:
        return synthetic_weather(now)
    try:
        return fetch_openweather(lat, lon)
    except (requests.RequestException, KeyError, TypeError, ValueError) as exc:
        logger.warning("Weather lookup failed for (%.3f, %.3f), using fallback: %s", lat, lon, exc)
        return FALLBACK_WEATHER


async def weather_for_profile(
    gps_enabled: bool,
    lat: Optional[float],
    lon: Optional[float],
) -> Optional[WeatherData]:
    """Weather only feeds the calculator when GPS is enabled and coordinates were sent."""
    if not gps_enabled or lat is None or lon is None:
        return None
    # requests is blocking; keep it off the event loop
    return await asyncio.to_thread(get_weather, lat, lon)
