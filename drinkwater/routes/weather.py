# Weather route: the reading the environment factor would use.
import asyncio

from fastapi import APIRouter, Query

from drinkwater.models.hydration import WeatherData
from drinkwater.services.weather_service import get_weather

router = APIRouter(tags=["Weather"])


@router.get("/weather", response_model=WeatherData, summary="Current weather for coordinates")
async def read_weather(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
) -> WeatherData:
    """Synthetic reading without an API key; fallback reading if the lookup fails."""
    return await asyncio.to_thread(get_weather, lat, lon)
