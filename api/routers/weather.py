"""
GET /weather: the latest reading for every configured city.

Always returns one entry per city in STANDARD_CITIES, in that order.
A city the worker has never stored yet comes back as a placeholder
with null values instead of being left out.
"""

import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_weather_store
from api.responses import error_response
from api.schemas.weather import CityWeather, WeatherResponse
from config.cities import CITY_NAMES
from stores.weather import WeatherStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["weather"])


@router.get("/weather", response_model=WeatherResponse)
async def get_weather(
    weather: WeatherStore = Depends(get_weather_store),
):
    try:
        rows = await weather.for_cities(CITY_NAMES)
        last_sync = await weather.last_sync(CITY_NAMES)
    except Exception as e:
        logger.error(f"Error fetching weather data: {e}")
        return error_response(500, "Failed to fetch weather data", e)

    data = []
    for name in CITY_NAMES:
        row = rows.get(name)
        if row is None:
            data.append(CityWeather(city=name))
        else:
            data.append(CityWeather(
                city=name,
                temperature=row.temperature,
                wind_speed=row.wind_speed,
                last_updated=row.observed_at,
            ))

    return WeatherResponse(data=data, last_sync=last_sync)
