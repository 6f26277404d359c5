"""Pydantic schemas for GET /weather."""

from datetime import datetime
from typing import Optional

from api.schemas.job import ApiModel


class CityWeather(ApiModel):
    city: str
    temperature: Optional[float] = None      # None until the city is fetched once
    wind_speed: Optional[float] = None
    last_updated: Optional[datetime] = None  # provider observation time


class WeatherResponse(ApiModel):
    success: bool = True
    data: list[CityWeather]
    last_sync: Optional[datetime] = None     # latest local write across all cities
