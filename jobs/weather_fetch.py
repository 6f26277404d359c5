"""
The fetch-weather job.

For each city in the payload, in order:
    1. Check it has coordinates           → if not, the city fails
    2. Ask Open-Meteo for current weather → on any error, the city fails
    3. Upsert the observation row         → on any error, the city fails

A failed city never stops the remaining ones. The outcome map returned
to the executor says which cities made it.
"""

import logging

from jobs.base import AbstractJobHandler, CITY_OK
from jobs.payload import CityTarget, JobPayload
from jobs.weather_client import OpenMeteoClient
from models.enums import JobType
from models.errors import WeatherFetchError
from stores.weather import WeatherStore

logger = logging.getLogger(__name__)


class WeatherFetchHandler(AbstractJobHandler):

    def __init__(self, client: OpenMeteoClient, weather_store: WeatherStore):
        self._client = client
        self._weather_store = weather_store

    async def run(self, payload: JobPayload) -> dict[str, str]:
        outcomes: dict[str, str] = {}
        for city in payload.cities:
            try:
                await self._refresh_city(city)
                # a repeated city never turns an earlier failure back into ok
                outcomes.setdefault(city.name, CITY_OK)
                logger.info(f"Job {payload.id}: stored weather for {city.name}")
            except Exception as e:
                outcomes[city.name] = str(e) or type(e).__name__
                logger.warning(f"Job {payload.id}: {city.name} failed: {e}")
        return outcomes

    async def _refresh_city(self, city: CityTarget) -> None:
        if not city.has_coordinates:
            raise WeatherFetchError(f"{city.name} has no coordinates")

        current = await self._client.fetch_current(city)
        await self._weather_store.upsert(
            city=city.name,
            temperature=current.temperature,
            wind_speed=current.wind_speed,
            observed_at=current.observed_at,
        )

    @property
    def job_type(self) -> str:
        return JobType.FETCH_WEATHER.value
