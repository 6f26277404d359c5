"""
Open-Meteo client: fetches current temperature and wind speed for one city.

Request:
    GET {base_url}?latitude=51.5072&longitude=-0.1276&current=temperature_2m,windspeed_10m

Response (only the fields we use):
    {"current": {"time": "2024-05-01T12:00", "temperature_2m": 14.2, "windspeed_10m": 11.5}}

Open-Meteo reports `time` in GMT without an offset, so naive times are read as UTC.

Every way this can go wrong (timeout, connection error, non-2xx,
missing fields) surfaces as WeatherFetchError, which the handler treats
as a failure of that one city.
"""

from dataclasses import dataclass
from datetime import datetime, timezone

import httpx

from jobs.payload import CityTarget
from models.errors import WeatherFetchError

CURRENT_FIELDS = "temperature_2m,windspeed_10m"


@dataclass(frozen=True)
class CurrentWeather:
    temperature: float
    wind_speed: float
    observed_at: datetime


class OpenMeteoClient:

    def __init__(self, http_client: httpx.AsyncClient, base_url: str):
        # the http client carries the request timeout; see infra.resources
        self._http = http_client
        self._base_url = base_url

    async def fetch_current(self, city: CityTarget) -> CurrentWeather:
        params = {
            "latitude": city.latitude,
            "longitude": city.longitude,
            "current": CURRENT_FIELDS,
        }
        try:
            response = await self._http.get(self._base_url, params=params)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPError as e:
            raise WeatherFetchError(f"Request for {city.name} failed: {e!r}") from e
        except ValueError as e:
            raise WeatherFetchError(f"Response for {city.name} is not JSON: {e}") from e

        return _parse_current(city.name, body)


def _parse_current(city_name: str, body) -> CurrentWeather:
    try:
        current = body["current"]
        temperature = float(current["temperature_2m"])
        wind_speed = float(current["windspeed_10m"])
        observed_at = datetime.fromisoformat(str(current["time"]).replace("Z", "+00:00"))
    except (KeyError, TypeError, ValueError) as e:
        raise WeatherFetchError(f"Malformed response for {city_name}: {e!r}") from e

    if observed_at.tzinfo is None:
        observed_at = observed_at.replace(tzinfo=timezone.utc)
    return CurrentWeather(temperature=temperature, wind_speed=wind_speed, observed_at=observed_at)
