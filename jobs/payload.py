"""
Queue message format.

A JobPayload is what travels through Redis from the producer to the worker.
It is serialized as JSON with camelCase wire names so other consumers of
the queue can read it:

    {
      "id": "job-8f1c...",
      "type": "fetch-weather",
      "cities": [{"name": "London", "latitude": 51.5072, "longitude": -0.1276}, ...],
      "createdAt": "2024-05-01T12:00:00.000000Z"
    }

Coordinates are NOT validated on decode. A city without coordinates is a
per-city failure handled by the worker, not a malformed message.
"""

import json
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from models.enums import JobType
from models.errors import PayloadError


@dataclass(frozen=True)
class CityTarget:
    name: str
    latitude: Optional[float]
    longitude: Optional[float]

    @property
    def has_coordinates(self) -> bool:
        return _is_number(self.latitude) and _is_number(self.longitude)

    def to_dict(self) -> dict:
        return {"name": self.name, "latitude": self.latitude, "longitude": self.longitude}


@dataclass
class JobPayload:
    id: str
    cities: list[CityTarget]
    type: str = JobType.FETCH_WEATHER.value
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_json(self) -> str:
        return json.dumps({
            "id": self.id,
            "type": self.type,
            "cities": [city.to_dict() for city in self.cities],
            "createdAt": _format_timestamp(self.created_at),
        })

    @classmethod
    def from_json(cls, raw: str | bytes) -> "JobPayload":
        """Decode a queue message. Raises PayloadError if it isn't a job."""
        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as e:
            raise PayloadError(f"Undecodable payload: {e}") from e

        if not isinstance(data, dict):
            raise PayloadError(f"Payload must be an object, got {type(data).__name__}")

        job_id = data.get("id")
        if not isinstance(job_id, str) or not job_id:
            raise PayloadError("Payload is missing a job id")

        raw_cities = data.get("cities")
        if not isinstance(raw_cities, list):
            raise PayloadError(f"Job {job_id} payload has no city list")

        cities = []
        for entry in raw_cities:
            if not isinstance(entry, dict) or not entry.get("name"):
                raise PayloadError(f"Job {job_id} has an unnamed city entry: {entry!r}")
            name = str(entry["name"])
            if any(city.name == name for city in cities):
                raise PayloadError(f"Job {job_id} lists {name} more than once")
            cities.append(CityTarget(
                name=name,
                latitude=entry.get("latitude"),
                longitude=entry.get("longitude"),
            ))

        return cls(
            id=job_id,
            type=data.get("type") or JobType.FETCH_WEATHER.value,
            cities=cities,
            created_at=_parse_timestamp(data.get("createdAt")),
        )


def new_job_id() -> str:
    return f"job-{uuid.uuid4()}"


def _is_number(value) -> bool:
    # bool is an int subclass; True is not a latitude
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _parse_timestamp(value) -> datetime:
    if not value:
        return datetime.now(timezone.utc)
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError as e:
        raise PayloadError(f"Invalid createdAt timestamp: {value!r}") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
