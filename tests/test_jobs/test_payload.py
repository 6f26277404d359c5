"""Tests for the queue message format."""

import json
from datetime import datetime, timezone

import pytest

from config.cities import STANDARD_CITIES
from jobs.payload import CityTarget, JobPayload, new_job_id
from models.errors import PayloadError


def test_wire_format_uses_camel_case_fields():
    payload = JobPayload(
        id="job-1",
        cities=[CityTarget("London", 51.5072, -0.1276)],
        created_at=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
    )

    data = json.loads(payload.to_json())

    assert data == {
        "id": "job-1",
        "type": "fetch-weather",
        "cities": [{"name": "London", "latitude": 51.5072, "longitude": -0.1276}],
        "createdAt": "2024-05-01T12:00:00Z",
    }


def test_decodes_message_written_by_another_producer():
    raw = json.dumps({
        "id": "job-abc",
        "type": "fetch-weather",
        "cities": [{"name": "Tokyo", "latitude": 35.6762, "longitude": 139.6503}],
        "createdAt": "2024-05-01T12:00:00.000Z",
    })

    payload = JobPayload.from_json(raw)

    assert payload.id == "job-abc"
    assert payload.cities == [CityTarget("Tokyo", 35.6762, 139.6503)]
    assert payload.created_at == datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def test_city_without_coordinates_still_decodes():
    """Missing coordinates are a per-city failure, not a malformed message."""
    payload = JobPayload.from_json(json.dumps({
        "id": "job-1",
        "cities": [{"name": "Atlantis"}],
    }))

    assert payload.cities[0].latitude is None
    assert not payload.cities[0].has_coordinates


def test_zero_is_a_valid_coordinate():
    assert CityTarget("Null Island", 0.0, 0.0).has_coordinates


@pytest.mark.parametrize("raw", [
    "not json at all",
    "[1, 2, 3]",
    json.dumps({"cities": []}),
    json.dumps({"id": "job-1"}),
    json.dumps({"id": "job-1", "cities": [{"latitude": 1.0}]}),
    json.dumps({"id": "job-1", "cities": [], "createdAt": "yesterday"}),
])
def test_malformed_messages_raise_payload_error(raw):
    with pytest.raises(PayloadError):
        JobPayload.from_json(raw)


def test_job_ids_are_prefixed_and_unique():
    ids = {new_job_id() for _ in range(1000)}
    assert len(ids) == 1000
    assert all(job_id.startswith("job-") for job_id in ids)


def test_standard_cities_have_coordinates():
    assert [c.name for c in STANDARD_CITIES] == ["London", "New York", "Tokyo", "Cairo"]
    assert all(c.has_coordinates for c in STANDARD_CITIES)


def test_repeated_city_name_raises_payload_error():
    raw = json.dumps({
        "id": "job-1",
        "cities": [
            {"name": "London", "latitude": 51.5, "longitude": -0.13},
            {"name": "London", "latitude": 51.5, "longitude": -0.13},
        ],
    })
    with pytest.raises(PayloadError, match="more than once"):
        JobPayload.from_json(raw)
