"""API tests for GET /weather."""

from datetime import datetime, timezone

import pytest


@pytest.mark.asyncio
async def test_every_configured_city_is_listed_even_without_data(client):
    response = await client.get("/weather")

    assert response.status_code == 200
    body = response.json()
    assert [row["city"] for row in body["data"]] == ["London", "New York", "Tokyo", "Cairo"]
    assert all(row["temperature"] is None for row in body["data"])
    assert body["lastSync"] is None


@pytest.mark.asyncio
async def test_weather_rows_and_last_sync(client, weather_store):
    observed = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    await weather_store.upsert("Tokyo", 21.5, 4.0, observed)
    await weather_store.upsert("London", 13.0, 9.5, observed)
    london = await weather_store.get("London")

    body = (await client.get("/weather")).json()

    rows = {row["city"]: row for row in body["data"]}
    assert rows["London"]["temperature"] == 13.0
    assert rows["London"]["windSpeed"] == 9.5
    assert rows["London"]["lastUpdated"].startswith("2024-05-01T12:00")
    assert rows["Cairo"]["temperature"] is None
    assert body["lastSync"].startswith(london.updated_at.isoformat()[:19])


@pytest.mark.asyncio
async def test_cities_outside_the_configured_set_are_ignored(client, weather_store):
    await weather_store.upsert("Paris", 18.0, 2.0, datetime(2024, 5, 1, tzinfo=timezone.utc))

    body = (await client.get("/weather")).json()

    assert "Paris" not in [row["city"] for row in body["data"]]
    assert body["lastSync"] is None
