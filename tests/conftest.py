"""
Shared test fixtures.

These replace real infrastructure with lightweight local alternatives:
- PostgreSQL → SQLite file in a temp dir (via aiosqlite). A file rather than
  :memory: because every store call opens its own session/connection,
  and each :memory: connection would see an empty database
- Redis → fakeredis (pure Python Redis mock, supports BLMOVE)
- Open-Meteo → httpx.MockTransport serving canned responses
- HTTP server → httpx.AsyncClient with ASGI transport (no network)

This means tests run without Docker and each test gets a fresh database.
"""

from datetime import datetime

import httpx
import pytest
import pytest_asyncio
from fakeredis.aioredis import FakeRedis
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

from api.dependencies import (
    get_job_store,
    get_producer,
    get_queue,
    get_redis,
    get_session_factory,
    get_weather_store,
)
from api.main import create_app
from jobqueue.redis_queue import RedisJobQueue
from jobs.payload import CityTarget
from jobs.registry import HandlerRegistry
from jobs.weather_client import OpenMeteoClient
from jobs.weather_fetch import WeatherFetchHandler
from models.base import Base, create_session_factory
from producer.service import Producer
from stores.jobs import JobRecordStore
from stores.weather import WeatherStore
from worker.executor import JobExecutor
from worker.loop import WorkerLoop

import models.job  # noqa: F401
import models.weather  # noqa: F401

OPEN_METEO_URL = "https://open-meteo.test/v1/forecast"
TEST_QUEUE = "test:weather:jobs"

LONDON = CityTarget(name="London", latitude=51.5, longitude=-0.13)
CAIRO = CityTarget(name="Cairo", latitude=30.04, longitude=31.24)


class FakeOpenMeteo:
    """
    Stand-in for the Open-Meteo API, keyed by latitude.

        provider.reading(LONDON, temperature=14.2, wind_speed=11.5)
        provider.timeout(CAIRO)
    """

    def __init__(self):
        self._routes: dict[float, object] = {}
        self.requests: list[httpx.Request] = []

    def reading(self, city: CityTarget, temperature: float, wind_speed: float,
                time: str = "2024-05-01T12:00") -> None:
        self._routes[city.latitude] = {
            "latitude": city.latitude,
            "longitude": city.longitude,
            "current": {
                "time": time,
                "interval": 900,
                "temperature_2m": temperature,
                "windspeed_10m": wind_speed,
            },
        }

    def timeout(self, city: CityTarget) -> None:
        self._routes[city.latitude] = "timeout"

    def status(self, city: CityTarget, code: int) -> None:
        self._routes[city.latitude] = code

    def body(self, city: CityTarget, body) -> None:
        self._routes[city.latitude] = ("body", body)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self._routes.get(float(request.url.params["latitude"]))
        if route is None or isinstance(route, int):
            return httpx.Response(route or 404, json={"error": True, "reason": "no route"})
        if route == "timeout":
            raise httpx.ReadTimeout("timed out", request=request)
        if isinstance(route, tuple):
            return httpx.Response(200, content=route[1])
        return httpx.Response(200, json=route)


@pytest_asyncio.fixture
async def async_engine(tmp_path):
    """Create a fresh database for each test."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine):
    return create_session_factory(async_engine)


@pytest.fixture
def job_store(session_factory):
    return JobRecordStore(session_factory)


@pytest.fixture
def weather_store(session_factory):
    return WeatherStore(session_factory)


@pytest_asyncio.fixture
async def fake_redis():
    """Create a fake Redis instance (in-memory, no real Redis needed)."""
    r = FakeRedis()
    yield r
    await r.flushall()
    await r.aclose()


@pytest.fixture
def queue(fake_redis):
    return RedisJobQueue(fake_redis, TEST_QUEUE)


@pytest.fixture
def producer(queue, job_store):
    return Producer(queue, job_store)


@pytest.fixture
def provider():
    return FakeOpenMeteo()


@pytest_asyncio.fixture
async def http_client(provider):
    async with httpx.AsyncClient(transport=httpx.MockTransport(provider.handle), timeout=2.0) as c:
        yield c


@pytest.fixture
def executor(http_client, weather_store, job_store):
    client = OpenMeteoClient(http_client, OPEN_METEO_URL)
    registry = HandlerRegistry([WeatherFetchHandler(client, weather_store)])
    return JobExecutor(registry, job_store)


@pytest.fixture
def worker(queue, executor):
    return WorkerLoop(queue, executor, pop_timeout=1)


@pytest.fixture
def app(session_factory, fake_redis, queue, job_store, weather_store, producer):
    """
    The FastAPI app wired to the test stores.

    dependency_overrides swaps the Resources-backed dependencies for the
    test versions above. Tests can override more of them (e.g. a failing
    producer) before making requests.
    """
    app = create_app()

    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_redis] = lambda: fake_redis
    app.dependency_overrides[get_queue] = lambda: queue
    app.dependency_overrides[get_job_store] = lambda: job_store
    app.dependency_overrides[get_weather_store] = lambda: weather_store
    app.dependency_overrides[get_producer] = lambda: producer
    return app


@pytest_asyncio.fixture
async def client(app):
    """
    Create a test HTTP client that talks directly to the FastAPI app.

    ASGITransport does not run the lifespan, so no real Redis/PostgreSQL
    connection is ever attempted.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


def as_naive_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; compare everything that way."""
    return value.replace(tzinfo=None) if value.tzinfo else value
