"""
Process-wide connections, built explicitly and handed to whoever needs them.

Lifecycle:
    async with open_resources(settings) as resources:   # connect + verify
        ...                                              # run producer / worker / API
                                                         # everything closed on exit

open_resources() fails loudly if Redis or PostgreSQL is unreachable.
That is the only fatal error in the pipeline: a process that cannot
reach its queue or database at startup should exit, not limp along.

Tables are created here if missing (safe to run multiple times), so the
producer, worker and API can start in any order.
"""

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator

import httpx
from redis.asyncio import Redis
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from config.settings import Settings
from jobqueue.redis_queue import RedisJobQueue
from models.base import Base, create_engine_for, create_session_factory
from stores.jobs import JobRecordStore
from stores.weather import WeatherStore

# imported for their side effect: registering tables on Base.metadata
import models.job  # noqa: F401
import models.weather  # noqa: F401

logger = logging.getLogger(__name__)


@dataclass
class Resources:
    settings: Settings
    redis: Redis
    engine: AsyncEngine
    session_factory: async_sessionmaker
    http: httpx.AsyncClient

    @property
    def queue(self) -> RedisJobQueue:
        return RedisJobQueue(
            self.redis, self.settings.QUEUE_NAME, self.settings.processing_queue_name
        )

    @property
    def job_store(self) -> JobRecordStore:
        return JobRecordStore(self.session_factory)

    @property
    def weather_store(self) -> WeatherStore:
        return WeatherStore(self.session_factory)


@asynccontextmanager
async def open_resources(settings: Settings) -> AsyncIterator[Resources]:
    redis_client = Redis.from_url(settings.REDIS_URL)
    engine = create_engine_for(settings.database_url)
    http_client = httpx.AsyncClient(timeout=settings.WEATHER_TIMEOUT_SECONDS)

    try:
        await redis_client.ping()
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Connected to Redis and PostgreSQL")

        yield Resources(
            settings=settings,
            redis=redis_client,
            engine=engine,
            session_factory=create_session_factory(engine),
            http=http_client,
        )
    finally:
        await http_client.aclose()
        await redis_client.aclose()
        await engine.dispose()
        logger.info("Connections closed")
