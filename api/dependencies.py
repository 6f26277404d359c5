"""
FastAPI dependency injection.

How this works:
- An endpoint declares `jobs: JobRecordStore = Depends(get_job_store)`
- FastAPI calls get_job_store() before the endpoint runs
- The store is built from the Resources opened in the app lifespan

Tests swap any of these out with app.dependency_overrides, so no
endpoint ever reaches for a global connection.
"""

from fastapi import Request
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import async_sessionmaker

from infra.resources import Resources
from jobqueue.redis_queue import RedisJobQueue
from producer.service import Producer
from stores.jobs import JobRecordStore
from stores.weather import WeatherStore


def get_resources(request: Request) -> Resources:
    """Returns the Resources opened during startup."""
    return request.app.state.resources


def get_session_factory(request: Request) -> async_sessionmaker:
    return get_resources(request).session_factory


def get_redis(request: Request) -> Redis:
    return get_resources(request).redis


def get_queue(request: Request) -> RedisJobQueue:
    return get_resources(request).queue


def get_job_store(request: Request) -> JobRecordStore:
    return get_resources(request).job_store


def get_weather_store(request: Request) -> WeatherStore:
    return get_resources(request).weather_store


def get_producer(request: Request) -> Producer:
    resources = get_resources(request)
    return Producer(resources.queue, resources.job_store)
