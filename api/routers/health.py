"""
Health check endpoint.

Checks PostgreSQL and Redis connectivity and reports how many jobs are
waiting in the queue.
"""

from fastapi import APIRouter, Depends
from redis.asyncio import Redis
from sqlalchemy import text
from sqlalchemy.ext.asyncio import async_sessionmaker

from api.dependencies import get_queue, get_redis, get_session_factory
from jobqueue.redis_queue import RedisJobQueue

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(
    session_factory: async_sessionmaker = Depends(get_session_factory),
    redis: Redis = Depends(get_redis),
    queue: RedisJobQueue = Depends(get_queue),
) -> dict:
    """Check that Postgres and Redis are reachable."""
    async with session_factory() as session:
        await session.execute(text("SELECT 1"))

    await redis.ping()

    return {
        "status": "healthy",
        "postgres": "ok",
        "redis": "ok",
        "queue_depth": await queue.depth(),
    }
