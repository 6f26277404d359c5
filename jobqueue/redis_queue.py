"""
Durable FIFO job queue backed by a Redis list.

    producer ── RPUSH ──> [ weather:jobs ] ── BLMOVE ──> [ weather:jobs:processing ] ── LREM (ack)
                            head ... tail                   popped, not yet finished

Why BLMOVE instead of BLPOP?
BLPOP removes the message outright, so a worker that crashes mid-job
loses it forever. BLMOVE atomically parks the message in a processing
list instead; the worker removes it from there (ack) once the job is
finalized. On startup, recover() puts anything still parked back at the
head of the queue. That makes delivery at-least-once rather than
at-most-once; the worker tolerates the resulting redeliveries because a
job that already reached a terminal status is skipped.

The timeout on pop_blocking is what lets the worker loop notice a
shutdown request: it never blocks longer than `timeout` seconds.
"""

import logging
from typing import Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from jobs.payload import JobPayload
from models.errors import QueuePushError

logger = logging.getLogger(__name__)


class RedisJobQueue:

    def __init__(self, redis_client: Redis, name: str, processing_name: Optional[str] = None):
        self._redis = redis_client
        self.name = name
        self.processing_name = processing_name or f"{name}:processing"

    async def push(self, payload: JobPayload) -> None:
        """Append to the tail. Raises QueuePushError if Redis rejects it."""
        try:
            await self._redis.rpush(self.name, payload.to_json())
        except RedisError as e:
            raise QueuePushError(f"Could not push job {payload.id} to {self.name}: {e}") from e

    async def pop_blocking(self, timeout: int) -> Optional[bytes]:
        """
        Move the head message into the processing list and return it.

        Returns None if nothing arrived within `timeout` seconds.
        The caller must ack() the returned message when done with it.
        """
        return await self._redis.blmove(
            self.name, self.processing_name, timeout, src="LEFT", dest="RIGHT"
        )

    async def ack(self, raw: bytes | str) -> None:
        """Drop a finished (or discarded) message from the processing list."""
        await self._redis.lrem(self.processing_name, 1, raw)

    async def recover(self) -> int:
        """
        Requeue messages a previous worker popped but never acked.

        The processing list is oldest-first, so we take from its tail and
        push onto the queue head: the oldest message ends up first in line.
        """
        recovered = 0
        while await self._redis.lmove(
            self.processing_name, self.name, src="RIGHT", dest="LEFT"
        ) is not None:
            recovered += 1
        if recovered:
            logger.warning(f"Requeued {recovered} unacknowledged job(s) from {self.processing_name}")
        return recovered

    async def depth(self) -> int:
        return await self._redis.llen(self.name)
