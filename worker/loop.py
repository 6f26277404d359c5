"""
Worker loop: drains the Redis queue one job at a time.

State machine:

    STOPPED ──run()──> RUNNING ──stop()──> STOPPING ──(current job done)──> STOPPED

Each iteration does a bounded BLMOVE (WORKER_POP_TIMEOUT seconds), so the
loop re-checks its state at least that often even when the queue is idle.
stop() never interrupts a job in progress: the job runs to completion and
the loop exits before the next pop.

Anything that goes wrong inside one iteration (a malformed message, a
database hiccup, a bug in a handler) is logged and the loop moves on.
The message is acked either way, so a poison message is discarded
instead of being redelivered forever.
"""

import asyncio
import enum
import logging

from jobqueue.redis_queue import RedisJobQueue
from models.errors import PayloadError
from worker.executor import JobExecutor

logger = logging.getLogger(__name__)

# how long to back off after the queue itself errors (e.g. Redis restarting)
QUEUE_ERROR_BACKOFF = 5.0


class WorkerState(str, enum.Enum):
    RUNNING = "running"
    STOPPING = "stopping"
    STOPPED = "stopped"


class WorkerLoop:

    def __init__(self, queue: RedisJobQueue, executor: JobExecutor, pop_timeout: int):
        self._queue = queue
        self._executor = executor
        self._pop_timeout = pop_timeout
        self._stop_event = asyncio.Event()
        self.state = WorkerState.STOPPED
        self.processed = 0

    async def run(self) -> None:
        if self._stop_event.is_set():
            return

        self.state = WorkerState.RUNNING
        logger.info(f"Worker started on queue {self._queue.name}")
        try:
            await self._queue.recover()
            while self.state is WorkerState.RUNNING:
                await self.run_once()
        finally:
            self.state = WorkerState.STOPPED
            logger.info(f"Worker stopped after {self.processed} job(s)")

    def stop(self) -> None:
        """Request shutdown. Takes effect between jobs."""
        self._stop_event.set()
        if self.state is WorkerState.RUNNING:
            self.state = WorkerState.STOPPING
            logger.info("Shutdown requested, finishing current job")

    async def run_once(self) -> bool:
        """
        One loop iteration: pop, execute, ack.

        Returns True if a message was taken off the queue (even a bad one).
        """
        try:
            raw = await self._queue.pop_blocking(self._pop_timeout)
        except Exception as e:
            logger.error(f"Queue pop failed: {e}", exc_info=True)
            await self._backoff()
            return False

        if raw is None:
            return False  # timeout, loop again (re-check state)

        try:
            await self._executor.execute(raw)
        except PayloadError as e:
            logger.error(f"Discarding malformed message: {e}")
        except Exception as e:
            logger.error(f"Error processing job: {e}", exc_info=True)
        finally:
            self.processed += 1
            await self._ack(raw)
        return True

    async def _ack(self, raw) -> None:
        try:
            await self._queue.ack(raw)
        except Exception as e:
            logger.error(f"Could not ack message, it may be redelivered: {e}")

    async def _backoff(self) -> None:
        try:
            await asyncio.wait_for(self._stop_event.wait(), timeout=QUEUE_ERROR_BACKOFF)
        except asyncio.TimeoutError:
            pass
