"""
Recurring trigger for the producer.

Enqueues one job immediately, then one every `interval` seconds until
stop() is called. A failed tick is logged and the next tick still runs.

Waiting on an asyncio.Event with a timeout (instead of asyncio.sleep)
means stop() takes effect right away instead of after the current interval.
"""

import asyncio
import logging

from models.errors import PipelineError
from producer.service import Producer

logger = logging.getLogger(__name__)


class ProducerTicker:

    def __init__(self, producer: Producer, interval: float):
        self._producer = producer
        self._interval = interval
        self._stop_event = asyncio.Event()
        self.ticks = 0

    async def run(self) -> None:
        logger.info(f"Producer ticker started, interval {self._interval}s")
        while not self._stop_event.is_set():
            await self.tick()
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self._interval)
            except asyncio.TimeoutError:
                pass
        logger.info("Producer ticker stopped")

    async def tick(self) -> None:
        self.ticks += 1
        try:
            await self._producer.enqueue_job()
        except PipelineError as e:
            logger.error(f"Scheduled enqueue failed: {e}")
        except Exception as e:
            logger.error(f"Scheduled enqueue failed: {e}", exc_info=True)

    def stop(self) -> None:
        self._stop_event.set()
