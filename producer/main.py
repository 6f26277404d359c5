"""
Producer process entry point.

Connects to Redis and PostgreSQL, then enqueues a weather job right away
and every INTERVAL_SECONDS after that. Ctrl+C (SIGINT) or SIGTERM stops it.

To run:
    python -m producer.main
"""

import asyncio
import logging
import signal

from config.logging import configure_logging
from config.settings import settings
from infra.resources import open_resources
from producer.service import Producer
from producer.ticker import ProducerTicker

logger = logging.getLogger(__name__)


async def run() -> None:
    async with open_resources(settings) as resources:
        producer = Producer(resources.queue, resources.job_store)
        ticker = ProducerTicker(producer, settings.INTERVAL_SECONDS)

        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, ticker.stop)

        await ticker.run()


def main():
    configure_logging(settings.LOG_LEVEL)
    try:
        asyncio.run(run())
    except Exception:
        logger.exception("Producer stopped on a fatal error")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
