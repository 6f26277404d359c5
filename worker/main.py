"""
Worker process entry point.

This is a SEPARATE process from the producer and the API server.
It connects to Redis and PostgreSQL, then drains the job queue one job
at a time until Ctrl+C (SIGINT) or a kill signal (SIGTERM).

A shutdown signal moves the loop to STOPPING: the job in progress
finishes, then the process exits.

To run:
    python -m worker.main
"""

import asyncio
import logging
import signal

from config.logging import configure_logging
from config.settings import settings
from infra.resources import Resources, open_resources
from jobs.registry import HandlerRegistry
from jobs.weather_client import OpenMeteoClient
from jobs.weather_fetch import WeatherFetchHandler
from worker.executor import JobExecutor
from worker.loop import WorkerLoop

logger = logging.getLogger(__name__)


def build_worker(resources: Resources) -> WorkerLoop:
    client = OpenMeteoClient(resources.http, resources.settings.OPEN_METEO_URL)
    registry = HandlerRegistry([WeatherFetchHandler(client, resources.weather_store)])
    executor = JobExecutor(registry, resources.job_store)
    return WorkerLoop(resources.queue, executor, resources.settings.WORKER_POP_TIMEOUT)


async def run() -> None:
    async with open_resources(settings) as resources:
        worker = build_worker(resources)

        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, worker.stop)

        await worker.run()


def main():
    configure_logging(settings.LOG_LEVEL)
    try:
        asyncio.run(run())
    except Exception:
        logger.exception("Worker stopped on a fatal error")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
