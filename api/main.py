"""
FastAPI application factory.

This file:
1. Creates the FastAPI app
2. Opens Redis/PostgreSQL on startup (creating tables if needed)
3. Registers all routers (jobs, weather, health)
4. Closes connections on shutdown

The API never talks to the queue directly except through the Producer,
the same code path the scheduled producer uses.

To run:  python -m api.server  (or: uvicorn api.main:app --reload)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from config.logging import configure_logging
from config.settings import settings
from infra.resources import open_resources
from api.routers import jobs, weather, health

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Runs on startup (before yield) and shutdown (after yield).

    If Redis or PostgreSQL is unreachable, open_resources() raises and
    the server refuses to start.
    """
    async with open_resources(settings) as resources:
        app.state.resources = resources
        logger.info(f"API ready, queue: {settings.QUEUE_NAME}")
        yield  # app is running and serving requests between startup and shutdown
    logger.info("API shut down")


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    app = FastAPI(
        title="Weather Sync",
        description="Enqueue weather refresh jobs and read job history and the latest observations",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.include_router(health.router)
    app.include_router(jobs.router)
    app.include_router(weather.router)

    return app


# This is what uvicorn imports: `uvicorn api.main:app`
app = create_app()
