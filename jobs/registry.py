"""
Job handler registry: maps payload `type` strings to handler instances.

Handlers need the weather client and store, so the registry is built
per process from those dependencies instead of at import time.
"""

from jobs.base import AbstractJobHandler
from models.errors import PayloadError


class HandlerRegistry:

    def __init__(self, handlers: list[AbstractJobHandler]):
        self._handlers: dict[str, AbstractJobHandler] = {h.job_type: h for h in handlers}

    def get(self, job_type: str) -> AbstractJobHandler:
        """Look up a handler by job type. Raises PayloadError if unknown."""
        handler = self._handlers.get(job_type)
        if handler is None:
            raise PayloadError(
                f"Unknown job type: '{job_type}'. Available: {list(self._handlers.keys())}"
            )
        return handler
