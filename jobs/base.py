"""
Abstract base class for job handlers.

The worker calls handler.run(payload) without knowing which job type it
is. It looks up the handler from the registry by the payload's `type`.

Strategy pattern:
- AbstractJobHandler = interface
- WeatherFetchHandler = implementation
- registry.py = factory lookup
"""

from abc import ABC, abstractmethod

from jobs.payload import JobPayload

CITY_OK = "ok"


class AbstractJobHandler(ABC):

    @abstractmethod
    async def run(self, payload: JobPayload) -> dict[str, str]:
        """
        Execute the job.

        Returns:
            one entry per city in the payload: CITY_OK, or the reason it failed.
            The job succeeds only if every entry is CITY_OK.

        Must not raise for a single city's failure; record it and move on.
        """
        ...

    @property
    @abstractmethod
    def job_type(self) -> str:
        """Unique identifier matching the payload `type` (e.g., 'fetch-weather')."""
        ...
