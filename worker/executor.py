"""
Job executor: processes a single queue message.

This is the code that actually DOES THE WORK. The worker loop calls
executor.execute(raw) for every message it pops, and this method handles
the full lifecycle:

    1. Decode the payload                   → PayloadError if it isn't a job
    2. Re-assert status=pending in Postgres (creates the row if the
       producer's insert never landed)
    3. If the job is already success/failed, it was redelivered: skip it
    4. Run the handler (one fetch + upsert per city, failures isolated)
    5. Finalize: success only if EVERY city succeeded, otherwise failed

Status writes are best-effort: a database error while writing status is
logged and the job carries on. Nothing here is retried.
"""

import logging
from typing import Optional

from jobs.base import CITY_OK
from jobs.payload import JobPayload
from jobs.registry import HandlerRegistry
from models.enums import JobStatus, TERMINAL_STATUSES
from stores.jobs import JobRecordStore

logger = logging.getLogger(__name__)


class JobExecutor:

    def __init__(self, registry: HandlerRegistry, job_store: JobRecordStore):
        self._registry = registry
        self._job_store = job_store

    async def execute(self, raw: bytes | str) -> Optional[JobStatus]:
        """
        Execute one job.

        Returns:
            the terminal status written, or None if the job was skipped
            because it had already been finalized.

        Raises:
            PayloadError: the message is not a job we can run
        """
        payload = JobPayload.from_json(raw)
        handler = self._registry.get(payload.type)
        logger.info(f"Processing job {payload.id} ({len(payload.cities)} cities)")

        # ── Step 1: Re-assert PENDING ───────────────────────
        try:
            current = await self._job_store.mark_pending(payload.id)
        except Exception as e:
            logger.error(f"Could not mark job {payload.id} pending: {e}")
            current = None

        if current in TERMINAL_STATUSES:
            logger.warning(f"Job {payload.id} is already {current}, skipping redelivered payload")
            return None

        # ── Step 2: Fetch every city ────────────────────────
        outcomes = await handler.run(payload)
        status = aggregate_status(outcomes)

        # ── Step 3: Finalize ────────────────────────────────
        try:
            await self._job_store.finalize(payload.id, status, outcomes)
        except Exception as e:
            logger.error(f"Could not finalize job {payload.id} as {status.value}: {e}")

        failed = [city for city, outcome in outcomes.items() if outcome != CITY_OK]
        if failed:
            logger.info(f"Completed job {payload.id} with status {status.value} (failed: {', '.join(failed)})")
        else:
            logger.info(f"Completed job {payload.id} with status {status.value}")
        return status


def aggregate_status(outcomes: dict[str, str]) -> JobStatus:
    """Binary at job granularity: one failed city fails the job."""
    if all(outcome == CITY_OK for outcome in outcomes.values()):
        return JobStatus.SUCCESS
    return JobStatus.FAILED
