"""
Producer: originates new weather jobs.

enqueue_job() is the ONE way a job gets created. The scheduled ticker
and the POST /jobs endpoint both call it, so both paths build the same
payload from the same city list.

Order matters:
    1. Build payload (fresh job id, STANDARD_CITIES)
    2. Push to Redis      → if this fails, stop: no row, nothing in flight
    3. Insert pending row → if this fails, the job is still queued and
                            will be processed; the worker's mark_pending()
                            creates the row when it picks the job up

Pushing first means a failure can never leave an orphan "pending" row
for a payload that does not exist.
"""

import logging
from typing import Sequence

from config.cities import STANDARD_CITIES
from jobqueue.redis_queue import RedisJobQueue
from jobs.payload import CityTarget, JobPayload, new_job_id
from models.errors import JobRecordError
from stores.jobs import JobRecordStore

logger = logging.getLogger(__name__)


class Producer:

    def __init__(
        self,
        queue: RedisJobQueue,
        job_store: JobRecordStore,
        cities: Sequence[CityTarget] = STANDARD_CITIES,
    ):
        self._queue = queue
        self._job_store = job_store
        self._cities = list(cities)

    async def enqueue_job(self) -> str:
        """
        Create, enqueue and record one job. Returns its id.

        Raises:
            QueuePushError: the payload never reached Redis (nothing recorded)
            JobRecordError: the payload is queued but the pending row was not written
        """
        payload = JobPayload(id=new_job_id(), cities=list(self._cities))

        await self._queue.push(payload)

        try:
            inserted = await self._job_store.insert_pending(payload.id, payload.created_at)
        except Exception as e:
            logger.error(f"Job {payload.id} is queued but its pending row failed: {e}")
            raise JobRecordError(payload.id, e) from e

        if not inserted:
            logger.warning(f"Job {payload.id} already had a status row, left untouched")

        logger.info(f"Job {payload.id} enqueued with {len(payload.cities)} cities")
        return payload.id
