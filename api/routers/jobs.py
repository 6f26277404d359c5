"""
Job endpoints.

GET  /jobs           → Most recent jobs, newest first
POST /jobs           → Enqueue a weather job now (same path as the scheduled producer)
GET  /jobs/{job_id}  → One job, including per-city outcomes

The API layer is intentionally thin: reads go straight to the job store,
and the only write goes through Producer.enqueue_job().
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_job_store, get_producer
from api.responses import error_response
from api.schemas.job import (
    JobCreatedResponse,
    JobDetail,
    JobListResponse,
    JobSummary,
)
from config.settings import settings
from models.errors import JobRecordError, QueuePushError
from producer.service import Producer
from stores.jobs import JobRecordStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get("", response_model=JobListResponse)
async def list_jobs(
    jobs: JobRecordStore = Depends(get_job_store),
):
    try:
        records = await jobs.recent(settings.RECENT_JOBS_LIMIT)
    except Exception as e:
        logger.error(f"Error fetching job history: {e}")
        return error_response(500, "Failed to fetch job history", e)
    return JobListResponse(jobs=[JobSummary.from_record(r) for r in records])


@router.post("", response_model=JobCreatedResponse)
async def create_job(
    producer: Producer = Depends(get_producer),
):
    """
    Enqueue one weather job.

    Each request creates its own job. No batching, no debouncing.
    If the push to Redis fails nothing is recorded. If the push works
    but the status row fails, the job id is still returned in the error
    body: the worker will process it and create the row itself.
    """
    try:
        job_id = await producer.enqueue_job()
    except QueuePushError as e:
        logger.error(f"Error enqueueing job: {e}")
        return error_response(500, "Failed to enqueue job", e)
    except JobRecordError as e:
        return error_response(500, "Job enqueued but not recorded", e, job_id=e.job_id)
    except Exception as e:
        logger.error(f"Error enqueueing job: {e}", exc_info=True)
        return error_response(500, "Failed to enqueue job", e)
    return JobCreatedResponse(job_id=job_id)


@router.get("/{job_id}", response_model=JobDetail)
async def get_job(
    job_id: str,
    jobs: JobRecordStore = Depends(get_job_store),
) -> JobDetail:
    record = await jobs.get(job_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Job {job_id} not found")
    return JobDetail.from_record(record)
