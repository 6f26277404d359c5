"""
Pydantic schemas for the /jobs endpoints.

These are NOT database models. They define the HTTP API contract.
Field names are snake_case in Python and camelCase on the wire
(alias_generator), matching what the dashboard reads.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from models.job import JobRecord


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class JobSummary(ApiModel):
    """One row of GET /jobs."""

    id: str
    status: str
    timestamp: datetime                       # when the job was created
    completed_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: JobRecord) -> "JobSummary":
        return cls(
            id=record.job_id,
            status=record.status,
            timestamp=record.created_at,
            completed_at=record.completed_at,
        )


class JobDetail(JobSummary):
    """GET /jobs/{job_id}: includes which cities failed and why."""

    city_outcomes: Optional[dict[str, str]] = None

    @classmethod
    def from_record(cls, record: JobRecord) -> "JobDetail":
        return cls(
            id=record.job_id,
            status=record.status,
            timestamp=record.created_at,
            completed_at=record.completed_at,
            city_outcomes=record.city_outcomes,
        )


class JobListResponse(ApiModel):
    success: bool = True
    jobs: list[JobSummary]


class JobCreatedResponse(ApiModel):
    success: bool = True
    job_id: str
    message: str = "Weather fetching job enqueued successfully"


class ErrorResponse(ApiModel):
    success: bool = False
    error: str
    message: str
    job_id: Optional[str] = None
