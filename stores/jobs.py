"""
Job Record Store: the job_history table.

No application-level locking: every write is a single
INSERT ... ON CONFLICT (job_id) statement, so the database's unique
index settles races between the producer, the API trigger and the worker.

Write rules:
    insert_pending  → insert if absent, never touches an existing row
    mark_pending    → (re)assert pending, unless the job is already terminal
    finalize        → pending → success/failed, once; terminal rows are never rewritten
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import async_sessionmaker

from models.enums import JobStatus, TERMINAL_STATUSES
from models.job import JobRecord
from stores.dialect import upsert_insert

logger = logging.getLogger(__name__)


class JobRecordStore:

    def __init__(self, session_factory: async_sessionmaker):
        self._session_factory = session_factory

    async def insert_pending(self, job_id: str, created_at: Optional[datetime] = None) -> bool:
        """Insert a pending row. Returns False if the job_id already existed."""
        values = {"job_id": job_id, "status": JobStatus.PENDING.value}
        if created_at is not None:
            values["created_at"] = created_at

        async with self._session_factory() as session:
            stmt = (
                upsert_insert(session, JobRecord)
                .values(**values)
                .on_conflict_do_nothing(index_elements=["job_id"])
            )
            result = await session.execute(stmt)
            await session.commit()
            return result.rowcount == 1

    async def mark_pending(self, job_id: str) -> str:
        """
        Ensure a row exists for job_id and return its current status.

        The worker calls this before processing. It covers the gap where
        the producer pushed the payload but failed to insert the row.
        A terminal row is left alone and its status is returned as is.
        """
        async with self._session_factory() as session:
            stmt = upsert_insert(session, JobRecord).values(
                job_id=job_id, status=JobStatus.PENDING.value
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=["job_id"],
                set_={"status": stmt.excluded.status},
                where=JobRecord.status.notin_(TERMINAL_STATUSES),
            )
            await session.execute(stmt)
            await session.commit()

            status = await session.scalar(
                select(JobRecord.status).where(JobRecord.job_id == job_id)
            )
            return status

    async def finalize(
        self,
        job_id: str,
        status: JobStatus,
        city_outcomes: Optional[dict[str, str]] = None,
    ) -> bool:
        """
        Write the terminal status and completed_at.

        Returns False if the row was already terminal (nothing written).
        """
        if status.value not in TERMINAL_STATUSES:
            raise ValueError(f"finalize() needs a terminal status, got {status.value}")

        async with self._session_factory() as session:
            stmt = upsert_insert(session, JobRecord).values(
                job_id=job_id,
                status=status.value,
                completed_at=datetime.now(timezone.utc),
                city_outcomes=city_outcomes,
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=["job_id"],
                set_={
                    "status": stmt.excluded.status,
                    "completed_at": stmt.excluded.completed_at,
                    "city_outcomes": stmt.excluded.city_outcomes,
                },
                where=JobRecord.status.notin_(TERMINAL_STATUSES),
            )
            result = await session.execute(stmt)
            await session.commit()
            return result.rowcount == 1

    async def get(self, job_id: str) -> Optional[JobRecord]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(JobRecord).where(JobRecord.job_id == job_id)
            )
            return result.scalar_one_or_none()

    async def recent(self, limit: int) -> list[JobRecord]:
        """Most recent jobs first."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(JobRecord)
                .order_by(JobRecord.created_at.desc(), JobRecord.id.desc())
                .limit(limit)
            )
            return list(result.scalars().all())
