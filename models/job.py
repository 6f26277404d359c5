"""
JobRecord ORM model: maps to the "job_history" table in PostgreSQL.

Key design decisions:
- job_id is generated by the producer BEFORE anything is persisted or
  enqueued, and is the correlation key between the Redis payload and this row
- job_id is UNIQUE: every write is an INSERT ... ON CONFLICT (job_id),
  so concurrent writers can never produce duplicate rows
- completed_at is only set when the job reaches success/failed
- city_outcomes records which cities failed (and why); the status column
  alone is binary and would hide partial failures
"""

from datetime import datetime

from sqlalchemy import JSON, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base
from models.enums import JobStatus


class JobRecord(Base):
    __tablename__ = "job_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    job_id: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    status: Mapped[str] = mapped_column(
        String(20), default=JobStatus.PENDING.value, nullable=False, index=True
    )
    city_outcomes: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    # ── Lifecycle timestamps ────────────────────────────────────
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    def __repr__(self) -> str:
        return f"<JobRecord {self.job_id} {self.status}>"
