"""
Shared enumerations used across the entire project.

Using Python enums (inheriting from str) means:
- They serialize to JSON automatically ("pending", not "JobStatus.PENDING")
- They work as SQLAlchemy column values
- Typos become immediate errors instead of silent bugs
"""

import enum


class JobStatus(str, enum.Enum):
    PENDING = "pending"    # created, or re-asserted by the worker when it starts processing
    SUCCESS = "success"    # every city in the payload was fetched and stored
    FAILED = "failed"      # at least one city failed


TERMINAL_STATUSES = (JobStatus.SUCCESS.value, JobStatus.FAILED.value)


class JobType(str, enum.Enum):
    FETCH_WEATHER = "fetch-weather"  # refresh current weather for the configured cities
