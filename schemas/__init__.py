"""
Pydantic schemas for JobTracker.

Contract-first design: these schemas define the data contracts
between the store, the persistence layer and the presentation layer.
"""

from .job_entry import (
    ALL_FILTER,
    FILTER_OPTIONS,
    STATUSES,
    JobEntry,
    JobEntryCreate,
    JobListResponse,
    JobStatus,
    JobStatusUpdate,
    is_known_status,
)
from .config import SeedJobEntry, SeedJobsConfig

__all__ = [
    # Core entities
    "JobEntry",
    "JobEntryCreate",
    "JobStatusUpdate",
    "JobListResponse",
    "JobStatus",
    "STATUSES",
    "ALL_FILTER",
    "FILTER_OPTIONS",
    "is_known_status",
    # Config schemas
    "SeedJobEntry",
    "SeedJobsConfig",
]
