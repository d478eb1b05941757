"""Job entry schemas."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from core.ids import generate_entry_id

from .base import BaseSchema


class JobStatus(str, Enum):
    """Lifecycle stage of a job application, in display order."""

    WISHLIST = "Wishlist"
    APPLIED = "Applied"
    INTERVIEW = "Interview"
    OFFER = "Offer"
    REJECTED = "Rejected"


STATUSES: tuple[str, ...] = tuple(s.value for s in JobStatus)

# Pseudo-status that disables status filtering
ALL_FILTER = "All"
FILTER_OPTIONS: tuple[str, ...] = (ALL_FILTER, *STATUSES)


def is_known_status(status: str) -> bool:
    """Check whether a status belongs to the fixed status set."""
    return status in STATUSES


class JobEntry(BaseModel):
    """A single tracked job application.

    Equality is structural on (title, company, status). The ``id`` is an
    in-memory identity handle and is never persisted.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=generate_entry_id, description="Identity handle")
    title: str = Field(..., description="Job title")
    company: str = Field(..., description="Company name")
    status: str = Field(default=JobStatus.WISHLIST.value, description="Current status")

    def fields(self) -> tuple[str, str, str]:
        """Return the persisted fields as a tuple."""
        return (self.title, self.company, self.status)

    def to_record(self) -> dict[str, str]:
        """Return the persisted JSON shape (always all three fields)."""
        return {"title": self.title, "company": self.company, "status": self.status}

    def with_status(self, status: str) -> JobEntry:
        """Return a copy with a new status and the same identity."""
        return self.model_copy(update={"status": status})

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, JobEntry):
            return NotImplemented
        return self.fields() == other.fields()

    def __hash__(self) -> int:
        return hash(self.fields())


class JobEntryCreate(BaseSchema):
    """Schema for adding a job entry."""

    title: str = Field(..., description="Job title")
    company: str = Field(..., description="Company name")
    status: str = Field(default=JobStatus.WISHLIST.value, description="Initial status")


class JobStatusUpdate(BaseSchema):
    """Schema for changing the status of a job entry."""

    status: str = Field(..., description="New status")


class JobListResponse(BaseModel):
    """Filtered view of the job list."""

    count: int
    jobs: list[JobEntry] = Field(default_factory=list)
