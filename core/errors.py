"""Exception hierarchy for the job tracker."""

from __future__ import annotations

from typing import Any


class JobTrackerError(Exception):
    """Base class for all job tracker errors."""


class ValidationError(JobTrackerError):
    """Raised when an add or status change carries invalid input."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        super().__init__(message)
        self.errors = errors or []


class NotFoundError(JobTrackerError):
    """Raised when a mutation targets an entry that is no longer present."""

    def __init__(self, entry_id: str):
        super().__init__(f"Job entry not found: {entry_id}")
        self.entry_id = entry_id


class DecodeError(JobTrackerError):
    """Raised when persisted job data cannot be decoded."""


class StoreStateError(JobTrackerError):
    """Raised when the store is used before or re-initialized after boot."""


class ConfigValidationError(JobTrackerError):
    """Raised when configuration validation fails."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        super().__init__(message)
        self.errors = errors or []
