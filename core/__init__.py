"""Core infrastructure: errors, ids and logging setup.

Configuration lives in ``core.config``; import it directly.
"""

from core.errors import (
    ConfigValidationError,
    DecodeError,
    JobTrackerError,
    NotFoundError,
    StoreStateError,
    ValidationError,
)
from core.ids import content_hash, generate_entry_id

__all__ = [
    "JobTrackerError",
    "ValidationError",
    "NotFoundError",
    "DecodeError",
    "StoreStateError",
    "ConfigValidationError",
    "generate_entry_id",
    "content_hash",
]
