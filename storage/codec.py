"""JSON codec for the persisted job list.

The persisted value is a JSON array of objects, each with exactly three
string fields::

    [{"title": "...", "company": "...", "status": "..."}, ...]
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

import structlog

from core.errors import DecodeError
from schemas.job_entry import JobEntry, JobStatus, is_known_status

logger = structlog.get_logger()


def encode_jobs(entries: Sequence[JobEntry]) -> str:
    """Encode entries in store order. Every field is always emitted."""
    return json.dumps([entry.to_record() for entry in entries], ensure_ascii=False)


def _opt_string(record: dict[str, Any], name: str, default: str, index: int) -> str:
    value = record.get(name)
    if value is None:
        return default
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        raise DecodeError(f"Job #{index}: field '{name}' must be a string")
    # Scalars keep their JSON spelling ("true", "3")
    return json.dumps(value)


def decode_jobs(raw: str, *, strict_status: bool = False) -> list[JobEntry]:
    """Decode a persisted job list.

    Missing title/company decode to "", missing status to "Wishlist". When
    ``strict_status`` is set, statuses outside the fixed set are coerced to
    "Wishlist".

    Raises:
        DecodeError: If the payload is not a JSON array of objects
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Malformed job list JSON: {e}") from e

    if not isinstance(data, list):
        raise DecodeError(f"Expected a JSON array, got {type(data).__name__}")

    entries: list[JobEntry] = []
    for i, record in enumerate(data):
        if not isinstance(record, dict):
            raise DecodeError(f"Job #{i} is not a JSON object")

        status = _opt_string(record, "status", JobStatus.WISHLIST.value, i)
        if strict_status and not is_known_status(status):
            logger.warning("Coercing unknown status", index=i, status=status)
            status = JobStatus.WISHLIST.value

        entries.append(
            JobEntry(
                title=_opt_string(record, "title", "", i),
                company=_opt_string(record, "company", "", i),
                status=status,
            )
        )

    return entries
