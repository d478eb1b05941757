"""Job list persistence on top of a key-value store."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

import structlog
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from schemas.job_entry import JobEntry
from storage.codec import decode_jobs, encode_jobs
from storage.kv import KeyValueStore
from storage.writer import SnapshotWriter

logger = structlog.get_logger()

DEFAULT_JOBS_KEY = "jobs_json"


class JobRepository(ABC):
    """Abstract base for job list persistence."""

    @abstractmethod
    def load(self) -> list[JobEntry] | None:
        """Load the saved job list.

        Returns:
            The saved entries, or None when nothing (or only blank text) is saved

        Raises:
            DecodeError: If the saved data is malformed
        """

    @abstractmethod
    def save(self, entries: Sequence[JobEntry]) -> None:
        """Persist the full job list. May return before the write lands."""

    def flush(self, timeout: float | None = None) -> bool:
        """Wait for outstanding saves. Returns False on timeout."""
        return True

    def close(self, timeout: float | None = None) -> None:
        """Flush and release resources."""


class KeyValueJobRepository(JobRepository):
    """Stores the job list as one JSON string under a single key."""

    def __init__(
        self,
        kv: KeyValueStore,
        key: str = DEFAULT_JOBS_KEY,
        strict_status: bool = False,
        background: bool = True,
        max_attempts: int = 3,
    ):
        self.kv = kv
        self.key = key
        self.strict_status = strict_status
        self.max_attempts = max_attempts
        self.writer = SnapshotWriter(self._write, background=background, name=f"save:{key}")

    def load(self) -> list[JobEntry] | None:
        raw = self.kv.get(self.key)
        if raw is None or not raw.strip():
            return None
        entries = decode_jobs(raw, strict_status=self.strict_status)
        logger.debug("Jobs loaded", key=self.key, count=len(entries))
        return entries

    def save(self, entries: Sequence[JobEntry]) -> None:
        self.writer.submit(encode_jobs(entries))

    def flush(self, timeout: float | None = None) -> bool:
        return self.writer.flush(timeout)

    def close(self, timeout: float | None = None) -> None:
        if not self.writer.closed:
            self.writer.close(timeout)

    def _write(self, payload: str) -> None:
        """Write with retries on I/O errors."""

        @retry(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=0.1, min=0.1, max=2),
            retry=retry_if_exception_type(OSError),
            reraise=True,
        )
        def _do_write() -> None:
            self.kv.set(self.key, payload)

        _do_write()
