"""In-memory job list with add, status change, delete and filtered views."""

from __future__ import annotations

import threading
from collections.abc import Sequence

import structlog

from core.errors import DecodeError, NotFoundError, StoreStateError, ValidationError
from schemas.config import SeedJobsConfig
from schemas.job_entry import (
    ALL_FILTER,
    STATUSES,
    JobEntry,
    JobStatus,
    is_known_status,
)
from storage.repository import JobRepository
from tracker.seeds import seed_entries

logger = structlog.get_logger()


class JobStore:
    """Authoritative ordered list of job entries.

    Newest entries sit at index 0. Every mutation updates memory first, then
    hands a full snapshot to the repository without waiting for the write.
    Entries are addressed by their ``id``.
    """

    def __init__(
        self,
        repository: JobRepository | None = None,
        strict_status: bool = False,
        seeds: SeedJobsConfig | None = None,
    ):
        self.repository = repository
        self.strict_status = strict_status
        self.seeds = seeds or SeedJobsConfig()

        self._entries: list[JobEntry] = []
        self._initialized = False
        self._lock = threading.RLock()

    @classmethod
    def boot(
        cls,
        repository: JobRepository,
        strict_status: bool = False,
        seeds: SeedJobsConfig | None = None,
    ) -> JobStore:
        """Create a store from saved data.

        Nothing saved: seed the demonstration entries and persist them.
        Malformed data: seed in memory only, leaving the stored value as is
        until the next mutation overwrites it.
        """
        store = cls(repository, strict_status=strict_status, seeds=seeds)

        try:
            loaded = repository.load()
        except DecodeError as e:
            logger.warning("Saved jobs unreadable, using demonstration entries", error=str(e))
            store.initialize(None)
            return store

        store.initialize(loaded)
        if loaded is None:
            store._save()
        logger.info(
            "Job store ready",
            source="seed" if loaded is None else "saved",
            count=len(store),
        )
        return store

    # --- lifecycle ---

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def initialize(self, loaded: Sequence[JobEntry] | None) -> None:
        """Populate the store once. None means nothing was saved."""
        with self._lock:
            if self._initialized:
                raise StoreStateError("Job store is already initialized")
            if loaded is None:
                self._entries = seed_entries(self.seeds)
                logger.debug("Seeded demonstration entries", count=len(self._entries))
            else:
                self._entries = list(loaded)
            self._initialized = True

    def _require_initialized(self) -> None:
        if not self._initialized:
            raise StoreStateError("Job store is not initialized")

    # --- reads ---

    @property
    def entries(self) -> list[JobEntry]:
        """Snapshot of all entries in store order."""
        with self._lock:
            self._require_initialized()
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, entry_id: str) -> JobEntry | None:
        with self._lock:
            self._require_initialized()
            index = self._index_of(entry_id)
            return None if index is None else self._entries[index]

    def filter_and_search(
        self, status_filter: str = ALL_FILTER, query: str = ""
    ) -> list[JobEntry]:
        """Entries matching a status filter and a title/company substring.

        The query is trimmed and compared case-insensitively. Store order is
        preserved.
        """
        with self._lock:
            self._require_initialized()
            if status_filter == ALL_FILTER:
                matches = list(self._entries)
            else:
                matches = [e for e in self._entries if e.status == status_filter]

        needle = query.strip().lower()
        if not needle:
            return matches
        return [
            e
            for e in matches
            if needle in e.title.lower() or needle in e.company.lower()
        ]

    # --- mutations ---

    def add(
        self, title: str, company: str, status: str = JobStatus.WISHLIST.value
    ) -> JobEntry:
        """Insert a new entry at the front.

        Raises:
            ValidationError: If title or company is blank, or status is unknown
        """
        errors = []
        if not title.strip():
            errors.append({"loc": ["title"], "msg": "Title must not be blank"})
        if not company.strip():
            errors.append({"loc": ["company"], "msg": "Company must not be blank"})
        errors.extend(self._status_errors(status))
        if errors:
            raise ValidationError(
                "; ".join(err["msg"] for err in errors), errors=errors
            )

        entry = JobEntry(title=title, company=company, status=status)
        with self._lock:
            self._require_initialized()
            self._entries.insert(0, entry)
            self._save()
        logger.debug("Job added", id=entry.id, status=status)
        return entry

    def update_status(self, target: JobEntry | str, new_status: str) -> JobEntry:
        """Replace the target entry in place with a new status.

        Raises:
            ValidationError: If status is unknown and strict_status is set
            NotFoundError: If the entry is no longer present
        """
        errors = self._status_errors(new_status)
        if errors:
            raise ValidationError(errors[0]["msg"], errors=errors)

        entry_id = _target_id(target)
        with self._lock:
            self._require_initialized()
            index = self._index_of(entry_id)
            if index is None:
                raise NotFoundError(entry_id)
            updated = self._entries[index].with_status(new_status)
            self._entries[index] = updated
            self._save()
        logger.debug("Job status changed", id=entry_id, status=new_status)
        return updated

    def delete(self, target: JobEntry | str) -> bool:
        """Remove the target entry. Missing entries are ignored.

        Returns:
            True if an entry was removed
        """
        entry_id = _target_id(target)
        with self._lock:
            self._require_initialized()
            index = self._index_of(entry_id)
            if index is None:
                return False
            del self._entries[index]
            self._save()
        logger.debug("Job deleted", id=entry_id)
        return True

    # --- internals ---

    def _status_errors(self, status: str) -> list[dict]:
        if self.strict_status and not is_known_status(status):
            return [
                {
                    "loc": ["status"],
                    "msg": f"Unknown status '{status}', expected one of {', '.join(STATUSES)}",
                }
            ]
        return []

    def _index_of(self, entry_id: str) -> int | None:
        for i, entry in enumerate(self._entries):
            if entry.id == entry_id:
                return i
        return None

    def _save(self) -> None:
        if self.repository is not None:
            self.repository.save(self._entries)


def _target_id(target: JobEntry | str) -> str:
    return target.id if isinstance(target, JobEntry) else target
