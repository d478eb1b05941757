"""Application context: wires settings, persistence and the job store."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import structlog

from core.config import Settings, load_config
from schemas.config import SeedJobsConfig
from storage.kv import FileKeyValueStore, KeyValueStore
from storage.repository import JobRepository, KeyValueJobRepository
from tracker.store import JobStore

logger = structlog.get_logger()


@dataclass
class AppContext:
    """Everything a presentation layer needs, owned in one place."""

    settings: Settings
    seeds: SeedJobsConfig
    repository: JobRepository
    store: JobStore

    @classmethod
    def boot(
        cls,
        settings: Settings | None = None,
        seeds_path: Path | None = None,
        kv: KeyValueStore | None = None,
    ) -> AppContext:
        """Load configuration, open the preference store and boot the job store.

        Raises:
            ConfigValidationError: If the seed file is invalid
        """
        settings, seeds = load_config(seeds_path, settings)

        kv = kv or FileKeyValueStore(settings.prefs_path)
        repository = KeyValueJobRepository(
            kv,
            key=settings.jobs_key,
            strict_status=settings.strict_status,
            background=settings.background_saves,
            max_attempts=settings.save_attempts,
        )
        store = JobStore.boot(repository, strict_status=settings.strict_status, seeds=seeds)

        return cls(settings=settings, seeds=seeds, repository=repository, store=store)

    def close(self, timeout: float | None = 5.0) -> None:
        """Flush pending saves and stop the writer."""
        self.repository.close(timeout)
        logger.debug("Context closed")
