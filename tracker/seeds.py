"""Demonstration entries for a fresh store."""

from __future__ import annotations

from schemas.config import SeedJobsConfig
from schemas.job_entry import JobEntry


def seed_entries(config: SeedJobsConfig | None = None) -> list[JobEntry]:
    """Build fresh demonstration entries, in insertion order."""
    config = config or SeedJobsConfig()
    return [
        JobEntry(title=seed.title, company=seed.company, status=seed.status)
        for seed in config.jobs
    ]
