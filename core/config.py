"""Configuration loading and validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.errors import ConfigValidationError
from schemas.config import SeedJobsConfig
from schemas.job_entry import is_known_status


class Settings(BaseSettings):
    """Application settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="JOB_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage
    prefs_path: str = "./data/jobtracker_prefs.json"
    jobs_key: str = "jobs_json"
    seeds_path: str = "configs/seed_jobs.yaml"

    # Behaviour
    strict_status: bool = False
    background_saves: bool = True
    save_attempts: int = Field(default=3, ge=1)

    # Runtime
    log_level: str = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, v: Any) -> str:
        return str(v).strip().upper() or "INFO"


def load_seeds_config(path: Path) -> SeedJobsConfig:
    """Load demonstration entries from YAML file.

    A missing file yields the built-in demonstration entries.
    """
    if not path.exists():
        return SeedJobsConfig()

    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigValidationError(f"Expected a mapping in {path}")

    try:
        return SeedJobsConfig(**data)
    except ValidationError as e:
        raise ConfigValidationError(
            f"Invalid {path.name}",
            errors=e.errors(),
        ) from e


def check_seed_statuses(seeds: SeedJobsConfig, path: Path) -> None:
    """Reject seed entries whose status is outside the fixed status set."""
    errors = [
        {"loc": ["jobs", i, "status"], "msg": f"Unknown status '{job.status}'"}
        for i, job in enumerate(seeds.jobs)
        if not is_known_status(job.status)
    ]
    if errors:
        raise ConfigValidationError(f"Invalid {path.name}", errors=errors)


def load_config(
    seeds_path: Path | None = None,
    settings: Settings | None = None,
) -> tuple[Settings, SeedJobsConfig]:
    """Load all configuration.

    Returns:
        Tuple of (Settings, SeedJobsConfig)
    """
    settings = settings or Settings()
    seeds_path = seeds_path or Path(settings.seeds_path)
    seeds = load_seeds_config(seeds_path)
    if settings.strict_status:
        check_seed_statuses(seeds, seeds_path)

    return settings, seeds
