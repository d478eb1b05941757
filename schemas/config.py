"""Configuration file schemas."""

from pydantic import Field

from .base import BaseSchema


# --- Seed Jobs Config ---


class SeedJobEntry(BaseSchema):
    """Single demonstration job entry."""

    title: str = Field(..., min_length=1)
    company: str = Field(..., min_length=1)
    status: str = "Wishlist"


def _default_seed_jobs() -> list[SeedJobEntry]:
    return [
        SeedJobEntry(title="Android Developer", company="Yodeck", status="Applied"),
        SeedJobEntry(
            title="Junior Software Engineer", company="Netcompany", status="Wishlist"
        ),
        SeedJobEntry(
            title="Backend Developer Intern", company="Intralot", status="Interview"
        ),
    ]


class SeedJobsConfig(BaseSchema):
    """Schema for seed_jobs.yaml.

    Entries are listed in the order they appear in a fresh store.
    """

    jobs: list[SeedJobEntry] = Field(default_factory=_default_seed_jobs)
