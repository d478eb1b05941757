import os
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog

from storage.kv import InMemoryKeyValueStore
from storage.repository import KeyValueJobRepository
from tracker.store import JobStore


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    for name in list(os.environ):
        if name.startswith("JOB_TRACKER_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    yield
    structlog.reset_defaults()


@pytest.fixture
def kv() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def repository(kv: InMemoryKeyValueStore) -> Iterator[KeyValueJobRepository]:
    repo = KeyValueJobRepository(kv, background=False, max_attempts=1)
    yield repo
    repo.close()


@pytest.fixture
def store(repository: KeyValueJobRepository) -> JobStore:
    return JobStore.boot(repository)
