import json
from pathlib import Path

import pytest

from core.errors import DecodeError
from schemas.job_entry import JobEntry
from storage.kv import FileKeyValueStore, InMemoryKeyValueStore
from storage.repository import KeyValueJobRepository
from tracker.store import JobStore


def test_file_store_round_trips_values(tmp_path: Path) -> None:
    path = tmp_path / "prefs" / "jobtracker_prefs.json"
    store = FileKeyValueStore(path)

    assert store.get("jobs_json") is None
    store.set("jobs_json", "[]")
    store.set("theme", "dark")

    reopened = FileKeyValueStore(path)
    assert reopened.get("jobs_json") == "[]"
    assert json.loads(path.read_text()) == {"jobs_json": "[]", "theme": "dark"}
    assert not path.with_name(path.name + ".tmp").exists()


def test_file_store_delete(tmp_path: Path) -> None:
    store = FileKeyValueStore(tmp_path / "prefs.json")
    store.set("jobs_json", "[]")

    store.delete("jobs_json")
    store.delete("jobs_json")

    assert store.get("jobs_json") is None


def test_file_store_rejects_corrupt_file_on_read(tmp_path: Path) -> None:
    path = tmp_path / "prefs.json"
    path.write_text("{oops")
    store = FileKeyValueStore(path)

    with pytest.raises(DecodeError):
        store.get("jobs_json")


def test_file_store_replaces_corrupt_file_on_write(tmp_path: Path) -> None:
    path = tmp_path / "prefs.json"
    path.write_text("[1, 2]")
    store = FileKeyValueStore(path)

    store.set("jobs_json", "[]")

    assert store.get("jobs_json") == "[]"


def test_repository_load_returns_none_when_absent_or_blank() -> None:
    kv = InMemoryKeyValueStore()
    repo = KeyValueJobRepository(kv, background=False)

    assert repo.load() is None
    kv.set("jobs_json", "")
    assert repo.load() is None


def test_repository_saves_under_configured_key() -> None:
    kv = InMemoryKeyValueStore()
    repo = KeyValueJobRepository(kv, key="my_jobs", background=False)

    repo.save([JobEntry(title="Eng", company="Acme")])

    assert json.loads(kv.get("my_jobs")) == [
        {"title": "Eng", "company": "Acme", "status": "Wishlist"}
    ]
    assert kv.get("jobs_json") is None


def test_repository_load_coerces_unknown_status_when_strict() -> None:
    kv = InMemoryKeyValueStore({"jobs_json": '[{"title": "Eng", "company": "Acme", "status": "Ghosted"}]'})

    assert KeyValueJobRepository(kv, strict_status=True).load()[0].status == "Wishlist"
    assert KeyValueJobRepository(kv, strict_status=False).load()[0].status == "Ghosted"


class FlakyStore(InMemoryKeyValueStore):
    def __init__(self, failures: int) -> None:
        super().__init__()
        self.failures = failures
        self.attempts = 0

    def set(self, key: str, value: str) -> None:
        self.attempts += 1
        if self.failures:
            self.failures -= 1
            raise OSError("storage unavailable")
        super().set(key, value)


def test_repository_retries_transient_io_errors() -> None:
    kv = FlakyStore(failures=1)
    repo = KeyValueJobRepository(kv, background=False, max_attempts=2)

    repo.save([JobEntry(title="Eng", company="Acme")])

    assert kv.attempts == 2
    assert kv.get("jobs_json") is not None


def test_repository_survives_persistent_io_errors() -> None:
    kv = FlakyStore(failures=5)
    repo = KeyValueJobRepository(kv, background=False, max_attempts=1)

    repo.save([JobEntry(title="Eng", company="Acme")])

    assert kv.get("jobs_json") is None
    assert repo.writer.stats.failed == 1


def test_background_repository_flushes_latest_state(tmp_path: Path) -> None:
    kv = FileKeyValueStore(tmp_path / "prefs.json")
    repo = KeyValueJobRepository(kv, background=True)
    entries: list[JobEntry] = []

    for i in range(20):
        entries.insert(0, JobEntry(title=f"Job {i}", company="Acme"))
        repo.save(list(entries))
    repo.close(5)

    saved = json.loads(kv.get("jobs_json"))
    assert len(saved) == 20
    assert saved[0]["title"] == "Job 19"


def test_boot_falls_back_to_demo_entries_on_undecodable_file(tmp_path: Path) -> None:
    path = tmp_path / "prefs.json"
    path.write_bytes(b'{"jobs_json": "\xff\xfe"}')
    kv = FileKeyValueStore(path)

    with pytest.raises(DecodeError):
        kv.get("jobs_json")

    store = JobStore.boot(KeyValueJobRepository(kv, background=False))

    assert [e.company for e in store.entries] == ["Yodeck", "Netcompany", "Intralot"]

    store.add("Engineer", "Acme")
    assert len(json.loads(kv.get("jobs_json"))) == 4
