"""Persistence: key-value stores, the job list codec and the snapshot writer."""

from storage.codec import decode_jobs, encode_jobs
from storage.kv import FileKeyValueStore, InMemoryKeyValueStore, KeyValueStore
from storage.repository import DEFAULT_JOBS_KEY, JobRepository, KeyValueJobRepository
from storage.writer import SnapshotWriter, WriterStats

__all__ = [
    "encode_jobs",
    "decode_jobs",
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "FileKeyValueStore",
    "JobRepository",
    "KeyValueJobRepository",
    "DEFAULT_JOBS_KEY",
    "SnapshotWriter",
    "WriterStats",
]
