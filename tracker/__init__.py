"""Job list core: the in-memory store and its demonstration entries."""

from tracker.seeds import seed_entries
from tracker.store import JobStore

__all__ = ["JobStore", "seed_entries"]
