"""Single-flight snapshot writer."""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass

import structlog

from core.ids import content_hash

logger = structlog.get_logger()


@dataclass
class WriterStats:
    """Counters for the snapshot writer."""

    submitted: int = 0
    written: int = 0
    superseded: int = 0
    skipped: int = 0
    failed: int = 0


class SnapshotWriter:
    """Writes full-state snapshots one at a time, newest wins.

    A snapshot submitted while an earlier one is still pending replaces it,
    so the last successful write is always the last submitted snapshot.
    Consecutive identical snapshots are written once.

    With ``background=False`` every submit writes inline.
    """

    def __init__(
        self,
        write: Callable[[str], None],
        background: bool = True,
        name: str = "snapshot-writer",
    ):
        self._write = write
        self.background = background
        self.name = name
        self.stats = WriterStats()

        self._cond = threading.Condition()
        self._pending: str | None = None
        self._busy = False
        self._closed = False
        self._last_digest: str | None = None
        self._thread: threading.Thread | None = None

    def submit(self, payload: str) -> None:
        """Queue payload for writing and return immediately."""
        with self._cond:
            if self._closed:
                raise RuntimeError(f"{self.name} is closed")
            self.stats.submitted += 1

            if not self.background:
                self._busy = True
            else:
                if self._pending is not None:
                    self.stats.superseded += 1
                    logger.debug("Snapshot superseded", writer=self.name)
                self._pending = payload
                self._ensure_worker()
                self._cond.notify_all()
                return

        try:
            self._write_once(payload)
        finally:
            with self._cond:
                self._busy = False
                self._cond.notify_all()

    def flush(self, timeout: float | None = None) -> bool:
        """Wait until no write is pending or running.

        Returns:
            False if the timeout expired first
        """
        with self._cond:
            return self._cond.wait_for(
                lambda: self._pending is None and not self._busy, timeout
            )

    def close(self, timeout: float | None = None) -> None:
        """Flush outstanding work and stop the worker thread."""
        self.flush(timeout)
        with self._cond:
            self._closed = True
            self._cond.notify_all()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    @property
    def closed(self) -> bool:
        return self._closed

    def _ensure_worker(self) -> None:
        if self._thread is None or not self._thread.is_alive():
            self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
            self._thread.start()

    def _run(self) -> None:
        while True:
            with self._cond:
                self._cond.wait_for(lambda: self._pending is not None or self._closed)
                if self._pending is None:
                    return
                payload, self._pending = self._pending, None
                self._busy = True

            try:
                self._write_once(payload)
            finally:
                with self._cond:
                    self._busy = False
                    self._cond.notify_all()

    def _write_once(self, payload: str) -> None:
        digest = content_hash(payload)
        if digest == self._last_digest:
            self.stats.skipped += 1
            return

        try:
            self._write(payload)
        except Exception as e:
            # In-memory state stays authoritative; the next submit retries.
            self.stats.failed += 1
            logger.error(
                "Snapshot write failed",
                writer=self.name,
                error=str(e),
                error_type=type(e).__name__,
            )
            return

        self._last_digest = digest
        self.stats.written += 1
        logger.debug("Snapshot written", writer=self.name, digest=digest)
