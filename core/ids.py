"""ID generation and hashing utilities."""

from __future__ import annotations

import hashlib
import uuid


def generate_entry_id() -> str:
    """Generate a stable identifier for a job entry.

    Identifiers live only in memory; they are regenerated on every load.
    """
    return uuid.uuid4().hex[:12]


def content_hash(content: str | bytes) -> str:
    """Generate SHA-256 hash of content.

    Returns first 16 characters for brevity while maintaining uniqueness.
    """
    if isinstance(content, str):
        content = content.encode("utf-8")
    return hashlib.sha256(content).hexdigest()[:16]
