"""Prefixed identifiers for board records."""

import uuid


def generate_id(prefix: str) -> str:
    """Return ``prefix`` followed by 16 random hex digits, e.g. ``job_1f3a...``."""
    return prefix + uuid.uuid4().hex[:16]
