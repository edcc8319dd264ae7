"""Hashing utilities for eat_tracker.

Study block ids are derived from the block's content, so regenerating
a plan for the same day produces the same ids and plans can be diffed.
"""

import hashlib
from datetime import datetime
from typing import Any

__all__ = [
    "generate_block_id",
    "stable_hash",
]


def stable_hash(*parts: Any) -> str:
    """SHA256 hex digest of the pipe-joined string forms of parts."""
    return hashlib.sha256("|".join(str(p) for p in parts).encode("utf-8")).hexdigest()


def generate_block_id(system: str, topic: str, day: int, week_start: datetime) -> str:
    """Generate deterministic study block ID.

    Args:
        system: System name of the topic
        topic: Topic label
        day: Day offset within the plan (1-based)
        week_start: Plan start date

    Returns:
        First 16 hex characters of the block hash
    """
    return stable_hash("block", system, topic, day, week_start.date().isoformat())[:16]
