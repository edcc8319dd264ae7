"""Utility functions for eat_tracker.

This module contains internal utility functions.
"""

from eat_tracker.utils.dates import (
    days_between,
    ensure_aware,
    parse_datetime,
    resolve_now,
    start_of_day,
    utc_now,
)
from eat_tracker.utils.hashing import generate_block_id, stable_hash

__all__ = [
    "days_between",
    "ensure_aware",
    "generate_block_id",
    "parse_datetime",
    "resolve_now",
    "stable_hash",
    "start_of_day",
    "utc_now",
]
