"""Interface contracts for eat_tracker.

This module exports all Protocol-based interfaces for dependency injection.
"""

from eat_tracker.interfaces.random_source import RandomSourceInterface
from eat_tracker.interfaces.storage import ErrorLogStoreInterface

__all__ = [
    "ErrorLogStoreInterface",
    "RandomSourceInterface",
]
