"""Randomness interface for eat_tracker.

This module defines the Protocol the scheduler uses to shuffle
same-priority blocks. random.Random satisfies it, so tests can pass
a seeded instance for reproducible plans.
"""

from collections.abc import MutableSequence
from typing import Any, Protocol, runtime_checkable

__all__ = [
    "RandomSourceInterface",
]


@runtime_checkable
class RandomSourceInterface(Protocol):
    """Contract for an injectable source of shuffling."""

    def shuffle(self, x: MutableSequence[Any]) -> None:
        """Shuffle a sequence in place.

        Args:
            x: Sequence to reorder
        """
        ...
