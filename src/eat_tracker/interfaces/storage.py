"""Storage interface for eat_tracker.

This module defines the Protocol for the persistence collaborator
that owns error logs and the current study plan. The scoring core
never writes error logs; it only reads snapshots.
"""

from typing import Protocol, runtime_checkable

from eat_tracker.models.error_log import ErrorLogDTO
from eat_tracker.models.plan import StudyPlanDTO

__all__ = [
    "ErrorLogStoreInterface",
]


@runtime_checkable
class ErrorLogStoreInterface(Protocol):
    """Contract for error-log and plan persistence.

    Implementations are responsible for hydrating stored records into
    valid ErrorLogDTO values (aware datetimes, migrated confidence).
    """

    def load_errors(self) -> list[ErrorLogDTO]:
        """Load a snapshot of all logged errors.

        Returns:
            Error logs; records that fail validation are excluded
        """
        ...

    def save_plan(self, plan: StudyPlanDTO) -> None:
        """Persist a study plan, replacing any previous one.

        Args:
            plan: Plan to store
        """
        ...

    def load_plan(self) -> StudyPlanDTO | None:
        """Load the current study plan.

        Returns:
            StudyPlanDTO if one is stored, None otherwise
        """
        ...
