"""Internal TopicPattern accumulator for eat_tracker.

This module contains the mutable TopicPattern used while folding
error logs into per-topic statistics.
"""

from dataclasses import dataclass, field
from datetime import datetime

from eat_tracker.models.error_log import ErrorLogDTO, ErrorType
from eat_tracker.models.pattern import TopicPatternDTO
from eat_tracker.utils.confidence import confidence_to_ordinal

__all__ = [
    "TopicPattern",
]


@dataclass
class TopicPattern:
    """Mutable per-topic accumulator.

    Only lives for the duration of one aggregation pass; converted to
    an immutable TopicPatternDTO at the end.
    """

    topic: str
    system: str
    last_seen: datetime
    system_id: str | None = None
    error_count: int = 0
    error_types: dict[ErrorType, int] = field(
        default_factory=lambda: {error_type: 0 for error_type in ErrorType}
    )
    confidence_total: int = 0

    @classmethod
    def start(cls, error: ErrorLogDTO) -> "TopicPattern":
        """Create an empty accumulator keyed on the error's topic."""
        return cls(
            topic=error.topic,
            system=error.system,
            system_id=error.resolved_system_id,
            last_seen=error.timestamp,
        )

    def add_error(self, error: ErrorLogDTO) -> None:
        """Fold one error into the running totals."""
        self.error_count += 1
        self.error_types[error.error_type] += 1
        self.confidence_total += confidence_to_ordinal(error.confidence)
        if error.timestamp > self.last_seen:
            self.last_seen = error.timestamp
        if self.system_id is None:
            self.system_id = error.resolved_system_id

    @property
    def average_confidence(self) -> float:
        if self.error_count == 0:
            return 0.0
        return self.confidence_total / self.error_count

    def to_dto(self) -> TopicPatternDTO:
        """Convert to immutable DTO."""
        return TopicPatternDTO(
            topic=self.topic,
            system=self.system,
            system_id=self.system_id,
            error_count=self.error_count,
            error_types=dict(self.error_types),
            average_confidence=self.average_confidence,
            last_seen=self.last_seen,
        )
