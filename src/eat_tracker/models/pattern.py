"""Aggregate pattern models for eat_tracker.

These models are derived from error logs on every read and are
never persisted.
"""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field, model_validator

from eat_tracker.models.error_log import ErrorType

__all__ = [
    "CognitiveLevelStatsDTO",
    "ErrorTrendDTO",
    "SystemBreakdownDTO",
    "SystemTrendDTO",
    "TopicPatternDTO",
    "TrendDirection",
]


class TrendDirection(StrEnum):
    """Direction of a system's recent error trend."""

    IMPROVING = "improving"
    WORSENING = "worsening"
    STABLE = "stable"


def _empty_type_counts() -> dict[ErrorType, int]:
    return {error_type: 0 for error_type in ErrorType}


class TopicPatternDTO(BaseModel, frozen=True):
    """Error statistics for one (system, topic) pair.

    Attributes:
        topic: Topic label
        system: System name
        system_id: Taxonomy id, if resolvable
        error_count: Total errors logged for the topic
        error_types: Count per error type (all four always present)
        average_confidence: Mean confidence on a 0 (guessed) - 3 (certain) scale
        last_seen: Most recent error timestamp
    """

    topic: str
    system: str
    system_id: str | None = None
    error_count: int = Field(ge=0)
    error_types: dict[ErrorType, int] = Field(default_factory=_empty_type_counts)
    average_confidence: float = Field(default=0.0, ge=0.0, le=3.0)
    last_seen: datetime

    @model_validator(mode="after")
    def _check_counts(self) -> "TopicPatternDTO":
        missing = set(ErrorType) - set(self.error_types)
        if missing:
            raise ValueError(f"error_types missing {sorted(missing)}")
        if sum(self.error_types.values()) != self.error_count:
            raise ValueError("error_types must sum to error_count")
        return self

    @property
    def key(self) -> tuple[str, str]:
        """(system, topic) identity of the pattern."""
        return (self.system, self.topic)

    def dominant_error_type(self) -> tuple[ErrorType, float]:
        """Most frequent error type and its share of all errors.

        Ties resolve to the earlier type in declaration order.
        """
        dominant = ErrorType.KNOWLEDGE
        for error_type in ErrorType:
            if self.error_types[error_type] > self.error_types[dominant]:
                dominant = error_type
        if self.error_count == 0:
            return dominant, 0.0
        return dominant, self.error_types[dominant] / self.error_count


class SystemBreakdownDTO(BaseModel, frozen=True):
    """Per-organ-system error report.

    Cognitive-level percentages are computed over classified errors
    only; unclassified errors are counted separately.
    """

    system_id: str
    system_name: str
    total_errors: int = 0
    exam_weight: float
    exam_weight_percent: float

    first_order_errors: int = 0
    higher_order_errors: int = 0
    unclassified_errors: int = 0
    first_order_percent: float = 0.0
    higher_order_percent: float = 0.0

    knowledge_errors: int = 0
    reasoning_errors: int = 0
    process_errors: int = 0
    time_errors: int = 0

    recent_error_count: int = 0
    previous_error_count: int = 0
    trend_direction: TrendDirection = TrendDirection.STABLE
    trend_percent: float = 0.0


class SystemTrendDTO(BaseModel, frozen=True):
    """Error counts for one system on one calendar day."""

    system_id: str
    system_name: str
    date: str
    error_count: int = 0
    first_order_count: int = 0
    higher_order_count: int = 0


class CognitiveLevelStatsDTO(BaseModel, frozen=True):
    """Overall cognitive-level distribution."""

    first_order: int = 0
    higher_order: int = 0
    unclassified: int = 0
    first_order_percent: float = 0.0
    higher_order_percent: float = 0.0


class ErrorTrendDTO(BaseModel, frozen=True):
    """Error counts by type for one calendar day."""

    date: str
    knowledge: int = 0
    reasoning: int = 0
    process: int = 0
    time: int = 0
