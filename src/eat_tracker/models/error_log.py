"""Error log models for eat_tracker.

These models represent individual missed questions logged by the
student. They are the only input the scoring pipeline reads.
"""

from datetime import datetime
from enum import IntEnum, StrEnum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from eat_tracker.blueprint.question_banks import QuestionBank
from eat_tracker.blueprint.systems import find_system, migrate_legacy_system_name
from eat_tracker.utils.dates import ensure_aware

__all__ = [
    "CognitiveLevel",
    "Confidence",
    "ErrorLogDTO",
    "ErrorType",
    "ExternalQuestionDTO",
]


class ErrorType(StrEnum):
    """Diagnosis of why a question was missed."""

    KNOWLEDGE = "knowledge"
    REASONING = "reasoning"
    PROCESS = "process"
    TIME = "time"


class Confidence(IntEnum):
    """Ordinal confidence the student had in the (wrong) answer."""

    GUESSED = 1
    ELIMINATED = 2
    CONFIDENT = 3
    CERTAIN = 4

    @classmethod
    def from_legacy(cls, value: Any) -> "Confidence":
        """Hydrate a stored confidence value.

        Older logs stored the level name ("guessed"), newer ones the
        1-4 number. Anything else is rejected.

        Raises:
            ValueError: If the value is not a known confidence level
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip()
            if key.isdigit():
                return cls(int(key))
            try:
                return cls[key.upper()]
            except KeyError:
                raise ValueError(f"Unknown confidence level: {value!r}") from None
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(value)
        raise ValueError(f"Unknown confidence level: {value!r}")


class CognitiveLevel(StrEnum):
    """Whether an error reflects recall or application failure."""

    FIRST_ORDER = "first-order"
    HIGHER_ORDER = "higher-order"


class ExternalQuestionDTO(BaseModel, frozen=True):
    """Metadata for an error imported from an external question bank.

    Attributes:
        question_bank: Source platform
        question_id: Platform question ID
        difficulty: Item difficulty on a 1 (easy) - 5 (hard) scale
        percent_correct: National percent of test takers answering correctly
        next_review: When the platform itself will show the item again
    """

    question_bank: QuestionBank = QuestionBank.OTHER
    question_id: str | None = None
    difficulty: int | None = Field(default=None, ge=1, le=5)
    percent_correct: float | None = Field(default=None, ge=0.0, le=100.0)
    next_review: datetime | None = None

    @field_validator("question_bank", mode="before")
    @classmethod
    def _normalize_bank(cls, value: Any) -> Any:
        if isinstance(value, str) and not isinstance(value, QuestionBank):
            return QuestionBank.normalize(value)
        return value

    @field_validator("next_review")
    @classmethod
    def _aware_review(cls, value: datetime | None) -> datetime | None:
        return ensure_aware(value) if value is not None else None


class ErrorLogDTO(BaseModel, frozen=True):
    """One missed question.

    Immutable once logged. Timestamps are hydrated into aware datetimes
    here, and legacy confidence strings are migrated here, so nothing
    downstream deals with storage formats.

    Attributes:
        id: Unique error ID
        timestamp: When the question was missed
        description: Free-text description
        system: Organ system display or legacy name (grouping key)
        system_id: Taxonomy id (e.g. "sys-cardiovascular"), if known
        topic: Topic label within the system
        error_type: Error diagnosis
        confidence: Confidence in the wrong answer
        cognitive_level: First-order vs higher-order, if tagged
        next_steps: Remediation notes
        tags: Free-form tags
        external_question: Source platform metadata, if imported
        schema_version: Schema version for forward compatibility
    """

    id: str
    timestamp: datetime
    description: str = ""
    system: str
    system_id: str | None = None
    topic: str
    error_type: ErrorType
    confidence: Confidence
    cognitive_level: CognitiveLevel | None = None
    next_steps: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    external_question: ExternalQuestionDTO | None = None
    schema_version: int = Field(default=1)

    @field_validator("confidence", mode="before")
    @classmethod
    def _migrate_confidence(cls, value: Any) -> Confidence:
        return Confidence.from_legacy(value)

    @field_validator("timestamp")
    @classmethod
    def _aware_timestamp(cls, value: datetime) -> datetime:
        return ensure_aware(value)

    @property
    def topic_key(self) -> tuple[str, str]:
        """(system, topic) grouping key."""
        return (self.system, self.topic)

    @property
    def resolved_system_id(self) -> str | None:
        """Taxonomy id from the explicit id, the legacy name, or an alias."""
        if self.system_id:
            return self.system_id
        legacy = migrate_legacy_system_name(self.system)
        if legacy:
            return legacy
        found = find_system(self.system)
        return found.id if found else None

    @property
    def is_malformed(self) -> bool:
        """True when the grouping fields are blank."""
        return not self.topic.strip() or not self.system.strip()
