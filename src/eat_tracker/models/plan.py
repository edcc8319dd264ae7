"""Study plan models for eat_tracker.

A plan is generated wholesale by the scheduler and replaced, never
patched, on regeneration.
"""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field

from eat_tracker.models.priority import UrgencyLevel

__all__ = [
    "ActivityType",
    "ErrorTypeStrategy",
    "StudyBlockDTO",
    "StudyPlanDTO",
]


class ActivityType(StrEnum):
    """Kind of study session."""

    RETRIEVAL = "retrieval"
    REVIEW = "review"
    PRACTICE = "practice"


class ErrorTypeStrategy(StrEnum):
    """Remediation strategy matched to the dominant error type."""

    KNOWLEDGE_REVIEW = "knowledge-review"
    PRACTICE_PROBLEMS = "practice-problems"
    STRATEGY_COACHING = "strategy-coaching"


class StudyBlockDTO(BaseModel, frozen=True):
    """One scheduled study session.

    Attributes:
        block_id: Deterministic block ID
        day: Day offset from plan start (1-14)
        scheduled_date: Calendar date of the session
        topic: Topic label
        system: System name
        system_id: Taxonomy id, if resolvable
        activity: Session activity
        duration: Minutes
        priority: Rank of the priority score this block came from
        priority_score: Composite score of that priority
        reasoning: Why this session happens on this day
        urgency: Urgency tier of the topic
        error_type_strategy: Strategy tag from the dominant error type
        why_scheduled: Plain-language reason the topic is in the plan
    """

    block_id: str
    day: int = Field(ge=1)
    scheduled_date: datetime
    topic: str
    system: str
    system_id: str | None = None
    activity: ActivityType
    duration: int = Field(gt=0)
    priority: int = Field(ge=1)
    priority_score: float = Field(ge=0.0, le=100.0)
    reasoning: str
    urgency: UrgencyLevel
    error_type_strategy: ErrorTypeStrategy
    why_scheduled: str = Field(min_length=1)


class StudyPlanDTO(BaseModel, frozen=True):
    """Generated study plan.

    Blocks are grouped by day ascending; within a day, higher-priority
    topics come first.
    """

    generated_at: datetime
    week_start: datetime
    exam_date: datetime | None = None
    days_until_exam: int | None = None
    blocks: list[StudyBlockDTO] = Field(default_factory=list)
    schema_version: int = Field(default=1)

    @property
    def topic_count(self) -> int:
        """Number of distinct topics scheduled."""
        return len({(b.system, b.topic) for b in self.blocks})

    @property
    def total_minutes(self) -> int:
        return sum(b.duration for b in self.blocks)

    def blocks_for_day(self, day: int) -> list[StudyBlockDTO]:
        """Blocks scheduled on a given day offset, in plan order."""
        return [b for b in self.blocks if b.day == day]
