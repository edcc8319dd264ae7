"""Priority models for eat_tracker.

These models carry the ranked output of the priority scorer.
"""

from enum import StrEnum

from pydantic import BaseModel, Field

__all__ = [
    "PriorityFactors",
    "PriorityScoreDTO",
    "UrgencyLevel",
]


class UrgencyLevel(StrEnum):
    """Urgency tier derived from the composite score."""

    URGENT = "urgent"
    HIGH = "high"
    MODERATE = "moderate"
    LOW = "low"


class PriorityFactors(BaseModel, frozen=True):
    """The seven normalized sub-scores behind a priority score.

    Attributes:
        frequency: Log-scaled error count relative to the busiest topic
        exam_weight: Blueprint weight of the topic's system
        recency: Exponential decay from the last error
        low_confidence: Mean lack of confidence across the topic's errors
        time_pressure: Share of time-pressure errors
        difficulty: Mean item difficulty from national percent-correct
        performance_gap: Mean share of peers who answered correctly
    """

    frequency: float = Field(default=0.0, ge=0.0, le=1.0)
    exam_weight: float = Field(default=0.0, ge=0.0, le=1.0)
    recency: float = Field(default=0.0, ge=0.0, le=1.0)
    low_confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    time_pressure: float = Field(default=0.0, ge=0.0, le=1.0)
    difficulty: float = Field(default=0.0, ge=0.0, le=1.0)
    performance_gap: float = Field(default=0.0, ge=0.0, le=1.0)


class PriorityScoreDTO(BaseModel, frozen=True):
    """Ranked urgency record for one topic.

    Attributes:
        topic: Topic label
        system: System name
        system_id: Taxonomy id, if resolvable
        score: Composite score (0-100)
        rank: 1-based position after sorting all topics (0 before ranking)
        urgency: Urgency tier
        reasons: Plain-language contributing reasons, strongest first
        reason_chip: First three reasons joined with " + "
        source_multiplier: Source-quality multiplier applied to the score
        factors: Underlying factor breakdown
    """

    topic: str
    system: str
    system_id: str | None = None
    score: float = Field(ge=0.0, le=100.0)
    rank: int = Field(default=0, ge=0)
    urgency: UrgencyLevel
    reasons: list[str] = Field(default_factory=list)
    reason_chip: str = ""
    source_multiplier: float = Field(default=1.0, ge=0.0, le=1.0)
    factors: PriorityFactors

    @property
    def key(self) -> tuple[str, str]:
        """(system, topic) identity of the scored topic."""
        return (self.system, self.topic)
