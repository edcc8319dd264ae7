"""Public DTO models for eat_tracker.

This module exports all public data transfer objects.
"""

from eat_tracker.models.error_log import (
    CognitiveLevel,
    Confidence,
    ErrorLogDTO,
    ErrorType,
    ExternalQuestionDTO,
)
from eat_tracker.models.pattern import (
    CognitiveLevelStatsDTO,
    ErrorTrendDTO,
    SystemBreakdownDTO,
    SystemTrendDTO,
    TopicPatternDTO,
    TrendDirection,
)
from eat_tracker.models.plan import (
    ActivityType,
    ErrorTypeStrategy,
    StudyBlockDTO,
    StudyPlanDTO,
)
from eat_tracker.models.priority import PriorityFactors, PriorityScoreDTO, UrgencyLevel
from eat_tracker.models.review import SpacedReviewDTO

__all__ = [
    "ActivityType",
    "CognitiveLevel",
    "CognitiveLevelStatsDTO",
    "Confidence",
    "ErrorLogDTO",
    "ErrorTrendDTO",
    "ErrorType",
    "ErrorTypeStrategy",
    "ExternalQuestionDTO",
    "PriorityFactors",
    "PriorityScoreDTO",
    "SpacedReviewDTO",
    "StudyBlockDTO",
    "StudyPlanDTO",
    "SystemBreakdownDTO",
    "SystemTrendDTO",
    "TopicPatternDTO",
    "TrendDirection",
    "UrgencyLevel",
]
