"""Service layer for eat_tracker.

This module exports the main service entry points.
"""

from eat_tracker.services.pattern_aggregator import PatternAggregator
from eat_tracker.services.priority_scorer import DOMINANT_TYPE_REASONS, PriorityScorer
from eat_tracker.services.scheduler import (
    INTERVAL_TEMPLATES,
    ScheduleInterval,
    StudyScheduler,
    describe_urgency,
)
from eat_tracker.services.spaced_review import SpacedReviewCalculator, confidence_factor
from eat_tracker.services.system_analytics import SystemAnalyticsService

__all__ = [
    "DOMINANT_TYPE_REASONS",
    "INTERVAL_TEMPLATES",
    "PatternAggregator",
    "PriorityScorer",
    "ScheduleInterval",
    "SpacedReviewCalculator",
    "StudyScheduler",
    "SystemAnalyticsService",
    "confidence_factor",
    "describe_urgency",
]
