"""Internal domain accumulators for eat_tracker."""

from eat_tracker.domain.system_breakdown import SystemBreakdown, classify_trend
from eat_tracker.domain.topic_pattern import TopicPattern

__all__ = [
    "SystemBreakdown",
    "TopicPattern",
    "classify_trend",
]
