"""eat_tracker - Error-log driven priority scoring and spaced-repetition study planning.

This package provides tools for:
- Aggregating logged exam-prep errors into topic patterns
- Reporting errors by exam-blueprint organ system
- Ranking topics by a multi-factor priority score
- Generating interleaved spaced-repetition study plans
- Timing single-item reviews around question-bank review dates

Example usage:
    from eat_tracker import JsonFileStore, StudyTracker

    tracker = StudyTracker(JsonFileStore("eat_tracker.json"))
    priorities = tracker.get_priorities()
    plan = tracker.generate_plan(exam_date="2025-06-01")
    for block in plan.blocks_for_day(1):
        print(block.topic, block.activity, block.why_scheduled)
"""

__version__ = "0.1.0"

# Orchestrator
from eat_tracker.config import EatTrackerConfig

# Implementations
from eat_tracker.infra.json_store import JsonFileStore

# Interfaces
from eat_tracker.interfaces.random_source import RandomSourceInterface
from eat_tracker.interfaces.storage import ErrorLogStoreInterface

# Models
from eat_tracker.models.error_log import ErrorLogDTO, ErrorType
from eat_tracker.models.plan import StudyBlockDTO, StudyPlanDTO
from eat_tracker.models.priority import PriorityScoreDTO, UrgencyLevel
from eat_tracker.orchestrator import StudyTracker

# Services
from eat_tracker.services.pattern_aggregator import PatternAggregator
from eat_tracker.services.priority_scorer import PriorityScorer
from eat_tracker.services.scheduler import StudyScheduler
from eat_tracker.services.spaced_review import SpacedReviewCalculator
from eat_tracker.services.system_analytics import SystemAnalyticsService

__all__ = [  # noqa: RUF022
    # Orchestrator
    "StudyTracker",
    "EatTrackerConfig",
    # Services
    "PatternAggregator",
    "SystemAnalyticsService",
    "PriorityScorer",
    "StudyScheduler",
    "SpacedReviewCalculator",
    # Implementations
    "JsonFileStore",
    # Interfaces
    "ErrorLogStoreInterface",
    "RandomSourceInterface",
    # Models
    "ErrorLogDTO",
    "ErrorType",
    "PriorityScoreDTO",
    "UrgencyLevel",
    "StudyBlockDTO",
    "StudyPlanDTO",
]
