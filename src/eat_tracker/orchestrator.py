"""StudyTracker orchestrator for eat_tracker.

This module provides the main entry point for the eat_tracker package,
wiring the error-log store to the analysis and scheduling services.
"""

from datetime import date, datetime

from eat_tracker.config import EatTrackerConfig
from eat_tracker.interfaces.random_source import RandomSourceInterface
from eat_tracker.interfaces.storage import ErrorLogStoreInterface
from eat_tracker.logging import get_logger
from eat_tracker.models.error_log import ErrorLogDTO
from eat_tracker.models.pattern import (
    CognitiveLevelStatsDTO,
    ErrorTrendDTO,
    SystemBreakdownDTO,
    TopicPatternDTO,
)
from eat_tracker.models.plan import StudyPlanDTO
from eat_tracker.models.priority import PriorityScoreDTO
from eat_tracker.models.review import SpacedReviewDTO
from eat_tracker.services.pattern_aggregator import PatternAggregator
from eat_tracker.services.priority_scorer import PriorityScorer
from eat_tracker.services.scheduler import StudyScheduler
from eat_tracker.services.spaced_review import SpacedReviewCalculator
from eat_tracker.services.system_analytics import SystemAnalyticsService
from eat_tracker.utils.dates import resolve_now

__all__ = ["StudyTracker"]

logger = get_logger(__name__)


class StudyTracker:
    """Main orchestrator for the eat_tracker pipeline.

    Every call reads a fresh snapshot of the error log from the store;
    nothing is cached between calls.

    Example:
        tracker = StudyTracker(JsonFileStore("eat_tracker.json"))
        for priority in tracker.get_priorities()[:5]:
            print(priority.rank, priority.topic, priority.reason_chip)
        plan = tracker.generate_plan(exam_date="2025-06-01")
    """

    def __init__(
        self,
        store: ErrorLogStoreInterface,
        config: EatTrackerConfig | None = None,
        rng: RandomSourceInterface | None = None,
    ) -> None:
        """Initialize tracker.

        Args:
            store: Error-log and plan persistence
            config: Settings (default: loaded from environment / .env)
            rng: Shuffle source for plan interleaving
        """
        self._store = store
        self._config = config or EatTrackerConfig()

        self._aggregator = PatternAggregator()
        self._analytics = SystemAnalyticsService(self._config.analytics)
        self._scorer = PriorityScorer(self._config.scoring)
        self._scheduler = StudyScheduler(self._config.scheduler, self._scorer, rng)
        self._reviews = SpacedReviewCalculator()

    @property
    def config(self) -> EatTrackerConfig:
        return self._config

    def _load(self) -> list[ErrorLogDTO]:
        return self._store.load_errors()

    def get_patterns(self) -> list[TopicPatternDTO]:
        """Topic patterns, most errors first."""
        return self._aggregator.analyze(self._load())

    def get_priorities(self, now: datetime | None = None) -> list[PriorityScoreDTO]:
        """All topics ranked by priority score."""
        errors = self._load()
        patterns = self._aggregator.analyze(errors)
        return self._scorer.calculate_all_priorities(patterns, errors, now)

    def get_system_breakdown(
        self,
        now: datetime | None = None,
        include_empty: bool = False,
    ) -> list[SystemBreakdownDTO]:
        """Per-system error report, most errors first."""
        return self._analytics.analyze_by_system(self._load(), now, include_empty)

    def get_cognitive_level_stats(self) -> CognitiveLevelStatsDTO:
        return self._analytics.get_cognitive_level_stats(self._load())

    def get_error_trends(
        self,
        days: int = 30,
        now: datetime | None = None,
    ) -> list[ErrorTrendDTO]:
        return self._aggregator.get_error_trends(self._load(), days, now)

    def generate_plan(
        self,
        exam_date: datetime | date | str | None = None,
        now: datetime | None = None,
    ) -> StudyPlanDTO:
        """Generate a study plan and persist it, replacing the previous one.

        Args:
            exam_date: Optional exam date (unparseable input is ignored)
            now: Reference time (default: now)

        Returns:
            The new StudyPlanDTO
        """
        now = resolve_now(now)
        errors = self._load()
        patterns = self._aggregator.analyze(errors)
        plan = self._scheduler.generate_study_plan(patterns, errors, exam_date, now)
        self._store.save_plan(plan)
        logger.info(
            "plan_saved",
            error_count=len(errors),
            pattern_count=len(patterns),
            block_count=len(plan.blocks),
        )
        return plan

    def get_current_plan(self) -> StudyPlanDTO | None:
        """The last persisted plan, if any."""
        return self._store.load_plan()

    def get_spaced_reviews(self, now: datetime | None = None) -> list[SpacedReviewDTO]:
        """One ideal review per logged error, soonest first."""
        return self._reviews.generate_spaced_reviews(self._load(), now)

    def get_due_reviews(self, now: datetime | None = None) -> list[SpacedReviewDTO]:
        """Reviews due by the end of today."""
        now = resolve_now(now)
        reviews = self._reviews.generate_spaced_reviews(self._load(), now)
        return self._reviews.get_due_reviews(reviews, now)
