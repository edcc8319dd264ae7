"""Unit tests for the StudyTracker orchestrator."""

import random
from datetime import datetime, timedelta

from eat_tracker.config import EatTrackerConfig, ScoringSettings
from eat_tracker.models.error_log import ErrorLogDTO
from eat_tracker.models.priority import UrgencyLevel
from eat_tracker.orchestrator import StudyTracker
from tests.mocks.factories import ErrorFactory
from tests.mocks.mock_store import MockErrorLogStore


def _tracker(store: MockErrorLogStore, config: EatTrackerConfig | None = None) -> StudyTracker:
    return StudyTracker(store, config, rng=random.Random(7))


class TestQueries:
    """Tests for read-only tracker queries."""

    def test_patterns(self, mock_store: MockErrorLogStore) -> None:
        patterns = _tracker(mock_store).get_patterns()

        assert [p.topic for p in patterns] == ["Preload vs Afterload", "Aldosterone"]
        assert mock_store.load_count == 1

    def test_priorities(self, mock_store: MockErrorLogStore, now: datetime) -> None:
        priorities = _tracker(mock_store).get_priorities(now)

        assert [p.rank for p in priorities] == [1, 2]
        assert priorities[0].urgency == UrgencyLevel.HIGH

    def test_each_call_reads_fresh_snapshot(
        self,
        mock_store: MockErrorLogStore,
        make_error: ErrorFactory,
        now: datetime,
    ) -> None:
        tracker = _tracker(mock_store)
        assert len(tracker.get_priorities(now)) == 2

        mock_store.errors.append(make_error(system="Endocrine", topic="DKA"))
        assert len(tracker.get_priorities(now)) == 3
        assert mock_store.load_count == 2

    def test_system_breakdown(self, mock_store: MockErrorLogStore, now: datetime) -> None:
        breakdown = _tracker(mock_store).get_system_breakdown(now)

        assert [(b.system_id, b.total_errors) for b in breakdown] == [
            ("sys-cardiovascular", 2),
            ("sys-renal-urinary", 1),
        ]
        assert len(_tracker(mock_store).get_system_breakdown(now, include_empty=True)) == 20

    def test_cognitive_stats_and_trends(self, mock_store: MockErrorLogStore, now: datetime) -> None:
        tracker = _tracker(mock_store)

        assert tracker.get_cognitive_level_stats().unclassified == 3
        assert sum(t.knowledge for t in tracker.get_error_trends(days=30, now=now)) == 3

    def test_empty_store(self, now: datetime) -> None:
        tracker = _tracker(MockErrorLogStore())

        assert tracker.get_patterns() == []
        assert tracker.get_priorities(now) == []
        assert tracker.get_spaced_reviews(now) == []
        assert tracker.get_current_plan() is None


class TestPlans:
    """Tests for plan generation and persistence."""

    def test_generate_plan_saves(self, mock_store: MockErrorLogStore, now: datetime) -> None:
        tracker = _tracker(mock_store)
        plan = tracker.generate_plan(exam_date=now + timedelta(days=20), now=now)

        assert mock_store.save_count == 1
        assert mock_store.plan == plan
        assert tracker.get_current_plan() == plan
        assert plan.days_until_exam == 21
        assert plan.topic_count == 2

    def test_regenerate_replaces_plan(self, mock_store: MockErrorLogStore, now: datetime) -> None:
        tracker = _tracker(mock_store)
        tracker.generate_plan(now=now)
        second = tracker.generate_plan(now=now + timedelta(days=1))

        assert mock_store.save_count == 2
        assert tracker.get_current_plan() == second

    def test_empty_store_plan(self, now: datetime) -> None:
        store = MockErrorLogStore()
        plan = _tracker(store).generate_plan(now=now)

        assert plan.blocks == []
        assert store.plan == plan

    def test_config_flows_to_scorer(self, mock_store: MockErrorLogStore, now: datetime) -> None:
        config = EatTrackerConfig(scoring=ScoringSettings(urgent_threshold=50.0))
        priorities = _tracker(mock_store, config).get_priorities(now)

        assert priorities[0].urgency == UrgencyLevel.URGENT
        assert _tracker(mock_store, config).config.scoring.urgent_threshold == 50.0


class TestReviews:
    """Tests for spaced review queries."""

    def test_spaced_reviews_cover_every_error(
        self,
        mock_store: MockErrorLogStore,
        sample_errors: list[ErrorLogDTO],
        now: datetime,
    ) -> None:
        reviews = _tracker(mock_store).get_spaced_reviews(now)

        assert sorted(r.error_id for r in reviews) == sorted(e.id for e in sample_errors)
        targets = [r.target_review_date for r in reviews]
        assert targets == sorted(targets)

    def test_due_reviews(self, mock_store: MockErrorLogStore, now: datetime) -> None:
        due = _tracker(mock_store).get_due_reviews(now)

        # Both cardio errors are older than their 1 and 2 day intervals.
        assert len(due) == 2
        assert all(r.target_review_date == now for r in due)
