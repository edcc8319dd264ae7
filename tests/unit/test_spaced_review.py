"""Unit tests for the spaced review calculator."""

from datetime import datetime, timedelta

import pytest

from eat_tracker.models.error_log import Confidence, ErrorType
from eat_tracker.models.review import SpacedReviewDTO
from eat_tracker.services.spaced_review import SpacedReviewCalculator, confidence_factor
from tests.mocks.factories import ErrorFactory


def _review(error_id: str, target: datetime) -> SpacedReviewDTO:
    return SpacedReviewDTO(
        error_id=error_id,
        last_seen=target - timedelta(days=3),
        target_review_date=target,
        review_reason="Standard spaced review",
    )


class TestConfidenceFactor:
    """Tests for confidence normalization."""

    @pytest.mark.parametrize(
        ("confidence", "expected"),
        [
            (Confidence.GUESSED, 0.0),
            (Confidence.ELIMINATED, 1 / 3),
            (Confidence.CONFIDENT, 2 / 3),
            (Confidence.CERTAIN, 1.0),
        ],
    )
    def test_factor(
        self,
        make_error: ErrorFactory,
        confidence: Confidence,
        expected: float,
    ) -> None:
        assert confidence_factor(make_error(confidence=confidence)) == pytest.approx(expected)


class TestStandardInterval:
    """Tests for reviews without a question-bank date."""

    @pytest.mark.parametrize(
        ("confidence", "error_type", "days", "reason"),
        [
            (
                Confidence.GUESSED,
                ErrorType.KNOWLEDGE,
                1,
                "Urgent review needed (low confidence)",
            ),
            (
                Confidence.ELIMINATED,
                ErrorType.REASONING,
                2,
                "Short-interval review (building retention)",
            ),
            (Confidence.CONFIDENT, ErrorType.PROCESS, 3, "Standard spaced review"),
            (
                Confidence.CERTAIN,
                ErrorType.REASONING,
                7,
                "Long-interval review (high confidence)",
            ),
            (
                Confidence.CERTAIN,
                ErrorType.KNOWLEDGE,
                5,
                "Long-interval review (high confidence)",
            ),
            (
                Confidence.CERTAIN,
                ErrorType.TIME,
                9,
                "Long-interval review (high confidence)",
            ),
        ],
    )
    def test_interval_and_reason(
        self,
        make_error: ErrorFactory,
        now: datetime,
        confidence: Confidence,
        error_type: ErrorType,
        days: int,
        reason: str,
    ) -> None:
        error = make_error(confidence=confidence, error_type=error_type)
        review = SpacedReviewCalculator().generate_spaced_review(error, now)

        assert review.target_review_date == now + timedelta(days=days)
        assert review.review_reason == reason
        assert review.error_id == error.id
        assert review.last_seen == error.timestamp
        assert review.next_source_review is None

    def test_older_error_gets_longer_interval(
        self,
        make_error: ErrorFactory,
        now: datetime,
    ) -> None:
        error = make_error(
            days_ago=3, confidence=Confidence.CONFIDENT, error_type=ErrorType.PROCESS
        )
        target = SpacedReviewCalculator().calculate_target_review_date(error, now=now)
        assert target == error.timestamp + timedelta(days=4)

    def test_never_in_the_past(self, make_error: ErrorFactory, now: datetime) -> None:
        error = make_error(days_ago=10)
        target = SpacedReviewCalculator().calculate_target_review_date(error, now=now)
        assert target == now

    def test_explicit_factor(self, make_error: ErrorFactory, now: datetime) -> None:
        error = make_error(confidence=Confidence.GUESSED, error_type=ErrorType.REASONING)
        target = SpacedReviewCalculator().calculate_target_review_date(error, 0.9, now)
        assert target == now + timedelta(days=7)


class TestSourceReviewDate:
    """Tests for reviews timed against the question bank's own review."""

    def _error(self, make_error: ErrorFactory, now: datetime, days: int, **overrides: object):
        return make_error(
            external_question={
                "question_bank": "uworld",
                "next_review": now + timedelta(days=days),
            },
            **overrides,
        )

    def test_two_day_lead_for_distant_review(self, make_error: ErrorFactory, now: datetime) -> None:
        error = self._error(make_error, now, 10, confidence=Confidence.CERTAIN)
        review = SpacedReviewCalculator().generate_spaced_review(error, now)

        assert review.target_review_date == now + timedelta(days=8)
        assert review.review_reason == "Review before UWORLD shows it again (10d)"
        assert review.next_source_review == now + timedelta(days=10)

    def test_one_day_lead_for_near_review(self, make_error: ErrorFactory, now: datetime) -> None:
        error = self._error(make_error, now, 5, confidence=Confidence.CONFIDENT)
        target = SpacedReviewCalculator().calculate_target_review_date(error, now=now)
        assert target == now + timedelta(days=4)

    def test_low_confidence_halves_lead(self, make_error: ErrorFactory, now: datetime) -> None:
        distant = self._error(make_error, now, 10, confidence=Confidence.GUESSED)
        near = self._error(make_error, now, 3, confidence=Confidence.ELIMINATED)
        calculator = SpacedReviewCalculator()

        assert calculator.calculate_target_review_date(distant, now=now) == now + timedelta(days=9)
        assert calculator.calculate_target_review_date(near, now=now) == now + timedelta(days=3)

    def test_past_source_review_floors_at_now(
        self,
        make_error: ErrorFactory,
        now: datetime,
    ) -> None:
        error = self._error(make_error, now, -2, confidence=Confidence.CERTAIN)
        assert SpacedReviewCalculator().calculate_target_review_date(error, now=now) == now


class TestReviewCollections:
    """Tests for batch generation and filtering."""

    def test_generate_sorted_by_target(self, make_error: ErrorFactory, now: datetime) -> None:
        errors = [
            make_error(confidence=Confidence.CERTAIN, error_type=ErrorType.REASONING),
            make_error(confidence=Confidence.GUESSED),
            make_error(confidence=Confidence.ELIMINATED, error_type=ErrorType.REASONING),
        ]
        reviews = SpacedReviewCalculator().generate_spaced_reviews(errors, now)

        assert [r.error_id for r in reviews] == [errors[1].id, errors[2].id, errors[0].id]

    def test_generate_empty(self, now: datetime) -> None:
        assert SpacedReviewCalculator().generate_spaced_reviews([], now) == []

    def test_due_reviews_until_end_of_today(self, now: datetime) -> None:
        reviews = [
            _review("overdue", now - timedelta(days=2)),
            _review("now", now),
            _review("tonight", now.replace(hour=23, minute=59)),
            _review("tomorrow", now + timedelta(days=1)),
        ]
        due = SpacedReviewCalculator().get_due_reviews(reviews, now)
        assert [r.error_id for r in due] == ["overdue", "now", "tonight"]

    def test_upcoming_reviews(self, now: datetime) -> None:
        reviews = [
            _review("now", now),
            _review("soon", now + timedelta(days=2)),
            _review("edge", now + timedelta(days=7)),
            _review("later", now + timedelta(days=8)),
        ]
        calculator = SpacedReviewCalculator()

        assert [r.error_id for r in calculator.get_upcoming_reviews(reviews, now=now)] == [
            "soon",
            "edge",
        ]
        assert [
            r.error_id for r in calculator.get_upcoming_reviews(reviews, days_ahead=10, now=now)
        ] == ["soon", "edge", "later"]

    def test_group_by_date(self, now: datetime) -> None:
        reviews = [
            _review("a", now),
            _review("b", now + timedelta(hours=2)),
            _review("c", now + timedelta(days=1)),
        ]
        grouped = SpacedReviewCalculator().group_reviews_by_date(reviews)

        assert list(grouped) == ["2025-03-10", "2025-03-11"]
        assert [r.error_id for r in grouped["2025-03-10"]] == ["a", "b"]
