"""Spaced review service for eat_tracker.

This module picks one ideal review date per error: just before the
source question bank shows the item again when that date is known,
otherwise a confidence-driven standard interval.
"""

import math
from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta

from eat_tracker.logging import get_logger
from eat_tracker.models.error_log import ErrorLogDTO, ErrorType
from eat_tracker.models.review import SpacedReviewDTO
from eat_tracker.utils.dates import days_between, resolve_now, start_of_day

__all__ = [
    "SpacedReviewCalculator",
    "confidence_factor",
]

logger = get_logger(__name__)


def confidence_factor(error: ErrorLogDTO) -> float:
    """Confidence normalized to 0 (guessed) .. 1 (certain)."""
    return (int(error.confidence) - 1) / 3


class SpacedReviewCalculator:
    """Single-item review date calculator.

    Example:
        calculator = SpacedReviewCalculator()
        reviews = calculator.generate_spaced_reviews(errors)
        due = calculator.get_due_reviews(reviews)
    """

    def calculate_target_review_date(
        self,
        error: ErrorLogDTO,
        factor: float | None = None,
        now: datetime | None = None,
    ) -> datetime:
        """Ideal review date for one error, never earlier than now.

        Args:
            error: Error to schedule
            factor: Normalized confidence (default: derived from the error)
            now: Reference time (default: now)

        Returns:
            Target review datetime
        """
        now = resolve_now(now)
        if factor is None:
            factor = confidence_factor(error)

        question = error.external_question
        if question is not None and question.next_review is not None:
            return self._before_source_review(question.next_review, factor, now)
        return self._standard_interval(error, factor, now)

    def generate_spaced_review(
        self,
        error: ErrorLogDTO,
        now: datetime | None = None,
    ) -> SpacedReviewDTO:
        """Review date plus a plain-language reason for one error."""
        now = resolve_now(now)
        target = self.calculate_target_review_date(error, now=now)

        question = error.external_question
        next_source_review = question.next_review if question else None
        if question is not None and next_source_review is not None:
            days_until = days_between(next_source_review, now)
            reason = (
                f"Review before {question.question_bank.upper()} shows it again ({days_until}d)"
            )
        else:
            reason = self._interval_reason(days_between(target, now))

        return SpacedReviewDTO(
            error_id=error.id,
            last_seen=error.timestamp,
            next_source_review=next_source_review,
            target_review_date=target,
            review_reason=reason,
        )

    def generate_spaced_reviews(
        self,
        errors: Iterable[ErrorLogDTO],
        now: datetime | None = None,
    ) -> list[SpacedReviewDTO]:
        """Reviews for every error, soonest first."""
        now = resolve_now(now)
        reviews = [self.generate_spaced_review(error, now) for error in errors]
        reviews.sort(key=lambda r: r.target_review_date)
        logger.debug("spaced_reviews_generated", review_count=len(reviews))
        return reviews

    def get_due_reviews(
        self,
        reviews: Iterable[SpacedReviewDTO],
        now: datetime | None = None,
    ) -> list[SpacedReviewDTO]:
        """Reviews due by the end of today, including overdue ones."""
        end_of_today = start_of_day(resolve_now(now)) + timedelta(days=1)
        return [r for r in reviews if r.target_review_date < end_of_today]

    def get_upcoming_reviews(
        self,
        reviews: Iterable[SpacedReviewDTO],
        days_ahead: int = 7,
        now: datetime | None = None,
    ) -> list[SpacedReviewDTO]:
        """Reviews after now and within the next days_ahead days."""
        now = resolve_now(now)
        horizon = now + timedelta(days=days_ahead)
        return [r for r in reviews if now < r.target_review_date <= horizon]

    def group_reviews_by_date(
        self,
        reviews: Sequence[SpacedReviewDTO],
    ) -> dict[str, list[SpacedReviewDTO]]:
        """Reviews keyed by ISO calendar date, in input order."""
        grouped: dict[str, list[SpacedReviewDTO]] = {}
        for review in reviews:
            key = review.target_review_date.date().isoformat()
            grouped.setdefault(key, []).append(review)
        return grouped

    @staticmethod
    def _before_source_review(
        next_review: datetime,
        factor: float,
        now: datetime,
    ) -> datetime:
        # 1-2 days of lead time, halved (floored) for shaky recall
        lead = 2 if days_between(next_review, now) > 7 else 1
        if factor < 0.5:
            lead = math.floor(lead * 0.5)
        target = next_review - timedelta(days=lead)
        return max(target, now)

    @staticmethod
    def _standard_interval(
        error: ErrorLogDTO,
        factor: float,
        now: datetime,
    ) -> datetime:
        if factor < 0.3:
            interval = 1
        elif factor < 0.6:
            interval = 2
        elif factor < 0.8:
            interval = 3 if days_between(now, error.timestamp) < 2 else 4
        else:
            interval = 7

        if error.error_type == ErrorType.KNOWLEDGE:
            interval = max(1, math.floor(interval * 0.8))
        elif error.error_type == ErrorType.TIME:
            interval = math.ceil(interval * 1.2)

        target = error.timestamp + timedelta(days=interval)
        return max(target, now)

    @staticmethod
    def _interval_reason(days_out: int) -> str:
        if days_out <= 1:
            return "Urgent review needed (low confidence)"
        if days_out <= 2:
            return "Short-interval review (building retention)"
        if days_out <= 4:
            return "Standard spaced review"
        return "Long-interval review (high confidence)"
