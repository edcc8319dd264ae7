"""Spaced review models for eat_tracker."""

from datetime import datetime

from pydantic import BaseModel

__all__ = [
    "SpacedReviewDTO",
]


class SpacedReviewDTO(BaseModel, frozen=True):
    """Ideal next review for a single error.

    Attributes:
        error_id: Error this review belongs to
        last_seen: When the question was missed
        next_source_review: When the source platform will show it again, if known
        target_review_date: Chosen review date (never in the past)
        review_reason: Plain-language explanation of the date
    """

    error_id: str
    last_seen: datetime
    next_source_review: datetime | None = None
    target_review_date: datetime
    review_reason: str
