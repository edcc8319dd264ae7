"""Shared test fixtures for eat_tracker.

This module provides pytest fixtures used across all tests.
"""

import random
from datetime import datetime, timedelta
from typing import Any

import pytest

from eat_tracker.models.error_log import Confidence, ErrorLogDTO, ErrorType
from tests.mocks.factories import NOW, ErrorFactory
from tests.mocks.mock_store import MockErrorLogStore


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def rng() -> random.Random:
    """Seeded shuffle source."""
    return random.Random(42)


@pytest.fixture
def make_error() -> ErrorFactory:
    """Factory for ErrorLogDTO with sensible defaults.

    days_ago shifts the timestamp back from NOW; any other keyword
    overrides the matching field.
    """
    counter = iter(range(1, 100_000))

    def factory(days_ago: float = 0, **overrides: Any) -> ErrorLogDTO:
        data: dict[str, Any] = {
            "id": f"err-{next(counter)}",
            "timestamp": NOW - timedelta(days=days_ago),
            "description": "Missed question",
            "system": "Cardiovascular",
            "topic": "Preload vs Afterload",
            "error_type": ErrorType.KNOWLEDGE,
            "confidence": Confidence.GUESSED,
        }
        data.update(overrides)
        return ErrorLogDTO(**data)

    return factory


@pytest.fixture
def sample_errors(make_error: ErrorFactory) -> list[ErrorLogDTO]:
    """Two low-confidence cardio errors on consecutive days, one confident renal error."""
    return [
        make_error(days_ago=4, confidence=Confidence.GUESSED),
        make_error(days_ago=3, confidence=Confidence.ELIMINATED),
        make_error(
            days_ago=1,
            system="Renal",
            topic="Aldosterone",
            confidence=Confidence.CERTAIN,
        ),
    ]


@pytest.fixture
def mock_store(sample_errors: list[ErrorLogDTO]) -> MockErrorLogStore:
    """In-memory store preloaded with the sample errors."""
    return MockErrorLogStore(sample_errors)
