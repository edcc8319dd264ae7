"""Pattern aggregation service for eat_tracker.

This module folds raw error logs into per-topic statistics.
"""

from collections.abc import Iterable, Iterator
from datetime import datetime, timedelta

from eat_tracker.domain.topic_pattern import TopicPattern
from eat_tracker.logging import get_logger
from eat_tracker.models.error_log import ErrorLogDTO, ErrorType
from eat_tracker.models.pattern import ErrorTrendDTO, TopicPatternDTO
from eat_tracker.utils.dates import resolve_now

__all__ = [
    "PatternAggregator",
    "well_formed",
]

logger = get_logger(__name__)


def well_formed(errors: Iterable[ErrorLogDTO]) -> Iterator[ErrorLogDTO]:
    """Yield errors with a non-blank topic and system; log and drop the rest."""
    for error in errors:
        if error.is_malformed:
            logger.warning(
                "malformed_error_skipped",
                error_id=error.id,
                system=error.system,
                topic=error.topic,
            )
            continue
        yield error


class PatternAggregator:
    """Groups error logs into topic patterns.

    Example:
        aggregator = PatternAggregator()
        patterns = aggregator.analyze(errors)
        top = patterns[0]  # topic with the most errors
    """

    def analyze(self, errors: Iterable[ErrorLogDTO]) -> list[TopicPatternDTO]:
        """Aggregate errors into one pattern per (system, topic).

        Records with a blank topic or system are excluded and logged.

        Args:
            errors: Error logs to aggregate

        Returns:
            Patterns sorted by error count, highest first
        """
        patterns: dict[tuple[str, str], TopicPattern] = {}

        for error in well_formed(errors):
            pattern = patterns.get(error.topic_key)
            if pattern is None:
                pattern = TopicPattern.start(error)
                patterns[error.topic_key] = pattern
            pattern.add_error(error)

        result = [p.to_dto() for p in patterns.values()]
        result.sort(key=lambda p: p.error_count, reverse=True)

        logger.debug("patterns_aggregated", pattern_count=len(result))
        return result

    def get_error_trends(
        self,
        errors: Iterable[ErrorLogDTO],
        days: int = 30,
        now: datetime | None = None,
    ) -> list[ErrorTrendDTO]:
        """Daily error counts by type over a trailing window.

        Records with a blank topic or system are excluded and logged.

        Args:
            errors: Error logs
            days: Window length in days
            now: Reference time (default: now)

        Returns:
            One entry per day with errors, oldest first
        """
        now = resolve_now(now)
        cutoff = now - timedelta(days=days)

        by_day: dict[str, dict[ErrorType, int]] = {}
        for error in well_formed(errors):
            if error.timestamp < cutoff:
                continue
            day = error.timestamp.date().isoformat()
            counts = by_day.setdefault(day, {error_type: 0 for error_type in ErrorType})
            counts[error.error_type] += 1

        return [
            ErrorTrendDTO(
                date=day,
                knowledge=counts[ErrorType.KNOWLEDGE],
                reasoning=counts[ErrorType.REASONING],
                process=counts[ErrorType.PROCESS],
                time=counts[ErrorType.TIME],
            )
            for day, counts in sorted(by_day.items())
        ]
