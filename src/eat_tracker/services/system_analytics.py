"""Organ-system analytics service for eat_tracker.

This module groups errors by exam-blueprint system for reporting.
It runs alongside, and independently of, the scheduling path.
"""

from collections.abc import Iterable
from datetime import datetime, timedelta

from eat_tracker.blueprint.systems import ORGAN_SYSTEMS, BlueprintSystem, get_system
from eat_tracker.config import AnalyticsSettings
from eat_tracker.domain.system_breakdown import SystemBreakdown
from eat_tracker.logging import get_logger
from eat_tracker.models.error_log import CognitiveLevel, ErrorLogDTO
from eat_tracker.models.pattern import (
    CognitiveLevelStatsDTO,
    SystemBreakdownDTO,
    SystemTrendDTO,
)
from eat_tracker.services.pattern_aggregator import well_formed
from eat_tracker.utils.dates import resolve_now

__all__ = [
    "SystemAnalyticsService",
]

logger = get_logger(__name__)


class SystemAnalyticsService:
    """Per-system breakdowns, daily trends, and cognitive-level stats.

    Example:
        service = SystemAnalyticsService()
        for breakdown in service.analyze_by_system(errors):
            print(breakdown.system_name, breakdown.trend_direction)
    """

    def __init__(
        self,
        settings: AnalyticsSettings | None = None,
        systems: Iterable[BlueprintSystem] = ORGAN_SYSTEMS,
    ) -> None:
        """Initialize service.

        Args:
            settings: Trend window and cutoff settings
            systems: Catalog of blueprint systems to report on
        """
        self._settings = settings or AnalyticsSettings()
        self._systems = tuple(systems)

    def analyze_by_system(
        self,
        errors: Iterable[ErrorLogDTO],
        now: datetime | None = None,
        include_empty: bool = False,
    ) -> list[SystemBreakdownDTO]:
        """Break errors down by blueprint system.

        Records with a blank topic or system are excluded and logged.

        The recent trend window is the last trend_window_days days; the
        previous window is the same length immediately before it.

        Args:
            errors: Error logs
            now: Reference time (default: now)
            include_empty: Keep systems without errors in the result

        Returns:
            Breakdowns sorted by total errors, highest first
        """
        now = resolve_now(now)
        window = timedelta(days=self._settings.trend_window_days)
        recent_start = now - window
        previous_start = now - 2 * window

        tallies = {sys.id: SystemBreakdown.for_system(sys) for sys in self._systems}

        for error in well_formed(errors):
            system_id = error.resolved_system_id
            tally = tallies.get(system_id) if system_id else None
            if tally is None:
                logger.debug("error_without_blueprint_system", error_id=error.id)
                continue
            tally.add_error(
                error,
                in_recent=error.timestamp >= recent_start,
                in_previous=previous_start <= error.timestamp < recent_start,
            )

        result = [t.to_dto(self._settings.trend_change_percent) for t in tallies.values()]
        if not include_empty:
            result = [b for b in result if b.total_errors > 0]
        result.sort(key=lambda b: b.total_errors, reverse=True)
        return result

    def get_system_trends(
        self,
        errors: Iterable[ErrorLogDTO],
        days: int = 30,
        now: datetime | None = None,
    ) -> list[SystemTrendDTO]:
        """Per (system, day) error counts over a trailing window, oldest first."""
        now = resolve_now(now)
        cutoff = now - timedelta(days=days)

        counts: dict[tuple[str, str], list[int]] = {}
        for error in well_formed(errors):
            system_id = error.resolved_system_id
            if not system_id or error.timestamp < cutoff:
                continue
            day = error.timestamp.date().isoformat()
            row = counts.setdefault((system_id, day), [0, 0, 0])
            row[0] += 1
            if error.cognitive_level == CognitiveLevel.FIRST_ORDER:
                row[1] += 1
            elif error.cognitive_level == CognitiveLevel.HIGHER_ORDER:
                row[2] += 1

        trends = []
        for (system_id, day), (total, first, higher) in counts.items():
            system = get_system(system_id)
            trends.append(
                SystemTrendDTO(
                    system_id=system_id,
                    system_name=system.name if system else system_id,
                    date=day,
                    error_count=total,
                    first_order_count=first,
                    higher_order_count=higher,
                )
            )
        trends.sort(key=lambda t: t.date)
        return trends

    def get_cognitive_level_stats(
        self,
        errors: Iterable[ErrorLogDTO],
    ) -> CognitiveLevelStatsDTO:
        """Overall cognitive-level distribution.

        Percentages are over classified errors only. Records with a blank
        topic or system are excluded and logged.
        """
        first = higher = unclassified = 0
        for error in well_formed(errors):
            if error.cognitive_level == CognitiveLevel.FIRST_ORDER:
                first += 1
            elif error.cognitive_level == CognitiveLevel.HIGHER_ORDER:
                higher += 1
            else:
                unclassified += 1

        classified = first + higher
        return CognitiveLevelStatsDTO(
            first_order=first,
            higher_order=higher,
            unclassified=unclassified,
            first_order_percent=first / classified * 100 if classified else 0.0,
            higher_order_percent=higher / classified * 100 if classified else 0.0,
        )
