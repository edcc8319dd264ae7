"""Internal SystemBreakdown accumulator for eat_tracker.

This module contains the mutable per-system tally used by the
system analytics service, including the trend classification rule.
"""

from dataclasses import dataclass

from eat_tracker.blueprint.exam_weights import get_exam_weight, get_exam_weight_percent
from eat_tracker.blueprint.systems import BlueprintSystem
from eat_tracker.models.error_log import CognitiveLevel, ErrorLogDTO, ErrorType
from eat_tracker.models.pattern import SystemBreakdownDTO, TrendDirection

__all__ = [
    "SystemBreakdown",
    "classify_trend",
]


def classify_trend(
    recent: int,
    previous: int,
    change_percent: float = 10.0,
) -> tuple[TrendDirection, float]:
    """Compare the recent window against the preceding one.

    Improving when the recent count is more than change_percent below
    the previous count, worsening when more than change_percent above.
    With no previous baseline, any recent error counts as worsening.

    Returns:
        (direction, percent change)
    """
    if previous > 0:
        trend_percent = (recent - previous) * 100 / previous
        if trend_percent < -change_percent:
            return TrendDirection.IMPROVING, trend_percent
        if trend_percent > change_percent:
            return TrendDirection.WORSENING, trend_percent
        return TrendDirection.STABLE, trend_percent
    if recent > 0:
        return TrendDirection.WORSENING, 100.0
    return TrendDirection.STABLE, 0.0


@dataclass
class SystemBreakdown:
    """Mutable per-system tally."""

    system_id: str
    system_name: str
    total_errors: int = 0
    first_order: int = 0
    higher_order: int = 0
    unclassified: int = 0
    knowledge: int = 0
    reasoning: int = 0
    process: int = 0
    time: int = 0
    recent: int = 0
    previous: int = 0

    @classmethod
    def for_system(cls, system: BlueprintSystem) -> "SystemBreakdown":
        return cls(system_id=system.id, system_name=system.name)

    def add_error(self, error: ErrorLogDTO, in_recent: bool, in_previous: bool) -> None:
        """Count one error, with its trend-window membership."""
        self.total_errors += 1

        if error.cognitive_level == CognitiveLevel.FIRST_ORDER:
            self.first_order += 1
        elif error.cognitive_level == CognitiveLevel.HIGHER_ORDER:
            self.higher_order += 1
        else:
            self.unclassified += 1

        match error.error_type:
            case ErrorType.KNOWLEDGE:
                self.knowledge += 1
            case ErrorType.REASONING:
                self.reasoning += 1
            case ErrorType.PROCESS:
                self.process += 1
            case ErrorType.TIME:
                self.time += 1

        if in_recent:
            self.recent += 1
        elif in_previous:
            self.previous += 1

    def to_dto(self, trend_change_percent: float = 10.0) -> SystemBreakdownDTO:
        """Convert to immutable DTO, computing percentages and trend."""
        classified = self.first_order + self.higher_order
        first_pct = self.first_order / classified * 100 if classified else 0.0
        higher_pct = self.higher_order / classified * 100 if classified else 0.0
        direction, trend_percent = classify_trend(
            self.recent, self.previous, trend_change_percent
        )

        return SystemBreakdownDTO(
            system_id=self.system_id,
            system_name=self.system_name,
            total_errors=self.total_errors,
            exam_weight=get_exam_weight(self.system_id),
            exam_weight_percent=get_exam_weight_percent(self.system_id),
            first_order_errors=self.first_order,
            higher_order_errors=self.higher_order,
            unclassified_errors=self.unclassified,
            first_order_percent=first_pct,
            higher_order_percent=higher_pct,
            knowledge_errors=self.knowledge,
            reasoning_errors=self.reasoning,
            process_errors=self.process,
            time_errors=self.time,
            recent_error_count=self.recent,
            previous_error_count=self.previous,
            trend_direction=direction,
            trend_percent=trend_percent,
        )
