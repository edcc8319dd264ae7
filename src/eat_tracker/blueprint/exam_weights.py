"""Exam-blueprint weight table for eat_tracker.

Official content-outline proportions per organ system, with a
normalized 0-1 weight used by priority scoring. The highest-weight
systems (10-15% of the exam) anchor the scale at 1.0.
"""

from dataclasses import dataclass

from eat_tracker.blueprint.systems import migrate_legacy_system_name

__all__ = [
    "DEFAULT_EXAM_WEIGHT",
    "EXAM_WEIGHTS",
    "HIGH_YIELD_PERCENT",
    "ExamWeight",
    "get_exam_weight",
    "get_exam_weight_from_legacy_system",
    "get_exam_weight_percent",
    "get_systems_by_weight",
    "is_high_yield",
]

DEFAULT_EXAM_WEIGHT = 0.5
HIGH_YIELD_PERCENT = 7.0


@dataclass(frozen=True)
class ExamWeight:
    """Blueprint allocation for one system."""

    system_id: str
    min_percent: float
    max_percent: float
    weight: float

    @property
    def midpoint_percent(self) -> float:
        return (self.min_percent + self.max_percent) / 2


def _w(system_id: str, lo: float, hi: float, weight: float) -> tuple[str, ExamWeight]:
    return system_id, ExamWeight(system_id, lo, hi, weight)


EXAM_WEIGHTS: dict[str, ExamWeight] = dict(
    [
        # 10-15%
        _w("sys-social-sci", 10, 15, 1.0),
        _w("sys-legal-ethical", 10, 15, 1.0),
        _w("sys-professionalism", 10, 15, 1.0),
        _w("sys-systems-practice", 10, 15, 1.0),
        # 7-13%
        _w("sys-renal-urinary", 7, 13, 0.8),
        _w("sys-reproductive", 7, 13, 0.8),
        # 6-12%
        _w("sys-cardiovascular", 6, 12, 0.72),
        _w("sys-musculoskeletal", 6, 12, 0.72),
        _w("sys-skin", 6, 12, 0.72),
        # 5-10%
        _w("sys-behavioral", 5, 10, 0.6),
        _w("sys-nervous", 5, 10, 0.6),
        _w("sys-respiratory", 5, 10, 0.6),
        _w("sys-gastrointestinal", 5, 10, 0.6),
        # 3-8%
        _w("sys-multisystem", 4, 8, 0.48),
        _w("sys-pregnancy", 3, 7, 0.4),
        _w("sys-endocrine", 3, 7, 0.4),
        # 3-6%
        _w("sys-blood-lymph", 3, 6, 0.36),
        _w("sys-immune", 3, 5, 0.32),
        _w("sys-biostat-epi", 3, 5, 0.32),
        _w("sys-human-dev", 2, 4, 0.24),
    ]
)


def get_exam_weight(system_id: str | None, default: float = DEFAULT_EXAM_WEIGHT) -> float:
    """Get the normalized exam weight for a system id.

    Unmapped or missing ids get the neutral default so the topic stays
    schedulable without blueprint bias.
    """
    if not system_id:
        return default
    entry = EXAM_WEIGHTS.get(system_id)
    return entry.weight if entry else default


def get_exam_weight_from_legacy_system(
    system: str,
    default: float = DEFAULT_EXAM_WEIGHT,
) -> float:
    """Get the exam weight for a legacy organ system name."""
    return get_exam_weight(migrate_legacy_system_name(system), default)


def get_exam_weight_percent(system_id: str | None) -> float:
    """Blueprint midpoint percentage for display; 0 when unmapped."""
    entry = EXAM_WEIGHTS.get(system_id or "")
    return entry.midpoint_percent if entry else 0.0


def is_high_yield(system_id: str | None) -> bool:
    """Check if a system is high-yield (midpoint >= 7% of the exam)."""
    entry = EXAM_WEIGHTS.get(system_id or "")
    return entry is not None and entry.midpoint_percent >= HIGH_YIELD_PERCENT


def get_systems_by_weight() -> list[ExamWeight]:
    """All weighted systems, highest weight first."""
    return sorted(EXAM_WEIGHTS.values(), key=lambda w: w.weight, reverse=True)
