"""Static exam-blueprint reference data for eat_tracker.

These catalogs are configuration data, versioned with the package,
never computed at runtime.
"""

from eat_tracker.blueprint.exam_weights import (
    DEFAULT_EXAM_WEIGHT,
    EXAM_WEIGHTS,
    ExamWeight,
    get_exam_weight,
    get_exam_weight_from_legacy_system,
    get_exam_weight_percent,
    get_systems_by_weight,
    is_high_yield,
)
from eat_tracker.blueprint.question_banks import (
    SOURCE_RELIABILITY,
    QuestionBank,
    get_source_reliability,
)
from eat_tracker.blueprint.systems import (
    LEGACY_SYSTEM_NAMES,
    ORGAN_SYSTEMS,
    TAXONOMY_VERSION,
    BlueprintSystem,
    find_system,
    get_system,
    migrate_legacy_system_name,
)

__all__ = [
    "DEFAULT_EXAM_WEIGHT",
    "EXAM_WEIGHTS",
    "LEGACY_SYSTEM_NAMES",
    "ORGAN_SYSTEMS",
    "SOURCE_RELIABILITY",
    "TAXONOMY_VERSION",
    "BlueprintSystem",
    "ExamWeight",
    "QuestionBank",
    "find_system",
    "get_exam_weight",
    "get_exam_weight_from_legacy_system",
    "get_exam_weight_percent",
    "get_source_reliability",
    "get_system",
    "get_systems_by_weight",
    "is_high_yield",
    "migrate_legacy_system_name",
]
