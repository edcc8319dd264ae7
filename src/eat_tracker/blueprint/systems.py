"""Exam-blueprint organ system taxonomy for eat_tracker.

Static reference data: the catalog of blueprint systems with their
display names and aliases, plus the mapping from legacy system names
(used by older error logs) to current taxonomy ids.
"""

from dataclasses import dataclass, field

__all__ = [
    "BlueprintSystem",
    "LEGACY_SYSTEM_NAMES",
    "ORGAN_SYSTEMS",
    "TAXONOMY_VERSION",
    "find_system",
    "get_system",
    "migrate_legacy_system_name",
]

TAXONOMY_VERSION = "2025.1"


@dataclass(frozen=True)
class BlueprintSystem:
    """One organ system of the exam blueprint."""

    id: str
    name: str
    aliases: tuple[str, ...] = field(default_factory=tuple)


ORGAN_SYSTEMS: tuple[BlueprintSystem, ...] = (
    BlueprintSystem(
        "sys-human-dev",
        "Human Development",
        ("development", "growth", "pediatric development"),
    ),
    BlueprintSystem(
        "sys-cardiovascular",
        "Cardiovascular System",
        ("cardiovascular", "cardiac", "heart", "vascular", "cv"),
    ),
    BlueprintSystem(
        "sys-respiratory",
        "Respiratory System",
        ("respiratory", "pulmonary", "lungs", "resp"),
    ),
    BlueprintSystem(
        "sys-gastrointestinal",
        "Gastrointestinal System",
        ("gastrointestinal", "gi", "digestive", "gi tract", "gut"),
    ),
    BlueprintSystem(
        "sys-renal-urinary",
        "Renal & Urinary System",
        ("renal", "urinary", "kidney", "nephrology", "genitourinary"),
    ),
    BlueprintSystem(
        "sys-reproductive",
        "Reproductive System",
        ("reproductive", "genital", "sexual health"),
    ),
    BlueprintSystem(
        "sys-pregnancy",
        "Pregnancy, Childbirth & Puerperium",
        ("pregnancy", "obstetrics", "ob", "childbirth", "puerperium", "maternal"),
    ),
    BlueprintSystem(
        "sys-endocrine",
        "Endocrine System",
        ("endocrine", "hormonal", "metabolism", "diabetes"),
    ),
    BlueprintSystem(
        "sys-musculoskeletal",
        "Musculoskeletal System",
        ("musculoskeletal", "msk", "orthopedic", "bone", "joint", "muscle"),
    ),
    BlueprintSystem(
        "sys-skin",
        "Skin & Subcutaneous Tissue",
        ("skin", "dermatology", "derm", "integumentary", "subcutaneous"),
    ),
    BlueprintSystem(
        "sys-nervous",
        "Nervous System & Special Senses",
        ("nervous system", "neurological", "neuro", "cns", "pns", "special senses"),
    ),
    BlueprintSystem(
        "sys-behavioral",
        "Behavioral Health",
        ("behavioral health", "psychiatry", "psych", "mental health", "psychology"),
    ),
    BlueprintSystem(
        "sys-blood-lymph",
        "Blood & Lymphoreticular System",
        ("hematology", "blood", "lymphatic", "heme", "lymphoreticular"),
    ),
    BlueprintSystem(
        "sys-immune",
        "Immune System",
        ("immune system", "immunology", "autoimmune", "allergy"),
    ),
    BlueprintSystem(
        "sys-multisystem",
        "Multisystem Processes & Disorders",
        ("multisystem", "systemic", "general principles"),
    ),
    BlueprintSystem(
        "sys-biostat-epi",
        "Biostatistics & Epidemiology/Population Health",
        ("biostatistics", "epidemiology", "population health", "public health", "stats"),
    ),
    BlueprintSystem(
        "sys-social-sci",
        "Social Sciences",
        ("social sciences", "communication", "interpersonal"),
    ),
    BlueprintSystem(
        "sys-legal-ethical",
        "Legal & Ethical Issues",
        ("legal", "ethical", "ethics", "law", "medical law"),
    ),
    BlueprintSystem(
        "sys-professionalism",
        "Professionalism",
        ("professionalism", "professional conduct"),
    ),
    BlueprintSystem(
        "sys-systems-practice",
        "Systems-based Practice & Patient Safety",
        ("systems-based practice", "patient safety", "quality improvement", "qi"),
    ),
)

LEGACY_SYSTEM_NAMES: dict[str, str] = {
    "Cardiovascular": "sys-cardiovascular",
    "Respiratory": "sys-respiratory",
    "Gastrointestinal": "sys-gastrointestinal",
    "Renal/Urinary": "sys-renal-urinary",
    "Reproductive": "sys-reproductive",
    "Endocrine": "sys-endocrine",
    "Musculoskeletal": "sys-musculoskeletal",
    "Skin/Connective Tissue": "sys-skin",
    "Nervous System/Special Senses": "sys-nervous",
    "Hematologic/Lymphatic": "sys-blood-lymph",
    "Immune": "sys-immune",
    "Behavioral Science": "sys-behavioral",
    "Multisystem/General Principles": "sys-multisystem",
}

_BY_ID: dict[str, BlueprintSystem] = {sys.id: sys for sys in ORGAN_SYSTEMS}


def get_system(system_id: str) -> BlueprintSystem | None:
    """Look up a blueprint system by taxonomy id."""
    return _BY_ID.get(system_id)


def migrate_legacy_system_name(name: str) -> str | None:
    """Map a legacy system name to its taxonomy id, if known."""
    return LEGACY_SYSTEM_NAMES.get(name)


def find_system(name: str) -> BlueprintSystem | None:
    """Find a system by display name or alias (case-insensitive).

    Args:
        name: Free-text system name

    Returns:
        Matching BlueprintSystem or None
    """
    normalized = name.lower().strip()
    if not normalized:
        return None
    for sys in ORGAN_SYSTEMS:
        if sys.name.lower() == normalized or normalized in sys.aliases:
            return sys
    return None
