"""Confidence scale helpers for eat_tracker.

The confidence scale is ordinal (1-4); these helpers project it onto
the other representations the app needs.
"""

from eat_tracker.models.error_log import Confidence

__all__ = [
    "confidence_description",
    "confidence_from_percent",
    "confidence_label",
    "confidence_to_ordinal",
    "confidence_to_percent",
]

# Midpoint of each quartile the level stands for
_PERCENT: dict[Confidence, float] = {
    Confidence.GUESSED: 12.5,
    Confidence.ELIMINATED: 37.5,
    Confidence.CONFIDENT: 62.5,
    Confidence.CERTAIN: 87.5,
}

_LABELS: dict[Confidence, str] = {
    Confidence.GUESSED: "1 - Complete guess (0-25%)",
    Confidence.ELIMINATED: "2 - Narrowed down (25-50%)",
    Confidence.CONFIDENT: "3 - Fairly sure (50-75%)",
    Confidence.CERTAIN: "4 - Very confident (75-100%)",
}

_DESCRIPTIONS: dict[Confidence, str] = {
    Confidence.GUESSED: "Random pick or no idea",
    Confidence.ELIMINATED: "Eliminated some options",
    Confidence.CONFIDENT: "Had reasoning but uncertain",
    Confidence.CERTAIN: "Felt certain, but still wrong",
}


def confidence_to_percent(confidence: Confidence) -> float:
    """Map a confidence level to a 0-100 percentage."""
    return _PERCENT[confidence]


def confidence_to_ordinal(confidence: Confidence) -> int:
    """Map a confidence level to 0 (guessed) - 3 (certain)."""
    return int(confidence) - 1


def confidence_label(confidence: Confidence) -> str:
    return _LABELS[confidence]


def confidence_description(confidence: Confidence) -> str:
    return _DESCRIPTIONS[confidence]


def confidence_from_percent(percent: float) -> Confidence:
    """Map a 0-100 confidence estimate onto the ordinal scale."""
    if percent < 25:
        return Confidence.GUESSED
    if percent < 50:
        return Confidence.ELIMINATED
    if percent < 75:
        return Confidence.CONFIDENT
    return Confidence.CERTAIN
