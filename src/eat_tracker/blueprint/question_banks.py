"""External question-bank catalog for eat_tracker.

Question banks are the practice platforms errors are imported from.
Each carries a reliability weight reflecting how predictive that
source is of real exam performance.
"""

from enum import StrEnum

__all__ = [
    "QuestionBank",
    "SOURCE_RELIABILITY",
    "get_source_reliability",
]


class QuestionBank(StrEnum):
    """Known external practice-question platforms."""

    UWORLD = "uworld"
    AMBOSS = "amboss"
    NBME = "nbme"
    KAPLAN = "kaplan"
    RX = "rx"
    OTHER = "other"

    @classmethod
    def normalize(cls, name: str) -> "QuestionBank":
        """Map a free-text platform name onto a known bank.

        Unrecognized names become OTHER.
        """
        lower = name.lower().strip()
        if "uworld" in lower or lower == "uw":
            return cls.UWORLD
        if "amboss" in lower:
            return cls.AMBOSS
        if "nbme" in lower or "self-assessment" in lower:
            return cls.NBME
        if "kaplan" in lower:
            return cls.KAPLAN
        if "rx" in lower:
            return cls.RX
        return cls.OTHER


# Official NBME forms are the reference point; low-quality sources bottom out at 0.4.
SOURCE_RELIABILITY: dict[QuestionBank, float] = {
    QuestionBank.NBME: 1.0,
    QuestionBank.UWORLD: 0.95,
    QuestionBank.AMBOSS: 0.9,
    QuestionBank.KAPLAN: 0.7,
    QuestionBank.RX: 0.6,
    QuestionBank.OTHER: 0.4,
}

_missing = set(QuestionBank) - set(SOURCE_RELIABILITY)
if _missing:
    raise RuntimeError(f"Reliability weight missing for question banks: {sorted(_missing)}")


def get_source_reliability(bank: QuestionBank) -> float:
    """Return the reliability weight for a question bank."""
    return SOURCE_RELIABILITY[bank]
