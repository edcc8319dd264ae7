"""Priority scoring service for eat_tracker.

This module computes a multi-factor urgency score per topic pattern
and ranks all topics into a total order of "what to study next".
"""

import math
from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import datetime

from eat_tracker.blueprint.exam_weights import (
    get_exam_weight,
    get_exam_weight_from_legacy_system,
)
from eat_tracker.blueprint.question_banks import get_source_reliability
from eat_tracker.config import ScoringSettings
from eat_tracker.logging import get_logger
from eat_tracker.models.error_log import ErrorLogDTO, ErrorType
from eat_tracker.models.pattern import TopicPatternDTO
from eat_tracker.models.priority import PriorityFactors, PriorityScoreDTO, UrgencyLevel
from eat_tracker.utils.confidence import confidence_to_percent
from eat_tracker.utils.dates import days_between, resolve_now

__all__ = [
    "DOMINANT_TYPE_REASONS",
    "PriorityScorer",
]

logger = get_logger(__name__)

# Reason appended when one error type dominates a topic
DOMINANT_TYPE_REASONS: dict[ErrorType, str | None] = {
    ErrorType.KNOWLEDGE: "knowledge gap",
    ErrorType.REASONING: "application struggles",
    ErrorType.PROCESS: "strategy needed",
    ErrorType.TIME: None,  # already covered by the time-pressure reason
}

# (factor, strong cutoff, strong reason, moderate cutoff, moderate reason)
_FACTOR_REASONS: tuple[tuple[str, float, str, float, str], ...] = (
    ("frequency", 0.7, "frequent", 0.4, "moderate errors"),
    ("exam_weight", 0.7, "high-yield", 0.4, "exam-relevant"),
    ("low_confidence", 0.6, "low confidence", 0.4, "guessing often"),
    ("time_pressure", 0.5, "time pressure", 0.3, "timing issues"),
    ("difficulty", 0.6, "hard questions", 0.4, "tricky questions"),
    ("performance_gap", 0.7, "below average", 0.5, "behind peers"),
)


class PriorityScorer:
    """Multi-factor priority scorer.

    Seven normalized factors are combined into a weighted 0-100 score:
    - frequency: log(count + 1) / log(max_count + 1)
    - exam weight: blueprint weight of the system (neutral 0.5 if unmapped)
    - recency: exp(-0.1 * days), floored at 0.1
    - low confidence: mean(1 - confidence_percent / 100)
    - time pressure: share of time-type errors
    - difficulty: mean(1 - percent_correct / 100) over imported errors
    - performance gap: mean(percent_correct / 100) over imported errors

    The score is then multiplied by the mean reliability of the external
    question banks the topic's errors came from, if any.

    Example:
        scorer = PriorityScorer()
        ranked = scorer.calculate_all_priorities(patterns, errors)
        ranked[0].reason_chip  # "frequent + high-yield + very recent"
    """

    def __init__(self, settings: ScoringSettings | None = None) -> None:
        """Initialize scorer.

        Args:
            settings: Weights and cutoffs (default: ScoringSettings())
        """
        self._settings = settings or ScoringSettings()

    @property
    def settings(self) -> ScoringSettings:
        return self._settings

    def calculate_priority_score(
        self,
        pattern: TopicPatternDTO,
        errors: Iterable[ErrorLogDTO],
        max_error_count: int,
        now: datetime | None = None,
    ) -> PriorityScoreDTO:
        """Score a single topic pattern (rank left at 0).

        Args:
            pattern: Topic to score
            errors: All error logs; only those matching the topic are used
            max_error_count: Highest error count across all topics
            now: Reference time (default: now)

        Returns:
            Unranked PriorityScoreDTO
        """
        topic_errors = [e for e in errors if e.topic_key == pattern.key]
        return self._score(pattern, topic_errors, max_error_count, resolve_now(now))

    def calculate_all_priorities(
        self,
        patterns: Sequence[TopicPatternDTO],
        errors: Iterable[ErrorLogDTO],
        now: datetime | None = None,
    ) -> list[PriorityScoreDTO]:
        """Score and rank every pattern.

        Sorting is stable, so equal scores keep their input order.

        Args:
            patterns: Topic patterns to rank
            errors: All error logs
            now: Reference time (default: now)

        Returns:
            Scores sorted by score descending with rank 1..N assigned
        """
        if not patterns:
            return []

        now = resolve_now(now)
        by_topic: dict[tuple[str, str], list[ErrorLogDTO]] = defaultdict(list)
        for error in errors:
            by_topic[error.topic_key].append(error)

        max_error_count = max((p.error_count for p in patterns), default=1) or 1
        scored = [
            self._score(pattern, by_topic.get(pattern.key, []), max_error_count, now)
            for pattern in patterns
        ]
        scored.sort(key=lambda s: s.score, reverse=True)
        ranked = [s.model_copy(update={"rank": i + 1}) for i, s in enumerate(scored)]

        logger.debug(
            "priorities_calculated",
            topic_count=len(ranked),
            top_topic=ranked[0].topic,
            top_score=ranked[0].score,
        )
        return ranked

    def get_top_priorities(
        self,
        patterns: Sequence[TopicPatternDTO],
        errors: Iterable[ErrorLogDTO],
        limit: int = 10,
        now: datetime | None = None,
    ) -> list[PriorityScoreDTO]:
        """The highest-ranked topics."""
        return self.calculate_all_priorities(patterns, errors, now)[:limit]

    def get_priorities_by_urgency(
        self,
        patterns: Sequence[TopicPatternDTO],
        errors: Iterable[ErrorLogDTO],
        urgency: UrgencyLevel,
        now: datetime | None = None,
    ) -> list[PriorityScoreDTO]:
        """Ranked topics that fall in one urgency tier."""
        return [
            p for p in self.calculate_all_priorities(patterns, errors, now) if p.urgency == urgency
        ]

    def urgency_for_score(self, score: float) -> UrgencyLevel:
        """Map a composite score onto its urgency tier."""
        s = self._settings
        if score >= s.urgent_threshold:
            return UrgencyLevel.URGENT
        if score >= s.high_threshold:
            return UrgencyLevel.HIGH
        if score >= s.moderate_threshold:
            return UrgencyLevel.MODERATE
        return UrgencyLevel.LOW

    def _score(
        self,
        pattern: TopicPatternDTO,
        topic_errors: list[ErrorLogDTO],
        max_error_count: int,
        now: datetime,
    ) -> PriorityScoreDTO:
        s = self._settings
        days_since = max(0, days_between(now, pattern.last_seen))

        difficulty, performance_gap = self._percent_correct_factors(topic_errors)
        factors = PriorityFactors(
            frequency=self._frequency(pattern.error_count, max_error_count),
            exam_weight=self._exam_weight(pattern),
            recency=self._recency(days_since),
            low_confidence=self._low_confidence(topic_errors),
            time_pressure=self._time_pressure(pattern),
            difficulty=difficulty,
            performance_gap=performance_gap,
        )

        raw = (
            factors.frequency * s.weight_frequency
            + factors.exam_weight * s.weight_exam
            + factors.recency * s.weight_recency
            + factors.low_confidence * s.weight_low_confidence
            + factors.time_pressure * s.weight_time_pressure
            + factors.difficulty * s.weight_difficulty
            + factors.performance_gap * s.weight_performance_gap
        ) * 100

        multiplier = self._source_multiplier(topic_errors)
        score = round(min(100.0, max(0.0, raw * multiplier)), 1)

        reasons = self._reasons(factors, pattern, days_since)
        return PriorityScoreDTO(
            topic=pattern.topic,
            system=pattern.system,
            system_id=pattern.system_id,
            score=score,
            urgency=self.urgency_for_score(score),
            reasons=reasons,
            reason_chip=" + ".join(reasons[:3]),
            source_multiplier=multiplier,
            factors=factors,
        )

    @staticmethod
    def _frequency(error_count: int, max_error_count: int) -> float:
        # log scale keeps one runaway topic from flattening the rest
        if max_error_count <= 0 or error_count <= 0:
            return 0.0
        return min(1.0, math.log(error_count + 1) / math.log(max_error_count + 1))

    def _exam_weight(self, pattern: TopicPatternDTO) -> float:
        default = self._settings.default_exam_weight
        if pattern.system_id:
            return get_exam_weight(pattern.system_id, default)
        return get_exam_weight_from_legacy_system(pattern.system, default)

    def _recency(self, days_since: int) -> float:
        s = self._settings
        if days_since <= 0:
            return 1.0
        if days_since >= s.recency_floor_days:
            return s.recency_floor
        return max(s.recency_floor, math.exp(-s.recency_decay_rate * days_since))

    @staticmethod
    def _low_confidence(topic_errors: list[ErrorLogDTO]) -> float:
        if not topic_errors:
            return 0.0
        total = sum(1 - confidence_to_percent(e.confidence) / 100 for e in topic_errors)
        return total / len(topic_errors)

    @staticmethod
    def _time_pressure(pattern: TopicPatternDTO) -> float:
        if pattern.error_count == 0:
            return 0.0
        return pattern.error_types[ErrorType.TIME] / pattern.error_count

    @staticmethod
    def _percent_correct_factors(topic_errors: list[ErrorLogDTO]) -> tuple[float, float]:
        """(difficulty, performance gap) from national percent-correct."""
        fractions = [
            e.external_question.percent_correct / 100
            for e in topic_errors
            if e.external_question is not None and e.external_question.percent_correct is not None
        ]
        if not fractions:
            return 0.0, 0.0
        gap = sum(fractions) / len(fractions)
        return 1 - gap, gap

    @staticmethod
    def _source_multiplier(topic_errors: list[ErrorLogDTO]) -> float:
        banks = {e.external_question.question_bank for e in topic_errors if e.external_question}
        if not banks:
            return 1.0
        return sum(get_source_reliability(b) for b in banks) / len(banks)

    def _reasons(
        self,
        factors: PriorityFactors,
        pattern: TopicPatternDTO,
        days_since: int,
    ) -> list[str]:
        """Plain-language reasons, in factor order.

        No numbers and no jargon: these are shown to the student as-is.
        """
        reasons: list[str] = []

        for rule in _FACTOR_REASONS[:2]:
            reasons.extend(self._tiered(factors, *rule))

        if days_since <= 1:
            reasons.append("very recent")
        elif days_since <= 3:
            reasons.append("recent")

        for rule in _FACTOR_REASONS[2:]:
            reasons.extend(self._tiered(factors, *rule))

        dominant, proportion = pattern.dominant_error_type()
        if proportion > self._settings.dominant_error_threshold:
            reason = DOMINANT_TYPE_REASONS[dominant]
            if reason:
                reasons.append(reason)

        return reasons

    @staticmethod
    def _tiered(
        factors: PriorityFactors,
        name: str,
        strong: float,
        strong_reason: str,
        moderate: float,
        moderate_reason: str,
    ) -> list[str]:
        value = getattr(factors, name)
        if value > strong:
            return [strong_reason]
        if value > moderate:
            return [moderate_reason]
        return []
