"""Spaced-repetition scheduling service for eat_tracker.

This module turns ranked priorities into a concrete multi-day study
plan: per-topic interval templates, error-type adaptation, alignment
with external question-bank reviews, and interleaving within a day.
"""

import math
import random
from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from itertools import groupby

from eat_tracker.blueprint.question_banks import QuestionBank
from eat_tracker.config import SchedulerSettings
from eat_tracker.interfaces.random_source import RandomSourceInterface
from eat_tracker.logging import get_logger
from eat_tracker.models.error_log import ErrorLogDTO, ErrorType
from eat_tracker.models.pattern import TopicPatternDTO
from eat_tracker.models.plan import (
    ActivityType,
    ErrorTypeStrategy,
    StudyBlockDTO,
    StudyPlanDTO,
)
from eat_tracker.models.priority import PriorityScoreDTO, UrgencyLevel
from eat_tracker.services.priority_scorer import PriorityScorer
from eat_tracker.utils.dates import (
    SECONDS_PER_DAY,
    parse_datetime,
    resolve_now,
    start_of_day,
)
from eat_tracker.utils.hashing import generate_block_id

__all__ = [
    "INTERVAL_TEMPLATES",
    "ScheduleInterval",
    "StudyScheduler",
    "describe_urgency",
]

logger = get_logger(__name__)


@dataclass(frozen=True)
class ScheduleInterval:
    """One planned exposure of a topic."""

    day: int
    activity: ActivityType
    duration: int
    reasoning: str


_R, _V, _P = ActivityType.RETRIEVAL, ActivityType.REVIEW, ActivityType.PRACTICE

# More urgent topics get more, and more front-loaded, exposures
INTERVAL_TEMPLATES: dict[UrgencyLevel, tuple[ScheduleInterval, ...]] = {
    UrgencyLevel.URGENT: (
        ScheduleInterval(1, _R, 30, "Initial encoding - active retrieval"),
        ScheduleInterval(2, _V, 25, "24h reinforcement - critical for consolidation"),
        ScheduleInterval(3, _P, 25, "48h spaced practice - apply concepts"),
        ScheduleInterval(5, _R, 20, "Extended retrieval - strengthen recall"),
        ScheduleInterval(7, _P, 20, "1-week review - long-term retention"),
        ScheduleInterval(10, _V, 15, "Maintenance review - prevent decay"),
        ScheduleInterval(14, _R, 15, "2-week consolidation - transfer to long-term memory"),
    ),
    UrgencyLevel.HIGH: (
        ScheduleInterval(1, _R, 25, "Initial encoding"),
        ScheduleInterval(3, _P, 20, "3-day spaced practice"),
        ScheduleInterval(7, _V, 15, "1-week review for retention"),
        ScheduleInterval(14, _R, 15, "2-week consolidation"),
    ),
    UrgencyLevel.MODERATE: (
        ScheduleInterval(1, _R, 20, "Initial encoding"),
        ScheduleInterval(4, _P, 20, "Spaced practice"),
        ScheduleInterval(10, _V, 15, "Long-term retention"),
    ),
    UrgencyLevel.LOW: (
        ScheduleInterval(1, _R, 15, "Initial encoding"),
        ScheduleInterval(7, _V, 15, "1-week review"),
    ),
}

_URGENCY_DESCRIPTIONS: dict[UrgencyLevel, str] = {
    UrgencyLevel.URGENT: "Needs immediate attention - frequent review",
    UrgencyLevel.HIGH: "High priority - consistent practice",
    UrgencyLevel.MODERATE: "Moderate priority - regular review",
    UrgencyLevel.LOW: "Lower priority - periodic review",
}

_STRATEGIES: dict[ErrorType, ErrorTypeStrategy] = {
    ErrorType.KNOWLEDGE: ErrorTypeStrategy.KNOWLEDGE_REVIEW,
    ErrorType.REASONING: ErrorTypeStrategy.PRACTICE_PROBLEMS,
    ErrorType.PROCESS: ErrorTypeStrategy.STRATEGY_COACHING,
    ErrorType.TIME: ErrorTypeStrategy.STRATEGY_COACHING,
}


def describe_urgency(urgency: UrgencyLevel) -> str:
    """Plain-language description of an urgency tier."""
    return _URGENCY_DESCRIPTIONS[urgency]


@dataclass(frozen=True)
class _ExternalReview:
    day: int
    bank: QuestionBank


class StudyScheduler:
    """Priority-driven spaced-repetition scheduler.

    Example:
        scheduler = StudyScheduler(rng=random.Random(42))
        plan = scheduler.generate_study_plan(patterns, errors, exam_date="2025-06-01")
        for block in plan.blocks_for_day(1):
            print(block.topic, block.activity, block.why_scheduled)
    """

    def __init__(
        self,
        settings: SchedulerSettings | None = None,
        scorer: PriorityScorer | None = None,
        rng: RandomSourceInterface | None = None,
    ) -> None:
        """Initialize scheduler.

        Args:
            settings: Topic limits and adaptation settings
            scorer: Priority scorer used by generate_study_plan
            rng: Shuffle source for same-priority interleaving
        """
        self._settings = settings or SchedulerSettings()
        self._scorer = scorer or PriorityScorer()
        self._rng: RandomSourceInterface = rng or random.Random()

    def generate_study_plan(
        self,
        patterns: Sequence[TopicPatternDTO],
        errors: Sequence[ErrorLogDTO],
        exam_date: datetime | date | str | None = None,
        now: datetime | None = None,
    ) -> StudyPlanDTO:
        """Score all patterns and build a plan from the ranking.

        Args:
            patterns: Topic patterns
            errors: All error logs
            exam_date: Optional exam date (free-form input tolerated)
            now: Reference time (default: now)

        Returns:
            StudyPlanDTO
        """
        now = resolve_now(now)
        priorities = self._scorer.calculate_all_priorities(patterns, errors, now)
        return self.build_plan(priorities, patterns, errors, exam_date, now)

    def build_plan(
        self,
        priorities: Sequence[PriorityScoreDTO],
        patterns: Sequence[TopicPatternDTO],
        errors: Iterable[ErrorLogDTO],
        exam_date: datetime | date | str | None = None,
        now: datetime | None = None,
    ) -> StudyPlanDTO:
        """Convert ranked priorities into a study plan.

        An unparseable exam date is treated as no exam date. A priority
        without a matching pattern is skipped.

        Args:
            priorities: Ranked priority scores
            patterns: Topic patterns the priorities were computed from
            errors: All error logs (for external review dates)
            exam_date: Optional exam date
            now: Reference time (default: now)

        Returns:
            StudyPlanDTO with blocks grouped by day and interleaved
        """
        now = resolve_now(now)
        week_start = start_of_day(now)

        exam = parse_datetime(exam_date)
        if exam_date is not None and exam is None:
            logger.warning("exam_date_unparseable", exam_date=str(exam_date))
        days_until_exam = (
            math.ceil((exam - week_start).total_seconds() / SECONDS_PER_DAY) if exam else None
        )
        limit = self.topic_limit(days_until_exam)

        patterns_by_key = {p.key: p for p in patterns}
        errors_by_key: dict[tuple[str, str], list[ErrorLogDTO]] = defaultdict(list)
        for error in errors:
            errors_by_key[error.topic_key].append(error)

        blocks: list[StudyBlockDTO] = []
        for position, priority in enumerate(priorities[:limit]):
            pattern = patterns_by_key.get(priority.key)
            if pattern is None:
                logger.debug("priority_without_pattern", topic=priority.topic)
                continue
            blocks.extend(
                self._blocks_for_topic(
                    priority,
                    pattern,
                    errors_by_key.get(priority.key, []),
                    week_start,
                    rank=priority.rank or position + 1,
                )
            )

        plan = StudyPlanDTO(
            generated_at=now,
            week_start=week_start,
            exam_date=exam,
            days_until_exam=days_until_exam,
            blocks=self._interleave(blocks),
        )
        logger.info(
            "study_plan_generated",
            topic_count=plan.topic_count,
            block_count=len(plan.blocks),
            days_until_exam=days_until_exam,
        )
        return plan

    def topic_limit(self, days_until_exam: int | None) -> int:
        """How many topics to schedule given exam proximity.

        Breadth grows as the exam approaches. A past exam date is
        treated like no date.
        """
        s = self._settings
        if days_until_exam is None or days_until_exam < 0:
            return s.topic_limit_default
        if days_until_exam > s.long_term_days:
            return s.topic_limit_default
        if days_until_exam > s.mid_term_days:
            return s.topic_limit_mid_term
        if days_until_exam > s.cram_days:
            return s.topic_limit_near_term
        return s.topic_limit_cram

    def error_type_strategy(
        self,
        pattern: TopicPatternDTO,
    ) -> tuple[ErrorTypeStrategy, ErrorType, float]:
        """Strategy tag, dominant error type, and its share."""
        if pattern.error_count == 0:
            return ErrorTypeStrategy.PRACTICE_PROBLEMS, ErrorType.KNOWLEDGE, 0.0
        dominant, proportion = pattern.dominant_error_type()
        return _STRATEGIES[dominant], dominant, proportion

    def adjust_for_error_type(
        self,
        intervals: Sequence[ScheduleInterval],
        error_type: ErrorType,
        proportion: float,
    ) -> list[ScheduleInterval]:
        """Match the interval template to the error diagnosis.

        Only applies when one error type makes up at least the dominant
        threshold of the topic's errors.
        """
        if proportion < self._settings.dominant_error_threshold:
            return list(intervals)

        match error_type:
            case ErrorType.KNOWLEDGE:
                # content reinforcement before retrieval testing
                adjusted = list(intervals)
                if adjusted:
                    adjusted[0] = replace(
                        adjusted[0],
                        activity=ActivityType.REVIEW,
                        reasoning="Content review - fill knowledge gap",
                    )
                if len(adjusted) > 1:
                    adjusted[1] = replace(
                        adjusted[1],
                        activity=ActivityType.REVIEW,
                        reasoning="24h review - reinforce new content",
                    )
                return adjusted
            case ErrorType.REASONING:
                # reviews become practice; practice sessions get the reasoning rationale
                adjusted = []
                for i in intervals:
                    upgrade = i.activity == ActivityType.REVIEW
                    adjusted.append(
                        replace(
                            i,
                            activity=ActivityType.PRACTICE if upgrade else i.activity,
                            reasoning=(
                                "Application practice - strengthen reasoning"
                                if "practice" in i.reasoning
                                else i.reasoning
                            ),
                        )
                    )
                return adjusted
            case ErrorType.PROCESS | ErrorType.TIME:
                bonus = self._settings.strategy_duration_bonus
                return [
                    replace(
                        i,
                        duration=i.duration + bonus,
                        reasoning="Strategy coaching + timed practice",
                    )
                    for index, i in enumerate(intervals)
                    if index % 2 == 0
                ]
            case _:
                return list(intervals)

    def _blocks_for_topic(
        self,
        priority: PriorityScoreDTO,
        pattern: TopicPatternDTO,
        topic_errors: list[ErrorLogDTO],
        week_start: datetime,
        rank: int,
    ) -> list[StudyBlockDTO]:
        strategy, dominant, proportion = self.error_type_strategy(pattern)
        intervals = self.adjust_for_error_type(
            INTERVAL_TEMPLATES[priority.urgency], dominant, proportion
        )

        reviews = self._external_reviews(topic_errors, week_start)
        if reviews:
            intervals = self._align_to_external_reviews(intervals, reviews)

        why_scheduled = priority.reason_chip or describe_urgency(priority.urgency)
        blocks = []
        for interval in intervals:
            blocks.append(
                StudyBlockDTO(
                    block_id=generate_block_id(
                        pattern.system, pattern.topic, interval.day, week_start
                    ),
                    day=interval.day,
                    scheduled_date=week_start + timedelta(days=interval.day - 1),
                    topic=pattern.topic,
                    system=pattern.system,
                    system_id=pattern.system_id,
                    activity=interval.activity,
                    duration=interval.duration,
                    priority=rank,
                    priority_score=priority.score,
                    reasoning=self._external_reasoning(interval, reviews),
                    urgency=priority.urgency,
                    error_type_strategy=strategy,
                    why_scheduled=why_scheduled,
                )
            )
        return blocks

    @staticmethod
    def _external_reviews(
        topic_errors: list[ErrorLogDTO],
        week_start: datetime,
    ) -> list[_ExternalReview]:
        """External next-review dates as plan day offsets (day 1 = week_start)."""
        reviews = []
        for error in topic_errors:
            question = error.external_question
            if question is None or question.next_review is None:
                continue
            local = question.next_review.astimezone(week_start.tzinfo)
            day = (local.date() - week_start.date()).days + 1
            reviews.append(_ExternalReview(day=day, bank=question.question_bank))
        return reviews

    def _align_to_external_reviews(
        self,
        intervals: list[ScheduleInterval],
        reviews: list[_ExternalReview],
    ) -> list[ScheduleInterval]:
        """Move sessions to land 1-2 days before external reviews.

        The nearest movable session is shifted onto the target day. The
        first session stays on day 1 as the initial encoding.
        """
        aligned = sorted(intervals, key=lambda i: i.day)
        pinned: set[int] = set()

        for review_day in sorted({r.day for r in reviews}):
            lead = 2 if review_day - 1 > 7 else 1
            target = review_day - lead
            if target < 2 or target > self._settings.horizon_days:
                continue
            if any(i.day == target for i in aligned):
                pinned.add(target)
                continue
            movable = [
                index
                for index, i in enumerate(aligned)
                if index > 0 and i.day not in pinned
            ]
            if not movable:
                continue
            nearest = min(movable, key=lambda k: (abs(aligned[k].day - target), aligned[k].day))
            aligned[nearest] = replace(aligned[nearest], day=target)
            pinned.add(target)
            aligned.sort(key=lambda i: i.day)

        return aligned

    @staticmethod
    def _external_reasoning(
        interval: ScheduleInterval,
        reviews: list[_ExternalReview],
    ) -> str:
        if not reviews:
            return interval.reasoning

        closest = min(reviews, key=lambda r: abs(r.day - interval.day))
        days_until = closest.day - interval.day
        bank = closest.bank.upper()

        if 0 < days_until <= 2:
            return f"Strategic: review {days_until}d before {bank} shows it again"
        if days_until == 0:
            return f"URGENT: {bank} shows this question today - review now!"
        if days_until == -1:
            return "Post-review reinforcement - consolidate while fresh"
        return interval.reasoning

    def _interleave(self, blocks: list[StudyBlockDTO]) -> list[StudyBlockDTO]:
        """Group by day; within a day order by rank, shuffling equal ranks."""
        ordered: list[StudyBlockDTO] = []
        for _, day_blocks in groupby(sorted(blocks, key=lambda b: b.day), key=lambda b: b.day):
            by_rank = sorted(day_blocks, key=lambda b: b.priority)
            for _, same_rank in groupby(by_rank, key=lambda b: b.priority):
                group = list(same_rank)
                if len(group) > 1:
                    self._rng.shuffle(group)
                ordered.extend(group)
        return ordered
