"""Unit tests for eat_tracker models."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from eat_tracker.blueprint.question_banks import QuestionBank
from eat_tracker.models.error_log import (
    CognitiveLevel,
    Confidence,
    ErrorLogDTO,
    ErrorType,
    ExternalQuestionDTO,
)
from eat_tracker.models.pattern import TopicPatternDTO
from eat_tracker.models.plan import ActivityType, ErrorTypeStrategy, StudyBlockDTO, StudyPlanDTO
from eat_tracker.models.priority import PriorityFactors, UrgencyLevel
from eat_tracker.utils.confidence import (
    confidence_description,
    confidence_from_percent,
    confidence_label,
    confidence_to_ordinal,
    confidence_to_percent,
)


def _error(**overrides: object) -> ErrorLogDTO:
    data: dict[str, object] = {
        "id": "e1",
        "timestamp": datetime(2025, 3, 1, 9, 30, tzinfo=UTC),
        "system": "Cardiovascular",
        "topic": "Preload vs Afterload",
        "error_type": "knowledge",
        "confidence": 1,
    }
    data.update(overrides)
    return ErrorLogDTO(**data)


class TestConfidence:
    """Tests for the Confidence scale and its migration."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("guessed", Confidence.GUESSED),
            ("Eliminated", Confidence.ELIMINATED),
            (" confident ", Confidence.CONFIDENT),
            ("4", Confidence.CERTAIN),
            (2, Confidence.ELIMINATED),
            (Confidence.CERTAIN, Confidence.CERTAIN),
        ],
    )
    def test_from_legacy(self, raw: object, expected: Confidence) -> None:
        assert Confidence.from_legacy(raw) == expected

    @pytest.mark.parametrize("raw", ["sure", "7", 0, 5, True, None, 2.5])
    def test_from_legacy_rejects_unknown(self, raw: object) -> None:
        with pytest.raises(ValueError):
            Confidence.from_legacy(raw)

    def test_percent_midpoints(self) -> None:
        assert [confidence_to_percent(c) for c in Confidence] == [12.5, 37.5, 62.5, 87.5]

    def test_ordinal(self) -> None:
        assert confidence_to_ordinal(Confidence.GUESSED) == 0
        assert confidence_to_ordinal(Confidence.CERTAIN) == 3

    def test_labels_and_descriptions(self) -> None:
        assert confidence_label(Confidence.GUESSED).startswith("1 - ")
        assert confidence_description(Confidence.CERTAIN) == "Felt certain, but still wrong"

    @pytest.mark.parametrize(
        ("percent", "expected"),
        [
            (0, Confidence.GUESSED),
            (24.9, Confidence.GUESSED),
            (25, Confidence.ELIMINATED),
            (50, Confidence.CONFIDENT),
            (75, Confidence.CERTAIN),
            (100, Confidence.CERTAIN),
        ],
    )
    def test_from_percent(self, percent: float, expected: Confidence) -> None:
        assert confidence_from_percent(percent) == expected


class TestErrorLogDTO:
    """Tests for ErrorLogDTO model."""

    def test_valid_error(self) -> None:
        error = _error(cognitive_level="higher-order", next_steps=["Review Frank-Starling"])
        assert error.error_type == ErrorType.KNOWLEDGE
        assert error.confidence == Confidence.GUESSED
        assert error.cognitive_level == CognitiveLevel.HIGHER_ORDER
        assert error.schema_version == 1
        assert error.topic_key == ("Cardiovascular", "Preload vs Afterload")

    def test_legacy_confidence_string_migrated(self) -> None:
        assert _error(confidence="confident").confidence == Confidence.CONFIDENT

    def test_naive_timestamp_becomes_utc(self) -> None:
        error = _error(timestamp=datetime(2025, 3, 1, 9, 30))
        assert error.timestamp.tzinfo is UTC

    def test_iso_string_timestamp(self) -> None:
        error = _error(timestamp="2025-03-01T09:30:00Z")
        assert error.timestamp == datetime(2025, 3, 1, 9, 30, tzinfo=UTC)

    def test_unknown_error_type_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _error(error_type="careless")

    def test_unknown_confidence_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _error(confidence="very sure")

    def test_frozen(self) -> None:
        error = _error()
        with pytest.raises(ValidationError):
            error.topic = "Other"  # type: ignore[misc]

    def test_resolved_system_id_prefers_explicit_id(self) -> None:
        assert _error(system_id="sys-skin").resolved_system_id == "sys-skin"

    def test_resolved_system_id_from_legacy_name(self) -> None:
        assert _error(system="Renal/Urinary").resolved_system_id == "sys-renal-urinary"

    def test_resolved_system_id_from_alias(self) -> None:
        assert _error(system="GI").resolved_system_id == "sys-gastrointestinal"

    def test_resolved_system_id_unknown(self) -> None:
        assert _error(system="Astrology").resolved_system_id is None

    def test_is_malformed(self) -> None:
        assert _error(topic="   ").is_malformed
        assert _error(system="").is_malformed
        assert not _error().is_malformed


class TestExternalQuestionDTO:
    """Tests for ExternalQuestionDTO model."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("UWorld Step 1", QuestionBank.UWORLD),
            ("AMBOSS", QuestionBank.AMBOSS),
            ("NBME Self-Assessment 30", QuestionBank.NBME),
            ("Kaplan", QuestionBank.KAPLAN),
            ("First Aid Rx", QuestionBank.RX),
            ("Boards & Beyond", QuestionBank.OTHER),
        ],
    )
    def test_bank_normalized(self, name: str, expected: QuestionBank) -> None:
        assert ExternalQuestionDTO(question_bank=name).question_bank == expected

    def test_percent_correct_range(self) -> None:
        with pytest.raises(ValidationError):
            ExternalQuestionDTO(percent_correct=120)
        with pytest.raises(ValidationError):
            ExternalQuestionDTO(percent_correct=-1)

    def test_difficulty_range(self) -> None:
        with pytest.raises(ValidationError):
            ExternalQuestionDTO(difficulty=6)

    def test_next_review_made_aware(self) -> None:
        question = ExternalQuestionDTO(next_review=datetime(2025, 3, 12))
        assert question.next_review is not None
        assert question.next_review.tzinfo is UTC


class TestTopicPatternDTO:
    """Tests for TopicPatternDTO model."""

    def _pattern(self, **counts: int) -> TopicPatternDTO:
        types = {t: counts.get(t.value, 0) for t in ErrorType}
        return TopicPatternDTO(
            topic="T",
            system="Cardiovascular",
            error_count=sum(types.values()),
            error_types=types,
            last_seen=datetime(2025, 3, 1, tzinfo=UTC),
        )

    def test_counts_must_sum(self) -> None:
        with pytest.raises(ValidationError):
            TopicPatternDTO(
                topic="T",
                system="S",
                error_count=3,
                error_types={t: 0 for t in ErrorType},
                last_seen=datetime(2025, 3, 1, tzinfo=UTC),
            )

    def test_all_types_required(self) -> None:
        with pytest.raises(ValidationError):
            TopicPatternDTO(
                topic="T",
                system="S",
                error_count=1,
                error_types={ErrorType.KNOWLEDGE: 1},
                last_seen=datetime(2025, 3, 1, tzinfo=UTC),
            )

    def test_dominant_error_type(self) -> None:
        dominant, share = self._pattern(knowledge=1, time=3).dominant_error_type()
        assert dominant == ErrorType.TIME
        assert share == 0.75

    def test_dominant_error_type_tie_uses_declaration_order(self) -> None:
        dominant, share = self._pattern(process=2, reasoning=2).dominant_error_type()
        assert dominant == ErrorType.REASONING
        assert share == 0.5


class TestPriorityFactors:
    """Tests for PriorityFactors bounds."""

    def test_defaults_zero(self) -> None:
        assert PriorityFactors().frequency == 0.0

    def test_out_of_range_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PriorityFactors(recency=1.2)


class TestStudyPlanDTO:
    """Tests for study plan models."""

    def _block(self, day: int, topic: str, duration: int = 20) -> StudyBlockDTO:
        return StudyBlockDTO(
            block_id=f"{topic}-{day}",
            day=day,
            scheduled_date=datetime(2025, 3, 10, tzinfo=UTC),
            topic=topic,
            system="Cardiovascular",
            activity=ActivityType.RETRIEVAL,
            duration=duration,
            priority=1,
            priority_score=55.0,
            reasoning="Initial encoding",
            urgency=UrgencyLevel.MODERATE,
            error_type_strategy=ErrorTypeStrategy.KNOWLEDGE_REVIEW,
            why_scheduled="frequent",
        )

    def test_empty_why_scheduled_rejected(self) -> None:
        with pytest.raises(ValidationError):
            StudyBlockDTO.model_validate({**self._block(1, "A").model_dump(), "why_scheduled": ""})

    def test_day_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            StudyBlockDTO.model_validate({**self._block(1, "A").model_dump(), "day": 0})

    def test_plan_properties(self) -> None:
        plan = StudyPlanDTO(
            generated_at=datetime(2025, 3, 10, 12, tzinfo=UTC),
            week_start=datetime(2025, 3, 10, tzinfo=UTC),
            blocks=[self._block(1, "A", 30), self._block(1, "B"), self._block(4, "A", 15)],
        )
        assert plan.topic_count == 2
        assert plan.total_minutes == 65
        assert [b.topic for b in plan.blocks_for_day(1)] == ["A", "B"]
        assert plan.blocks_for_day(2) == []
