#!/usr/bin/env python
"""End-to-end demo for eat_tracker.

Loads an error log from a JSON store, prints the priority ranking,
generates a study plan, and lists today's due reviews.

Usage:
    python scripts/demo_plan.py [STORE_PATH] [EXAM_DATE]

STORE_PATH defaults to a scratch copy of tests/fixtures/error_log.json.

Environment variables (via .env):
    EAT_TRACKER_LOG_LEVEL=INFO
    EAT_TRACKER_LOG_JSON_OUTPUT=false
    EAT_TRACKER_SCORING_URGENT_THRESHOLD=80
"""

import shutil
import sys
import tempfile
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from eat_tracker.config import EatTrackerConfig
from eat_tracker.infra.json_store import JsonFileStore
from eat_tracker.logging import configure_from_settings, get_logger
from eat_tracker.orchestrator import StudyTracker

FIXTURE = Path(__file__).parent.parent / "tests" / "fixtures" / "error_log.json"


def _store_path(argv: list[str]) -> Path:
    if len(argv) > 1:
        return Path(argv[1])
    scratch = Path(tempfile.mkdtemp(prefix="eat_tracker_")) / "error_log.json"
    shutil.copy(FIXTURE, scratch)
    return scratch


def main(argv: list[str]) -> int:
    config = EatTrackerConfig()
    configure_from_settings(config.logging)
    logger = get_logger(__name__)

    store_path = _store_path(argv)
    exam_date = argv[2] if len(argv) > 2 else None
    logger.info("demo_started", store=str(store_path), exam_date=exam_date)

    tracker = StudyTracker(JsonFileStore(store_path), config)

    print("\n" + "=" * 60)
    print("Priorities")
    print("=" * 60)
    for priority in tracker.get_priorities():
        print(
            f"  #{priority.rank:<2} {priority.score:5.1f} {priority.urgency.value:<8} "
            f"{priority.topic} ({priority.reason_chip})"
        )

    plan = tracker.generate_plan(exam_date=exam_date)
    print("\n" + "=" * 60)
    print(f"Plan: {plan.topic_count} topics, {plan.total_minutes} minutes")
    if plan.days_until_exam is not None:
        print(f"Exam in {plan.days_until_exam} days")
    print("=" * 60)
    for day in sorted({b.day for b in plan.blocks}):
        print(f"\nDay {day}:")
        for block in plan.blocks_for_day(day):
            print(f"  [{block.activity.value}] {block.topic} - {block.duration}min")
            print(f"      {block.reasoning}")

    due = tracker.get_due_reviews()
    print("\n" + "=" * 60)
    print(f"Due reviews: {len(due)}")
    print("=" * 60)
    for review in due:
        print(f"  {review.error_id}: {review.review_reason}")

    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
