"""In-memory error-log store for testing."""

from eat_tracker.models.error_log import ErrorLogDTO
from eat_tracker.models.plan import StudyPlanDTO


class MockErrorLogStore:
    """In-memory ErrorLogStoreInterface implementation."""

    def __init__(self, errors: list[ErrorLogDTO] | None = None) -> None:
        self.errors: list[ErrorLogDTO] = list(errors or [])
        self.plan: StudyPlanDTO | None = None
        self.load_count = 0
        self.save_count = 0

    def load_errors(self) -> list[ErrorLogDTO]:
        self.load_count += 1
        return list(self.errors)

    def save_plan(self, plan: StudyPlanDTO) -> None:
        self.save_count += 1
        self.plan = plan

    def load_plan(self) -> StudyPlanDTO | None:
        return self.plan
