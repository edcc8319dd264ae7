"""JSON file store for eat_tracker.

A single JSON document holds the error log and the current plan:

    {"errors": [{...}, ...], "plan": {...} | null}

This is the storage boundary: stored records are validated and
hydrated into DTOs here, so legacy confidence strings and naive
timestamps never reach the services.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from eat_tracker.interfaces.storage import ErrorLogStoreInterface
from eat_tracker.logging import get_logger
from eat_tracker.models.error_log import ErrorLogDTO
from eat_tracker.models.plan import StudyPlanDTO

__all__ = [
    "JsonFileStore",
]

logger = get_logger(__name__)


class JsonFileStore(ErrorLogStoreInterface):
    """File-backed implementation of ErrorLogStoreInterface.

    A missing file behaves like an empty store.

    Example:
        store = JsonFileStore("eat_tracker.json")
        store.add_errors([error])
        errors = store.load_errors()
    """

    def __init__(self, path: Path | str) -> None:
        """Initialize store.

        Args:
            path: Location of the JSON document
        """
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load_errors(self) -> list[ErrorLogDTO]:
        """Load and validate all stored error logs.

        Records that fail validation are skipped with a warning.
        """
        errors: list[ErrorLogDTO] = []
        for index, record in enumerate(self._read().get("errors", [])):
            try:
                errors.append(ErrorLogDTO.model_validate(record))
            except ValidationError as e:
                logger.warning(
                    "invalid_error_record_skipped",
                    index=index,
                    error_id=record.get("id") if isinstance(record, dict) else None,
                    error_count=e.error_count(),
                )
        logger.debug("errors_loaded", path=str(self._path), count=len(errors))
        return errors

    def add_errors(self, errors: list[ErrorLogDTO]) -> None:
        """Append error logs to the stored log."""
        document = self._read()
        stored = document.setdefault("errors", [])
        stored.extend(e.model_dump(mode="json") for e in errors)
        self._write(document)

    def save_plan(self, plan: StudyPlanDTO) -> None:
        document = self._read()
        document["plan"] = plan.model_dump(mode="json")
        self._write(document)
        logger.debug("plan_saved", path=str(self._path), block_count=len(plan.blocks))

    def load_plan(self) -> StudyPlanDTO | None:
        """Load the stored plan, or None if absent or invalid."""
        raw = self._read().get("plan")
        if raw is None:
            return None
        try:
            return StudyPlanDTO.model_validate(raw)
        except ValidationError as e:
            logger.warning("invalid_plan_discarded", error_count=e.error_count())
            return None

    def _read(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        with self._path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object in {self._path}")
        return data

    def _write(self, document: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("w", encoding="utf-8") as f:
            json.dump(document, f, indent=2)
