"""Infrastructure implementations for eat_tracker."""

from eat_tracker.infra.json_store import JsonFileStore

__all__ = [
    "JsonFileStore",
]
