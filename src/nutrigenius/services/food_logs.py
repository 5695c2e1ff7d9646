"""Food logging service backed by a persistent store."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from nutrigenius.domain.food_logs import FoodLogEntry, NutritionInfo
from nutrigenius.domain.results import Failure, Result, Success

_logger = logging.getLogger(__name__)

_NUTRIENT_KEYS = ("calories", "protein", "carbs", "fats")


class FoodLogRepository(Protocol):
    """Persistence interface for food log entries."""

    def list_entries(self, user_id: UUID, limit: int) -> list[FoodLogEntry]:
        """Return the newest entries for a user."""

    def create_entry(self, user_id: UUID, entry: FoodLogEntry) -> FoodLogEntry:
        """Persist an entry and return it with its stored id."""

    def get_entry(self, user_id: UUID, entry_id: str) -> FoodLogEntry | None:
        """Return one of the user's entries by id."""

    def update_entry(self, user_id: UUID, entry: FoodLogEntry) -> FoodLogEntry:
        """Replace the stored fields of one of the user's entries."""

    def delete_entry(self, user_id: UUID, entry_id: str) -> bool:
        """Delete one of the user's entries; False when nothing was deleted."""


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class FoodLogService:
    """Creates, lists, updates and deletes a user's food logs."""

    repository: FoodLogRepository
    history_limit: int = 100
    clock: Callable[[], datetime] = field(default=_utc_now)

    def build_entry(self, raw: dict[str, object]) -> FoodLogEntry:
        """Build a new entry from loosely typed input."""
        timestamp = raw.get("timestamp")
        return FoodLogEntry.create(
            meal_name=str(raw.get("meal_name") or ""),
            nutrition=NutritionInfo.coerce(raw),
            timestamp=timestamp if isinstance(timestamp, datetime) else None,
            quantity=str(raw.get("quantity") or ""),
            now=self.clock(),
        )

    def add_entry(
        self, user_id: UUID, raw: dict[str, object]
    ) -> Result[FoodLogEntry]:
        """Create and persist a food log entry."""
        entry = self.build_entry(raw)
        try:
            saved = self.repository.create_entry(user_id, entry)
        except Exception as exc:  # noqa: BLE001
            _logger.warning("Failed to save food log for %s: %s", user_id, exc)
            return Failure(reason="Failed to add food log", error=exc)
        return Success(saved)

    def list_entries(
        self, user_id: UUID, limit: int | None = None
    ) -> Result[list[FoodLogEntry]]:
        """Return the user's entries, newest first."""
        try:
            entries = self.repository.list_entries(
                user_id, limit or self.history_limit
            )
        except Exception as exc:  # noqa: BLE001
            _logger.warning("Failed to load food logs for %s: %s", user_id, exc)
            return Failure(reason="Failed to load food logs", error=exc)
        return Success(
            sorted(entries, key=lambda entry: entry.timestamp, reverse=True)
        )

    def update_entry(
        self, user_id: UUID, entry_id: str, updates: dict[str, object]
    ) -> Result[FoodLogEntry | None]:
        """Apply updates to a user's entry; Success(None) when it is not theirs."""
        try:
            current = self.repository.get_entry(user_id, entry_id)
        except Exception as exc:  # noqa: BLE001
            _logger.warning("Failed to load food log %s: %s", entry_id, exc)
            return Failure(reason="Failed to update food log", error=exc)
        if current is None:
            return Success(None)

        updated = current.with_updates(
            meal_name=_optional_str(updates.get("meal_name")),
            timestamp=_optional_datetime(updates.get("timestamp")),
            quantity=_optional_str(updates.get("quantity")),
            nutrition=_merged_nutrition(current.nutrition, updates),
        )
        try:
            saved = self.repository.update_entry(user_id, updated)
        except Exception as exc:  # noqa: BLE001
            _logger.warning("Failed to update food log %s: %s", entry_id, exc)
            return Failure(reason="Failed to update food log", error=exc)
        return Success(saved)

    def delete_entry(self, user_id: UUID, entry_id: str) -> Result[bool]:
        """Delete a user's entry; Success(False) when the user has no such entry."""
        try:
            deleted = self.repository.delete_entry(user_id, entry_id)
        except Exception as exc:  # noqa: BLE001
            _logger.warning("Failed to delete food log %s: %s", entry_id, exc)
            return Failure(reason="Failed to delete food log", error=exc)
        return Success(deleted)


def _merged_nutrition(
    current: NutritionInfo, updates: dict[str, object]
) -> NutritionInfo | None:
    if not any(key in updates for key in _NUTRIENT_KEYS):
        return None
    merged: dict[str, object] = dict(current.as_dict())
    merged.update({key: updates[key] for key in _NUTRIENT_KEYS if key in updates})
    return NutritionInfo.coerce(merged)


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    return str(value)


def _optional_datetime(value: object) -> datetime | None:
    if isinstance(value, datetime):
        return value
    return None
