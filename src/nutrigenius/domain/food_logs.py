"""Domain models for food log entries."""

import logging
import math
import re
import time
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime

SCHEMA_VERSION = 1
DEFAULT_QUANTITY = "1 serving"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_last_local_id = 0

_logger = logging.getLogger(__name__)


def coerce_nutrient(value: object) -> int:
    """Coerce a raw nutrient value to a non-negative int, falling back to 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, float):
        if not math.isfinite(value):
            return 0
        return max(int(value), 0)
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match is None:
            return 0
        return max(int(match.group(1)), 0)
    return 0


def new_local_entry_id() -> str:
    """Return a strictly increasing, timestamp-derived id for unsaved entries."""
    global _last_local_id  # noqa: PLW0603
    candidate = max(time.time_ns() // 1_000_000, _last_local_id + 1)
    _last_local_id = candidate
    return f"local-{candidate}"


def ensure_aware(value: datetime) -> datetime:
    """Interpret naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


@dataclass(frozen=True)
class NutritionInfo:
    """Calories and macronutrients for a single logged meal."""

    calories: int = 0
    protein: int = 0
    carbs: int = 0
    fats: int = 0

    @classmethod
    def coerce(cls, raw: dict[str, object] | None) -> "NutritionInfo":
        """Build nutrition values from loosely typed input."""
        data = raw or {}
        return cls(
            calories=coerce_nutrient(data.get("calories")),
            protein=coerce_nutrient(data.get("protein")),
            carbs=coerce_nutrient(data.get("carbs")),
            fats=coerce_nutrient(data.get("fats")),
        )

    def as_dict(self) -> dict[str, int]:
        return {
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fats": self.fats,
        }


@dataclass(frozen=True)
class FoodLogEntry:
    """A single recorded meal or snack."""

    id: str
    meal_name: str
    timestamp: datetime
    quantity: str = DEFAULT_QUANTITY
    nutrition: NutritionInfo = field(default_factory=NutritionInfo)

    @classmethod
    def create(  # noqa: PLR0913
        cls,
        meal_name: str,
        nutrition: NutritionInfo,
        *,
        timestamp: datetime | None = None,
        quantity: str | None = None,
        entry_id: str | None = None,
        now: datetime | None = None,
    ) -> "FoodLogEntry":
        """Create a new entry, applying defaults for missing fields."""
        name = meal_name.strip()
        if not name:
            raise ValueError("meal_name must not be empty")
        created_at = timestamp or now or datetime.now(tz=UTC)
        return cls(
            id=entry_id or new_local_entry_id(),
            meal_name=name,
            timestamp=ensure_aware(created_at),
            quantity=(quantity or "").strip() or DEFAULT_QUANTITY,
            nutrition=nutrition,
        )

    def with_updates(
        self,
        *,
        meal_name: str | None = None,
        timestamp: datetime | None = None,
        quantity: str | None = None,
        nutrition: NutritionInfo | None = None,
    ) -> "FoodLogEntry":
        """Return a copy with the given fields replaced."""
        changes: dict[str, object] = {}
        if meal_name is not None:
            name = meal_name.strip()
            if not name:
                raise ValueError("meal_name must not be empty")
            changes["meal_name"] = name
        if timestamp is not None:
            changes["timestamp"] = ensure_aware(timestamp)
        if quantity is not None:
            changes["quantity"] = quantity.strip() or DEFAULT_QUANTITY
        if nutrition is not None:
            changes["nutrition"] = nutrition
        return replace(self, **changes)


def entry_from_row(row: dict[str, object]) -> FoodLogEntry | None:
    """Parse a stored row, returning None for rows of an unsupported schema."""
    version = coerce_nutrient(row.get("schema_version")) or SCHEMA_VERSION
    if version > SCHEMA_VERSION:
        _logger.warning(
            "Skipping food log %s with unsupported schema_version=%s",
            row.get("id"),
            version,
        )
        return None
    raw_nutrition = row.get("nutritional_info")
    nutrition = NutritionInfo.coerce(
        raw_nutrition if isinstance(raw_nutrition, dict) else None
    )
    timestamp = _parse_timestamp(row.get("timestamp")) or _parse_timestamp(
        row.get("created_at")
    )
    meal_name = str(row.get("meal_name") or "").strip() or "Meal"
    return FoodLogEntry(
        id=str(row.get("id")),
        meal_name=meal_name,
        timestamp=timestamp or datetime.fromtimestamp(0, tz=UTC),
        quantity=str(row.get("quantity") or "").strip() or DEFAULT_QUANTITY,
        nutrition=nutrition,
    )


def entry_to_row(entry: FoodLogEntry) -> dict[str, object]:
    """Serialize an entry to the stored row shape."""
    return {
        "meal_name": entry.meal_name,
        "timestamp": entry.timestamp.isoformat(),
        "nutritional_info": entry.nutrition.as_dict(),
        "quantity": entry.quantity,
        "schema_version": SCHEMA_VERSION,
    }


def _parse_timestamp(value: object) -> datetime | None:
    if isinstance(value, datetime):
        return ensure_aware(value)
    if isinstance(value, str) and value:
        try:
            return ensure_aware(datetime.fromisoformat(value))
        except ValueError:
            return None
    return None
