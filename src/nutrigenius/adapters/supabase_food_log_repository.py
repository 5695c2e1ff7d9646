"""Supabase repository for food logs."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from nutrigenius.domain.food_logs import FoodLogEntry, entry_from_row, entry_to_row
from nutrigenius.services.food_logs import FoodLogRepository

_COLUMNS = "id, meal_name, timestamp, nutritional_info, quantity, schema_version"


@dataclass
class SupabaseFoodLogRepository(FoodLogRepository):
    """Supabase implementation for food log entries."""

    client: Client

    def list_entries(self, user_id: UUID, limit: int) -> list[FoodLogEntry]:
        """Return the newest entries for a user."""
        response = (
            self.client.table("food_logs")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .order("timestamp", desc=True)
            .limit(limit)
            .execute()
        )
        entries = [entry_from_row(row) for row in response.data or []]
        return [entry for entry in entries if entry is not None]

    def create_entry(self, user_id: UUID, entry: FoodLogEntry) -> FoodLogEntry:
        """Insert an entry and return it with the stored id."""
        payload = entry_to_row(entry)
        payload["user_id"] = str(user_id)
        payload["created_at"] = datetime.now(tz=UTC).isoformat()
        response = self.client.table("food_logs").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create food log")
        saved = entry_from_row({**payload, **response.data[0]})
        if saved is None:
            raise RuntimeError("Stored food log has an unsupported schema")
        return saved

    def get_entry(self, user_id: UUID, entry_id: str) -> FoodLogEntry | None:
        """Return one of the user's entries by id."""
        response = (
            self.client.table("food_logs")
            .select(_COLUMNS)
            .eq("id", entry_id)
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return entry_from_row(response.data[0])

    def update_entry(self, user_id: UUID, entry: FoodLogEntry) -> FoodLogEntry:
        """Overwrite the stored fields of one of the user's entries."""
        (
            self.client.table("food_logs")
            .update(entry_to_row(entry))
            .eq("id", entry.id)
            .eq("user_id", str(user_id))
            .execute()
        )
        return entry

    def delete_entry(self, user_id: UUID, entry_id: str) -> bool:
        """Delete one of the user's entries and report whether a row matched."""
        response = (
            self.client.table("food_logs")
            .delete()
            .eq("id", entry_id)
            .eq("user_id", str(user_id))
            .execute()
        )
        return bool(response.data)
