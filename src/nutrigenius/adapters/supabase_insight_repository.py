"""Supabase repository for nutritional insights."""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from nutrigenius.domain.insights import Insight, StoredInsight
from nutrigenius.services.insights import InsightRepository

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseInsightRepository(InsightRepository):
    """Supabase implementation for insights."""

    client: Client

    def create_insights(
        self, user_id: UUID, insights: list[Insight], created_at: datetime
    ) -> None:
        """Insert one row per insight."""
        payload = [
            {
                "user_id": str(user_id),
                "insight_type": insight.type.value,
                "title": insight.title,
                "message": insight.message,
                "actionable_advice": insight.actionable_advice,
                "date": created_at.date().isoformat(),
                "created_at": created_at.isoformat(),
            }
            for insight in insights
        ]
        if payload:
            self.client.table("nutritional_insights").insert(payload).execute()

    def list_insights(self, user_id: UUID, limit: int) -> list[StoredInsight]:
        """Return the newest insights for a user."""
        response = (
            self.client.table("nutritional_insights")
            .select(
                "id, insight_type, title, message, actionable_advice, date, created_at"
            )
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        stored: list[StoredInsight] = []
        for row in response.data or []:
            try:
                stored.append(_parse_row(row))
            except ValueError as exc:
                _logger.warning(
                    "Skipping malformed insight %s: %s", row.get("id"), exc
                )
        return stored


def _parse_row(row: dict[str, object]) -> StoredInsight:
    day_raw = row.get("date")
    created_raw = row.get("created_at")
    return StoredInsight(
        id=str(row.get("id")),
        day=date.fromisoformat(day_raw) if isinstance(day_raw, str) else None,
        created_at=(
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str) and created_raw
            else None
        ),
        insight=Insight(
            type=row.get("insight_type", "recommendation"),
            title=str(row.get("title") or ""),
            message=str(row.get("message") or ""),
            actionable_advice=str(row.get("actionable_advice") or ""),
        ),
    )
