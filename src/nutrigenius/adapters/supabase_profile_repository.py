"""Supabase repository for user profiles."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from nutrigenius.domain.models import UserProfile
from nutrigenius.services.profiles import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for the users table."""

    client: Client

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile for a user."""
        response = (
            self.client.table("users")
            .select("id, fitness_goals, subscription_tier, timezone")
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return UserProfile(
            user_id=user_id,
            fitness_goal=row.get("fitness_goals") or None,
            subscription_tier=str(row.get("subscription_tier") or "free"),
            timezone=row.get("timezone") or None,
        )

    def set_fitness_goal(self, user_id: UUID, fitness_goal: str) -> None:
        """Update the user's fitness goal."""
        self.client.table("users").update(
            {
                "fitness_goals": fitness_goal,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).eq("id", str(user_id)).execute()
