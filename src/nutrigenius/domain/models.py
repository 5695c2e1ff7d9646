"""Domain models for users."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class UserProfile:
    """Profile fields that influence goals and feature access."""

    user_id: UUID
    fitness_goal: str | None = None
    subscription_tier: str = "free"
    timezone: str | None = None
