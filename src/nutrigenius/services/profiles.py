"""User profile service."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from nutrigenius.domain.models import UserProfile
from nutrigenius.domain.results import Failure, Result, Success

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile for a user, if present."""

    def set_fitness_goal(self, user_id: UUID, fitness_goal: str) -> None:
        """Update the user's fitness goal."""


@dataclass
class ProfileService:
    """Reads the profile fields that drive goals and feature access."""

    repository: ProfileRepository
    default_timezone: str = "UTC"

    def get_profile(self, user_id: UUID) -> Result[UserProfile]:
        """Return the stored profile, or a default one when none exists."""
        try:
            profile = self.repository.get_profile(user_id)
        except Exception as exc:  # noqa: BLE001
            _logger.warning("Failed to load profile for %s: %s", user_id, exc)
            return Failure(reason="Failed to load profile", error=exc)
        return Success(profile or UserProfile(user_id=user_id))

    def update_fitness_goal(self, user_id: UUID, fitness_goal: str) -> Result[None]:
        """Persist a new fitness goal."""
        try:
            self.repository.set_fitness_goal(user_id, fitness_goal.strip())
        except Exception as exc:  # noqa: BLE001
            _logger.warning("Failed to update goal for %s: %s", user_id, exc)
            return Failure(reason="Failed to update fitness goal", error=exc)
        return Success(None)

    def zone_for(self, profile: UserProfile) -> ZoneInfo:
        """Return the profile's timezone, falling back to the default."""
        name = profile.timezone or self.default_timezone
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            _logger.warning(
                "Unknown timezone %r, using %s", name, self.default_timezone
            )
            return ZoneInfo(self.default_timezone)
