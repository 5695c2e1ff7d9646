"""Per-user nutrition reports built from a single snapshot of food logs."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from uuid import UUID

from nutrigenius.domain.food_logs import FoodLogEntry
from nutrigenius.domain.goals import GoalProfile, GoalRecommendation, ProgressReport
from nutrigenius.domain.insights import InsightReport
from nutrigenius.domain.models import UserProfile
from nutrigenius.domain.results import Failure, Result, Success
from nutrigenius.domain.summaries import DailySummary, WeeklyTrend
from nutrigenius.services.aggregation import NutritionAggregator
from nutrigenius.services.food_logs import FoodLogService
from nutrigenius.services.goals import GoalResolver
from nutrigenius.services.insights import InsightService
from nutrigenius.services.profiles import ProfileService
from nutrigenius.services.progress import ProgressCalculator

_logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(frozen=True)
class UserSnapshot:
    """Profile and food logs loaded once for a report."""

    profile: UserProfile
    entries: tuple[FoodLogEntry, ...]
    aggregator: NutritionAggregator


@dataclass(frozen=True)
class NutritionOverview:
    """Daily summary, weekly trend and goal guidance together."""

    daily_summary: DailySummary
    weekly_trend: WeeklyTrend
    goal: GoalProfile
    recommendations: list[GoalRecommendation]


@dataclass
class NutritionReportService:
    """Loads user data and runs aggregation, goals, progress and insights."""

    food_log_service: FoodLogService
    profile_service: ProfileService
    insight_service: InsightService
    goal_resolver: GoalResolver = field(default_factory=GoalResolver)
    progress_calculator: ProgressCalculator = field(default_factory=ProgressCalculator)
    clock: Callable[[], datetime] = field(default=_utc_now)

    def load(self, user_id: UUID) -> Result[UserSnapshot]:
        """Load a snapshot of the user's profile and food logs."""
        profile_result = self.profile_service.get_profile(user_id)
        if isinstance(profile_result, Failure):
            _logger.warning(
                "Using default profile for %s: %s", user_id, profile_result.reason
            )
            profile = UserProfile(user_id=user_id)
        else:
            profile = profile_result.value

        entries_result = self.food_log_service.list_entries(user_id)
        if isinstance(entries_result, Failure):
            return entries_result

        aggregator = NutritionAggregator(
            timezone=self.profile_service.zone_for(profile), clock=self.clock
        )
        return Success(
            UserSnapshot(
                profile=profile,
                entries=tuple(entries_result.value),
                aggregator=aggregator,
            )
        )

    def daily_summary(
        self, user_id: UUID, day: date | None = None
    ) -> Result[DailySummary]:
        """Return the totals for a calendar day (today by default)."""
        loaded = self.load(user_id)
        if isinstance(loaded, Failure):
            return loaded
        snapshot = loaded.value
        return Success(snapshot.aggregator.daily_summary(snapshot.entries, day))

    def weekly_trend(
        self, user_id: UUID, reference: datetime | None = None
    ) -> Result[WeeklyTrend]:
        """Return the 7-day trend ending now or at the reference instant."""
        loaded = self.load(user_id)
        if isinstance(loaded, Failure):
            return loaded
        snapshot = loaded.value
        return Success(snapshot.aggregator.weekly_trend(snapshot.entries, reference))

    def progress(
        self, user_id: UUID, day: date | None = None
    ) -> Result[ProgressReport]:
        """Return progress toward the user's goal for a day."""
        loaded = self.load(user_id)
        if isinstance(loaded, Failure):
            return loaded
        snapshot = loaded.value
        summary = snapshot.aggregator.daily_summary(snapshot.entries, day)
        goal = self.goal_resolver.resolve(snapshot.profile.fitness_goal)
        return Success(self.progress_calculator.progress(summary, goal))

    def analysis(self, user_id: UUID) -> Result[NutritionOverview]:
        """Return today's summary, the weekly trend and goal guidance."""
        loaded = self.load(user_id)
        if isinstance(loaded, Failure):
            return loaded
        snapshot = loaded.value
        fitness_goal = snapshot.profile.fitness_goal
        return Success(
            NutritionOverview(
                daily_summary=snapshot.aggregator.daily_summary(snapshot.entries),
                weekly_trend=snapshot.aggregator.weekly_trend(snapshot.entries),
                goal=self.goal_resolver.resolve(fitness_goal),
                recommendations=self.goal_resolver.recommendations(fitness_goal),
            )
        )

    async def insights(self, user_id: UUID) -> Result[InsightReport]:
        """Generate insights for the user's logs with local fallback."""
        loaded = self.load(user_id)
        if isinstance(loaded, Failure):
            return loaded
        snapshot = loaded.value
        report = await self.insight_service.analyze(
            user_id=user_id,
            entries=snapshot.entries,
            fitness_goal=snapshot.profile.fitness_goal,
            summary=snapshot.aggregator.daily_summary(snapshot.entries),
            trend=snapshot.aggregator.weekly_trend(snapshot.entries),
        )
        return Success(report)
