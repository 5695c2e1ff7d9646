"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from uuid import UUID

import pytest

from nutrigenius.config import Settings
from nutrigenius.containers import AppContainer
from nutrigenius.domain.food_logs import FoodLogEntry, NutritionInfo
from nutrigenius.domain.insights import Insight, StoredInsight
from nutrigenius.domain.models import UserProfile
from nutrigenius.services.food_logs import FoodLogRepository, FoodLogService
from nutrigenius.services.insights import (
    InsightGenerator,
    InsightRepository,
    InsightService,
    TextGenerationClient,
)
from nutrigenius.services.profiles import ProfileRepository, ProfileService
from nutrigenius.services.reports import NutritionReportService
from nutrigenius.services.subscriptions import SubscriptionService

FIXED_NOW = datetime(2024, 5, 15, 12, 0, tzinfo=UTC)

REMOTE_ANALYSIS = {
    "insights": [
        {
            "type": "recommendation",
            "title": "Add More Fiber",
            "message": "Your meals are low in whole grains.",
            "actionableAdvice": "Swap white bread for whole-grain options.",
        }
    ],
    "summary": {
        "totalCalories": 1225,
        "avgProtein": 60,
        "avgCarbs": 150,
        "avgFats": 40,
        "trends": ["Steady breakfast habit"],
    },
}


def fixed_clock() -> datetime:
    return FIXED_NOW


def make_entry(  # noqa: PLR0913
    entry_id: str,
    timestamp: datetime,
    calories: int = 0,
    protein: int = 0,
    carbs: int = 0,
    fats: int = 0,
    meal_name: str = "Meal",
) -> FoodLogEntry:
    return FoodLogEntry(
        id=entry_id,
        meal_name=meal_name,
        timestamp=timestamp,
        nutrition=NutritionInfo(
            calories=calories, protein=protein, carbs=carbs, fats=fats
        ),
    )


@dataclass
class InMemoryFoodLogRepository(FoodLogRepository):
    """In-memory food log repository for tests."""

    entries: dict[str, tuple[UUID, FoodLogEntry]] = field(default_factory=dict)
    next_id: int = 1

    def list_entries(self, user_id: UUID, limit: int) -> list[FoodLogEntry]:
        owned = [entry for owner, entry in self.entries.values() if owner == user_id]
        owned.sort(key=lambda entry: entry.timestamp, reverse=True)
        return owned[:limit]

    def create_entry(self, user_id: UUID, entry: FoodLogEntry) -> FoodLogEntry:
        saved = replace(entry, id=f"row-{self.next_id}")
        self.next_id += 1
        self.entries[saved.id] = (user_id, saved)
        return saved

    def get_entry(self, user_id: UUID, entry_id: str) -> FoodLogEntry | None:
        stored = self.entries.get(entry_id)
        if stored is None or stored[0] != user_id:
            return None
        return stored[1]

    def update_entry(self, user_id: UUID, entry: FoodLogEntry) -> FoodLogEntry:
        owner, _ = self.entries[entry.id]
        if owner != user_id:
            raise KeyError(entry.id)
        self.entries[entry.id] = (owner, entry)
        return entry

    def delete_entry(self, user_id: UUID, entry_id: str) -> bool:
        if self.get_entry(user_id, entry_id) is None:
            return False
        del self.entries[entry_id]
        return True


@dataclass
class FailingFoodLogRepository(FoodLogRepository):
    """Repository whose every call fails like an unreachable store."""

    def list_entries(self, user_id: UUID, limit: int) -> list[FoodLogEntry]:
        raise ConnectionError("store unreachable")

    def create_entry(self, user_id: UUID, entry: FoodLogEntry) -> FoodLogEntry:
        raise ConnectionError("store unreachable")

    def get_entry(self, user_id: UUID, entry_id: str) -> FoodLogEntry | None:
        raise ConnectionError("store unreachable")

    def update_entry(self, user_id: UUID, entry: FoodLogEntry) -> FoodLogEntry:
        raise ConnectionError("store unreachable")

    def delete_entry(self, user_id: UUID, entry_id: str) -> bool:
        raise ConnectionError("store unreachable")


@dataclass
class InMemoryInsightRepository(InsightRepository):
    """In-memory insight repository for tests."""

    saved: list[tuple[UUID, Insight, datetime]] = field(default_factory=list)
    fail_on_save: bool = False

    def create_insights(
        self, user_id: UUID, insights: list[Insight], created_at: datetime
    ) -> None:
        if self.fail_on_save:
            raise ConnectionError("store unreachable")
        for insight in insights:
            self.saved.append((user_id, insight, created_at))

    def list_insights(self, user_id: UUID, limit: int) -> list[StoredInsight]:
        stored = [
            StoredInsight(
                id=str(index),
                day=created_at.date(),
                created_at=created_at,
                insight=insight,
            )
            for index, (owner, insight, created_at) in enumerate(self.saved)
            if owner == user_id
        ]
        return list(reversed(stored))[:limit]


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, UserProfile] = field(default_factory=dict)

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        return self.profiles.get(user_id)

    def set_fitness_goal(self, user_id: UUID, fitness_goal: str) -> None:
        current = self.profiles.get(user_id) or UserProfile(user_id=user_id)
        self.profiles[user_id] = replace(current, fitness_goal=fitness_goal)


@dataclass
class FakeTextClient(TextGenerationClient):
    """Fake text-generation client returning a payload or raising an error."""

    output: str = ""
    error: Exception | None = None
    prompts: list[str] = field(default_factory=list)

    async def complete(  # noqa: PLR0913
        self,
        *,
        model: str,
        prompt: str,
        system: str,
        schema: dict[str, object],
        temperature: float | None,
        max_output_tokens: int | None,
        store: bool,
    ) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.output


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        openai_api_key="openai-key",
    )


@pytest.fixture
def food_log_repository() -> InMemoryFoodLogRepository:
    return InMemoryFoodLogRepository()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def insight_repository() -> InMemoryInsightRepository:
    return InMemoryInsightRepository()


@pytest.fixture
def text_client() -> FakeTextClient:
    return FakeTextClient(error=TimeoutError("request timed out"))


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    food_log_repository: InMemoryFoodLogRepository,
    profile_repository: InMemoryProfileRepository,
    insight_repository: InMemoryInsightRepository,
    text_client: FakeTextClient,
) -> AppContainer:
    food_log_service = FoodLogService(
        repository=food_log_repository,
        history_limit=settings.food_log_history_limit,
        clock=fixed_clock,
    )
    profile_service = ProfileService(
        repository=profile_repository,
        default_timezone=settings.default_timezone,
    )
    insight_service = InsightService(
        generator=InsightGenerator(client=text_client, model=settings.openai_model),
        repository=insight_repository,
    )
    report_service = NutritionReportService(
        food_log_service=food_log_service,
        profile_service=profile_service,
        insight_service=insight_service,
        clock=fixed_clock,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        food_log_service=food_log_service,
        profile_service=profile_service,
        insight_service=insight_service,
        report_service=report_service,
        subscription_service=SubscriptionService(),
        close_resources=close_resources,
    )
