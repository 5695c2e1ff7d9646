"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from nutrigenius.adapters.openai_text_client import OpenAITextClient
from nutrigenius.adapters.supabase_food_log_repository import (
    SupabaseFoodLogRepository,
)
from nutrigenius.adapters.supabase_insight_repository import (
    SupabaseInsightRepository,
)
from nutrigenius.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from nutrigenius.config import Settings
from nutrigenius.services.food_logs import FoodLogService
from nutrigenius.services.insights import InsightGenerator, InsightService
from nutrigenius.services.profiles import ProfileService
from nutrigenius.services.reports import NutritionReportService
from nutrigenius.services.subscriptions import SubscriptionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    food_log_service: FoodLogService
    profile_service: ProfileService
    insight_service: InsightService
    report_service: NutritionReportService
    subscription_service: SubscriptionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    food_log_service = FoodLogService(
        repository=SupabaseFoodLogRepository(supabase_client),
        history_limit=resolved_settings.food_log_history_limit,
    )
    profile_service = ProfileService(
        repository=SupabaseProfileRepository(supabase_client),
        default_timezone=resolved_settings.default_timezone,
    )
    openai_client = OpenAITextClient.create(
        resolved_settings.openai_api_key,
        timeout_seconds=resolved_settings.openai_timeout_seconds,
    )
    insight_service = InsightService(
        generator=InsightGenerator(
            client=openai_client,
            model=resolved_settings.openai_model,
            temperature=resolved_settings.openai_temperature,
            max_output_tokens=resolved_settings.openai_max_output_tokens,
            store=resolved_settings.openai_store,
        ),
        repository=SupabaseInsightRepository(supabase_client),
    )
    report_service = NutritionReportService(
        food_log_service=food_log_service,
        profile_service=profile_service,
        insight_service=insight_service,
    )

    async def close_resources() -> None:
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        food_log_service=food_log_service,
        profile_service=profile_service,
        insight_service=insight_service,
        report_service=report_service,
        subscription_service=SubscriptionService(),
        close_resources=close_resources,
    )
