"""Tests for subscription tiers and the profile service."""

from uuid import uuid4

import pytest

from nutrigenius.domain.models import UserProfile
from nutrigenius.domain.subscriptions import UNLIMITED
from nutrigenius.services.profiles import ProfileService
from nutrigenius.services.subscriptions import SubscriptionService
from tests.conftest import InMemoryProfileRepository


def test_unknown_tier_defaults_to_free() -> None:
    service = SubscriptionService()

    assert service.get_tier(None).id == "free"
    assert service.get_tier("platinum").id == "free"
    assert service.get_tier(" Premium ").id == "premium"


@pytest.mark.parametrize(
    ("tier_id", "feature", "expected"),
    [
        ("free", "ai_meal_planning", False),
        ("premium", "ai_meal_planning", True),
        ("free", "unlimited_meal_plans", False),
        ("pro", "unlimited_meal_plans", True),
        ("premium", "advanced_insights", True),
        ("premium", "nutrition_coaching", False),
        ("pro", "fitness_integrations", True),
        ("free", "food_logging", True),
    ],
)
def test_can_access_feature(tier_id: str, feature: str, expected: bool) -> None:
    assert SubscriptionService().can_access_feature(tier_id, feature) is expected


def test_free_tier_food_log_limit() -> None:
    service = SubscriptionService()

    under = service.check_usage_limit("free", "food_logs_per_day", 9)
    at_limit = service.check_usage_limit("free", "food_logs_per_day", 10)

    assert under.allowed is True
    assert under.remaining == 1
    assert at_limit.allowed is False
    assert at_limit.remaining == 0
    assert at_limit.limit == 10


def test_unknown_limit_type_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown limit type"):
        SubscriptionService().check_usage_limit("free", "photos_per_day", 0)


def test_paid_tiers_are_unlimited() -> None:
    usage = SubscriptionService().check_usage_limit("pro", "food_logs_per_day", 500)

    assert usage.allowed is True
    assert usage.remaining == UNLIMITED
    assert usage.limit == UNLIMITED


def test_upgrade_recommendations() -> None:
    service = SubscriptionService()

    free_busy = service.upgrade_recommendations(
        "free", meal_plans_this_month=3, food_logs_today=10
    )
    free_quiet = service.upgrade_recommendations("free")
    premium = service.upgrade_recommendations("premium")

    assert [rec.suggested_tier for rec in free_busy] == ["premium", "premium"]
    assert free_quiet == []
    assert [rec.suggested_tier for rec in premium] == ["pro"]
    assert service.upgrade_recommendations("pro") == []


def test_yearly_savings() -> None:
    savings = SubscriptionService().calculate_savings("premium", "yearly")

    assert savings.monthly_total == 119.88
    assert savings.yearly_price == 99.9
    assert savings.savings == 19.98
    assert savings.savings_percentage == 17


def test_no_savings_for_monthly_or_free() -> None:
    service = SubscriptionService()

    assert service.calculate_savings("premium", "monthly").savings == 0
    assert service.calculate_savings("free", "yearly").savings_percentage == 0


def test_profile_defaults_when_missing() -> None:
    user_id = uuid4()

    result = ProfileService(repository=InMemoryProfileRepository()).get_profile(
        user_id
    )

    assert result.value == UserProfile(user_id=user_id)
    assert result.value.subscription_tier == "free"


def test_update_fitness_goal_strips_label() -> None:
    repository = InMemoryProfileRepository()
    user_id = uuid4()

    ProfileService(repository=repository).update_fitness_goal(user_id, " Weight Loss ")

    assert repository.profiles[user_id].fitness_goal == "Weight Loss"


def test_zone_for_falls_back_on_unknown_zone() -> None:
    service = ProfileService(repository=InMemoryProfileRepository())
    user_id = uuid4()

    known = service.zone_for(UserProfile(user_id=user_id, timezone="Europe/Berlin"))
    unknown = service.zone_for(UserProfile(user_id=user_id, timezone="Mars/Base"))

    assert known.key == "Europe/Berlin"
    assert unknown.key == "UTC"
