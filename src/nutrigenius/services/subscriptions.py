"""Subscription tier lookups and feature gating."""

from dataclasses import dataclass, fields
from typing import get_args

from nutrigenius.domain.subscriptions import (
    FREE,
    TIERS,
    UNLIMITED,
    Feature,
    LimitType,
    Savings,
    SubscriptionTier,
    TierLimits,
    UpgradeRecommendation,
    UsageCheck,
)

FREE_MEAL_PLAN_LIMIT = 3
FREE_FOOD_LOG_LIMIT = 10
FREE_MONTHS_PER_YEAR = 2

GATED_FEATURES: tuple[Feature, ...] = get_args(Feature)
_LIMIT_TYPES = frozenset(limit.name for limit in fields(TierLimits))


@dataclass
class SubscriptionService:
    """Static tier table queries."""

    def get_tier(self, tier_id: str | None) -> SubscriptionTier:
        """Return the tier for an id, defaulting to the free tier."""
        return TIERS.get((tier_id or "").strip().lower(), FREE)

    def can_access_feature(
        self, tier_id: str | None, feature: Feature | str
    ) -> bool:
        """Return True when the tier unlocks the feature."""
        tier = self.get_tier(tier_id)
        if feature == "ai_meal_planning":
            return tier.id != "free"
        if feature == "unlimited_meal_plans":
            return tier.limits.meal_plans_per_month == UNLIMITED
        if feature == "advanced_insights":
            return tier.id in {"premium", "pro"}
        if feature in {"nutrition_coaching", "fitness_integrations"}:
            return tier.id == "pro"
        return True

    def check_usage_limit(
        self, tier_id: str | None, limit_type: LimitType, current_usage: int
    ) -> UsageCheck:
        """Compare usage against the tier's limit of the given type."""
        if limit_type not in _LIMIT_TYPES:
            raise ValueError(f"Unknown limit type: {limit_type!r}")
        tier = self.get_tier(tier_id)
        limit = getattr(tier.limits, limit_type)
        if limit == UNLIMITED:
            return UsageCheck(allowed=True, remaining=UNLIMITED, limit=UNLIMITED)
        return UsageCheck(
            allowed=current_usage < limit,
            remaining=max(0, limit - current_usage),
            limit=limit,
        )

    def upgrade_recommendations(
        self,
        tier_id: str | None,
        meal_plans_this_month: int = 0,
        food_logs_today: int = 0,
    ) -> list[UpgradeRecommendation]:
        """Suggest upgrades based on current usage."""
        tier = self.get_tier(tier_id)
        recommendations: list[UpgradeRecommendation] = []
        if tier.id == "free":
            if meal_plans_this_month >= FREE_MEAL_PLAN_LIMIT:
                recommendations.append(
                    UpgradeRecommendation(
                        reason="You've reached your monthly meal plan limit",
                        suggested_tier="premium",
                        benefit="Get unlimited AI-powered meal plans",
                    )
                )
            if food_logs_today >= FREE_FOOD_LOG_LIMIT:
                recommendations.append(
                    UpgradeRecommendation(
                        reason="You've reached your daily food logging limit",
                        suggested_tier="premium",
                        benefit="Log unlimited meals and get detailed insights",
                    )
                )
        if tier.id == "premium":
            recommendations.append(
                UpgradeRecommendation(
                    reason="Get personalized nutrition coaching",
                    suggested_tier="pro",
                    benefit="Access to certified nutritionists and advanced analytics",
                )
            )
        return recommendations

    def calculate_savings(
        self, tier_id: str | None, billing_period: str = "monthly"
    ) -> Savings:
        """Return savings from paying yearly instead of monthly."""
        tier = self.get_tier(tier_id)
        if billing_period != "yearly" or tier.price <= 0:
            return Savings(savings=0.0, savings_percentage=0)
        monthly_total = round(tier.price * 12, 2)
        yearly_price = round(tier.price * (12 - FREE_MONTHS_PER_YEAR), 2)
        savings = round(monthly_total - yearly_price, 2)
        return Savings(
            savings=savings,
            savings_percentage=round(savings / monthly_total * 100),
            monthly_total=monthly_total,
            yearly_price=yearly_price,
        )
