"""Subscription tier definitions."""

from dataclasses import dataclass
from typing import Literal

UNLIMITED = -1

LimitType = Literal["meal_plans_per_month", "food_logs_per_day", "insights_per_week"]
Feature = Literal[
    "ai_meal_planning",
    "unlimited_meal_plans",
    "advanced_insights",
    "nutrition_coaching",
    "fitness_integrations",
]


@dataclass(frozen=True)
class TierLimits:
    """Usage limits for a tier; UNLIMITED disables a limit."""

    meal_plans_per_month: int
    food_logs_per_day: int
    insights_per_week: int


@dataclass(frozen=True)
class SubscriptionTier:
    """A purchasable subscription level."""

    id: str
    name: str
    price: float
    features: tuple[str, ...]
    limits: TierLimits


@dataclass(frozen=True)
class UsageCheck:
    """Outcome of checking usage against a tier limit."""

    allowed: bool
    remaining: int
    limit: int


@dataclass(frozen=True)
class UpgradeRecommendation:
    """Suggestion to move to a higher tier."""

    reason: str
    suggested_tier: str
    benefit: str


@dataclass(frozen=True)
class Savings:
    """Savings from yearly billing."""

    savings: float
    savings_percentage: int
    monthly_total: float | None = None
    yearly_price: float | None = None


FREE = SubscriptionTier(
    id="free",
    name="Free",
    price=0.0,
    features=(
        "Basic meal suggestions",
        "Simple food logging",
        "Basic nutritional info",
        "Limited meal plans (3 per month)",
    ),
    limits=TierLimits(
        meal_plans_per_month=3, food_logs_per_day=10, insights_per_week=1
    ),
)

PREMIUM = SubscriptionTier(
    id="premium",
    name="Premium",
    price=9.99,
    features=(
        "AI-powered meal planning",
        "Smart grocery lists",
        "Advanced nutritional insights",
        "Unlimited meal plans",
        "Custom dietary preferences",
        "Weekly progress reports",
    ),
    limits=TierLimits(
        meal_plans_per_month=UNLIMITED,
        food_logs_per_day=UNLIMITED,
        insights_per_week=UNLIMITED,
    ),
)

PRO = SubscriptionTier(
    id="pro",
    name="Pro",
    price=19.99,
    features=(
        "Everything in Premium",
        "Personalized nutrition coaching",
        "Integration with fitness apps",
        "Advanced analytics",
        "Priority support",
        "Custom meal preferences",
        "Nutritionist consultations",
    ),
    limits=TierLimits(
        meal_plans_per_month=UNLIMITED,
        food_logs_per_day=UNLIMITED,
        insights_per_week=UNLIMITED,
    ),
)

TIERS: dict[str, SubscriptionTier] = {tier.id: tier for tier in (FREE, PREMIUM, PRO)}
