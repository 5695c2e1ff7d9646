"""Domain models for nutrition goals and progress."""

from dataclasses import dataclass


@dataclass(frozen=True)
class GoalProfile:
    """Daily calorie and macronutrient targets."""

    calories: int = 2000
    protein: int = 150
    carbs: int = 250
    fats: int = 65


@dataclass(frozen=True)
class GoalRecommendation:
    """Goal-specific nutrition guidance."""

    category: str
    advice: str
    target: str


@dataclass(frozen=True)
class MetricProgress:
    """Progress toward a single daily target."""

    current: int
    goal: int
    percentage: int


@dataclass(frozen=True)
class ProgressReport:
    """Percentage of goal achieved for each tracked metric."""

    calories: MetricProgress
    protein: MetricProgress
    carbs: MetricProgress
    fats: MetricProgress
