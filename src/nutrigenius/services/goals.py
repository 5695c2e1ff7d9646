"""Goal resolution from a user's stated fitness objective."""

from dataclasses import dataclass

from nutrigenius.domain.goals import GoalProfile, GoalRecommendation

DEFAULT_GOAL = GoalProfile()

GOAL_PRESETS: dict[str, GoalProfile] = {
    "weight loss": GoalProfile(calories=1500, protein=120),
    "muscle gain": GoalProfile(calories=2500, protein=200),
}

_RECOMMENDATIONS: dict[str, tuple[GoalRecommendation, ...]] = {
    "weight loss": (
        GoalRecommendation(
            category="Calorie Management",
            advice="Create a moderate calorie deficit of 300-500 calories per day",
            target="Aim for 1200-1500 calories daily (adjust based on activity level)",
        ),
        GoalRecommendation(
            category="Protein",
            advice="Increase protein to maintain muscle mass during weight loss",
            target="Aim for 1.2-1.6g protein per kg body weight",
        ),
    ),
    "muscle gain": (
        GoalRecommendation(
            category="Calorie Surplus",
            advice="Maintain a slight calorie surplus of 200-500 calories per day",
            target="Focus on nutrient-dense, high-calorie foods",
        ),
        GoalRecommendation(
            category="Protein",
            advice="Higher protein intake supports muscle protein synthesis",
            target="Aim for 1.6-2.2g protein per kg body weight",
        ),
    ),
}

_BALANCED = (
    GoalRecommendation(
        category="Balanced Nutrition",
        advice="Focus on a well-rounded diet with all macronutrients",
        target="Aim for 45-65% carbs, 20-35% fats, 10-35% protein",
    ),
)


@dataclass
class GoalResolver:
    """Maps fitness-goal labels to daily targets and guidance."""

    def resolve(self, fitness_goal: str | None) -> GoalProfile:
        """Return the preset for the label, or the default profile."""
        return GOAL_PRESETS.get(_normalize(fitness_goal), DEFAULT_GOAL)

    def recommendations(self, fitness_goal: str | None) -> list[GoalRecommendation]:
        """Return goal-specific recommendations."""
        return list(_RECOMMENDATIONS.get(_normalize(fitness_goal), _BALANCED))


def _normalize(label: str | None) -> str:
    return (label or "").strip().lower()
