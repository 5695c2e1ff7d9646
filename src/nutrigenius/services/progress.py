"""Progress toward daily nutrition goals."""

from dataclasses import dataclass

from nutrigenius.domain.goals import GoalProfile, MetricProgress, ProgressReport
from nutrigenius.domain.summaries import DailySummary, round_half_up


@dataclass
class ProgressCalculator:
    """Combines a daily summary with a goal profile."""

    def progress(self, summary: DailySummary, goal: GoalProfile) -> ProgressReport:
        """Return percentage-of-goal for calories and each macronutrient."""
        return ProgressReport(
            calories=_metric(summary.total_calories, goal.calories),
            protein=_metric(summary.total_protein, goal.protein),
            carbs=_metric(summary.total_carbs, goal.carbs),
            fats=_metric(summary.total_fats, goal.fats),
        )


def _metric(current: int, goal: int) -> MetricProgress:
    # A zero goal has no meaningful percentage; report 0.
    percentage = round_half_up(current / goal * 100) if goal else 0
    return MetricProgress(current=current, goal=goal, percentage=percentage)
