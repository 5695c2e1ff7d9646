"""Tests for goal resolution and progress."""

from datetime import date

from nutrigenius.domain.goals import GoalProfile
from nutrigenius.domain.summaries import DailySummary
from nutrigenius.services.goals import GoalResolver
from nutrigenius.services.progress import ProgressCalculator


def test_resolve_is_case_insensitive() -> None:
    resolver = GoalResolver()

    assert resolver.resolve("Weight Loss") == resolver.resolve("weight loss")
    assert resolver.resolve("WEIGHT LOSS") == GoalProfile(
        calories=1500, protein=120, carbs=250, fats=65
    )


def test_resolve_muscle_gain() -> None:
    assert GoalResolver().resolve("Muscle Gain") == GoalProfile(
        calories=2500, protein=200, carbs=250, fats=65
    )


def test_resolve_unknown_or_empty_returns_default() -> None:
    resolver = GoalResolver()
    default = GoalProfile(calories=2000, protein=150, carbs=250, fats=65)

    assert resolver.resolve(None) == default
    assert resolver.resolve("") == default
    assert resolver.resolve("maintenance") == default
    assert resolver.resolve("run a marathon") == default


def test_recommendations_follow_goal() -> None:
    resolver = GoalResolver()

    weight_loss = resolver.recommendations("weight loss")
    default = resolver.recommendations(None)

    assert [rec.category for rec in weight_loss] == ["Calorie Management", "Protein"]
    assert [rec.category for rec in default] == ["Balanced Nutrition"]


def test_progress_percentages() -> None:
    summary = DailySummary(
        day=date(2024, 5, 15),
        total_calories=1225,
        total_protein=85,
        total_carbs=125,
        total_fats=13,
        meal_count=3,
    )

    report = ProgressCalculator().progress(summary, GoalProfile())

    assert report.calories.current == 1225
    assert report.calories.goal == 2000
    assert report.calories.percentage == 61
    assert report.protein.percentage == 57
    assert report.carbs.percentage == 50
    # 13 / 65 = 20%
    assert report.fats.percentage == 20


def test_progress_rounds_half_up() -> None:
    summary = DailySummary(day=date(2024, 5, 15), total_calories=1)

    report = ProgressCalculator().progress(summary, GoalProfile(calories=8))

    # 12.5% rounds to 13
    assert report.calories.percentage == 13


def test_progress_with_zero_goal_is_zero() -> None:
    summary = DailySummary(day=date(2024, 5, 15), total_calories=1800)

    report = ProgressCalculator().progress(summary, GoalProfile(calories=0))

    assert report.calories.percentage == 0
    assert report.calories.current == 1800
