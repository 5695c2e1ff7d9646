"""Domain models for aggregated nutrition."""

import math
from dataclasses import dataclass, field
from datetime import date


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up."""
    return math.floor(value + 0.5)


@dataclass(frozen=True)
class DailySummary:
    """Totals for a single calendar day."""

    day: date
    total_calories: int = 0
    total_protein: int = 0
    total_carbs: int = 0
    total_fats: int = 0
    meal_count: int = 0


@dataclass(frozen=True)
class DayTotals:
    """Per-day totals inside a trend window."""

    day: date
    calories: int
    protein: int
    carbs: int
    fats: int
    count: int


@dataclass(frozen=True)
class WeeklyTrend:
    """Averages over the days with logged meals in a 7-day window."""

    avg_calories: int = 0
    avg_protein: int = 0
    avg_carbs: int = 0
    avg_fats: int = 0
    daily: list[DayTotals] = field(default_factory=list)
