"""Daily and weekly nutrition aggregation over food log snapshots."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta, tzinfo

from nutrigenius.domain.food_logs import FoodLogEntry, ensure_aware
from nutrigenius.domain.summaries import (
    DailySummary,
    DayTotals,
    WeeklyTrend,
    round_half_up,
)

TREND_WINDOW = timedelta(days=7)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class NutritionAggregator:
    """Pure aggregation of food log entries in a user's local timezone."""

    timezone: tzinfo = UTC
    clock: Callable[[], datetime] = field(default=_utc_now)

    def today(self) -> date:
        """Return the current calendar date in the aggregator's timezone."""
        return ensure_aware(self.clock()).astimezone(self.timezone).date()

    def daily_summary(
        self, entries: Iterable[FoodLogEntry], reference_date: date | None = None
    ) -> DailySummary:
        """Sum entries whose local calendar date equals the reference date."""
        day = reference_date or self.today()
        calories = protein = carbs = fats = count = 0
        for entry in entries:
            if self._local_date(entry) != day:
                continue
            calories += entry.nutrition.calories
            protein += entry.nutrition.protein
            carbs += entry.nutrition.carbs
            fats += entry.nutrition.fats
            count += 1
        return DailySummary(
            day=day,
            total_calories=calories,
            total_protein=protein,
            total_carbs=carbs,
            total_fats=fats,
            meal_count=count,
        )

    def weekly_trend(
        self,
        entries: Iterable[FoodLogEntry],
        reference_instant: datetime | None = None,
    ) -> WeeklyTrend:
        """Average per-day totals over the 7 days ending at the reference."""
        end = ensure_aware(reference_instant or self.clock())
        start = end - TREND_WINDOW
        grouped: dict[date, list[FoodLogEntry]] = {}
        for entry in entries:
            timestamp = ensure_aware(entry.timestamp)
            if timestamp < start or timestamp > end:
                continue
            grouped.setdefault(self._local_date(entry), []).append(entry)

        daily = [_day_totals(day, grouped[day]) for day in sorted(grouped)]
        if not daily:
            return WeeklyTrend()

        days = len(daily)
        return WeeklyTrend(
            avg_calories=round_half_up(sum(d.calories for d in daily) / days),
            avg_protein=round_half_up(sum(d.protein for d in daily) / days),
            avg_carbs=round_half_up(sum(d.carbs for d in daily) / days),
            avg_fats=round_half_up(sum(d.fats for d in daily) / days),
            daily=daily,
        )

    def _local_date(self, entry: FoodLogEntry) -> date:
        return ensure_aware(entry.timestamp).astimezone(self.timezone).date()


def _day_totals(day: date, entries: list[FoodLogEntry]) -> DayTotals:
    return DayTotals(
        day=day,
        calories=sum(entry.nutrition.calories for entry in entries),
        protein=sum(entry.nutrition.protein for entry in entries),
        carbs=sum(entry.nutrition.carbs for entry in entries),
        fats=sum(entry.nutrition.fats for entry in entries),
        count=len(entries),
    )
