"""User-scoped endpoints for food logs, reports and insights."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, HTTPException, Request, Response, status

from nutrigenius.api.request_models import (  # noqa: TC001
    FitnessGoalUpdate,
    FoodLogCreate,
    FoodLogUpdate,
)
from nutrigenius.domain.results import Failure, Result
from nutrigenius.services.subscriptions import GATED_FEATURES

if TYPE_CHECKING:
    from nutrigenius.containers import AppContainer
    from nutrigenius.domain.food_logs import FoodLogEntry
    from nutrigenius.domain.goals import MetricProgress, ProgressReport
    from nutrigenius.domain.insights import InsightReport, StoredInsight
    from nutrigenius.domain.summaries import DailySummary, WeeklyTrend

router = APIRouter(prefix="/users/{user_id}", tags=["users"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _unwrap(result: Result):  # type: ignore[no-untyped-def]
    if isinstance(result, Failure):
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=result.reason
        )
    return result.value


@router.post("/food-logs", status_code=status.HTTP_201_CREATED)
async def create_food_log(
    user_id: UUID, body: FoodLogCreate, request: Request
) -> dict[str, object]:
    """Log a meal, enforcing the tier's daily logging limit."""
    container = _container(request)
    profile = _unwrap(container.profile_service.get_profile(user_id))
    today = _unwrap(container.report_service.daily_summary(user_id))
    usage = container.subscription_service.check_usage_limit(
        profile.subscription_tier, "food_logs_per_day", today.meal_count
    )
    if not usage.allowed:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Daily food logging limit reached",
        )
    try:
        result = container.food_log_service.add_entry(user_id, body.model_dump())
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _serialize_entry(_unwrap(result))


@router.get("/food-logs")
async def list_food_logs(
    user_id: UUID, request: Request, limit: int | None = None
) -> dict[str, object]:
    """Return the user's food logs, newest first."""
    container = _container(request)
    entries = _unwrap(container.food_log_service.list_entries(user_id, limit))
    return {"food_logs": [_serialize_entry(entry) for entry in entries]}


@router.patch("/food-logs/{entry_id}")
async def update_food_log(
    user_id: UUID, entry_id: str, body: FoodLogUpdate, request: Request
) -> dict[str, object]:
    """Apply a partial update to one of the user's food logs."""
    container = _container(request)
    try:
        result = container.food_log_service.update_entry(
            user_id, entry_id, body.model_dump(exclude_unset=True)
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    entry = _unwrap(result)
    if entry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return _serialize_entry(entry)


@router.delete("/food-logs/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_food_log(
    user_id: UUID, entry_id: str, request: Request
) -> Response:
    """Delete one of the user's food logs."""
    service = _container(request).food_log_service
    if not _unwrap(service.delete_entry(user_id, entry_id)):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/summary/daily")
async def daily_summary(
    user_id: UUID, request: Request, day: date | None = None
) -> dict[str, object]:
    """Return totals for a calendar day."""
    summary = _unwrap(_container(request).report_service.daily_summary(user_id, day))
    return _serialize_summary(summary)


@router.get("/trend/weekly")
async def weekly_trend(user_id: UUID, request: Request) -> dict[str, object]:
    """Return the 7-day trend."""
    trend = _unwrap(_container(request).report_service.weekly_trend(user_id))
    return _serialize_trend(trend)


@router.get("/progress")
async def progress(
    user_id: UUID, request: Request, day: date | None = None
) -> dict[str, object]:
    """Return progress toward the user's daily goal."""
    report = _unwrap(_container(request).report_service.progress(user_id, day))
    return _serialize_progress(report)


@router.get("/analysis")
async def analysis(user_id: UUID, request: Request) -> dict[str, object]:
    """Return today's summary, weekly trend and goal recommendations."""
    overview = _unwrap(_container(request).report_service.analysis(user_id))
    return {
        "daily_summary": _serialize_summary(overview.daily_summary),
        "weekly_trend": _serialize_trend(overview.weekly_trend),
        "goal": {
            "calories": overview.goal.calories,
            "protein": overview.goal.protein,
            "carbs": overview.goal.carbs,
            "fats": overview.goal.fats,
        },
        "recommendations": [
            {"category": rec.category, "advice": rec.advice, "target": rec.target}
            for rec in overview.recommendations
        ],
    }


@router.post("/insights")
async def generate_insights(user_id: UUID, request: Request) -> dict[str, object]:
    """Generate insights, falling back to local rules when the LLM fails."""
    report = _unwrap(await _container(request).report_service.insights(user_id))
    return _serialize_insight_report(report)


@router.get("/insights")
async def list_insights(
    user_id: UUID, request: Request, limit: int | None = None
) -> dict[str, object]:
    """Return stored insights; an unreachable store yields an empty list."""
    container = _container(request)
    result = container.insight_service.list_insights(
        user_id, limit or container.settings.insight_history_limit
    )
    stored = [] if isinstance(result, Failure) else result.value
    return {"insights": [_serialize_stored_insight(item) for item in stored]}


@router.get("/subscription")
async def subscription(user_id: UUID, request: Request) -> dict[str, object]:
    """Return the user's tier, feature access, limits and upgrade suggestions."""
    container = _container(request)
    profile = _unwrap(container.profile_service.get_profile(user_id))
    today = _unwrap(container.report_service.daily_summary(user_id))
    service = container.subscription_service
    tier = service.get_tier(profile.subscription_tier)
    usage = service.check_usage_limit(tier.id, "food_logs_per_day", today.meal_count)
    savings = service.calculate_savings(tier.id, "yearly")
    return {
        "tier": {"id": tier.id, "name": tier.name, "price": tier.price},
        "features": list(tier.features),
        "feature_access": {
            feature: service.can_access_feature(tier.id, feature)
            for feature in GATED_FEATURES
        },
        "food_logs_today": {
            "used": today.meal_count,
            "remaining": usage.remaining,
            "limit": usage.limit,
        },
        "yearly_savings": {
            "savings": savings.savings,
            "savings_percentage": savings.savings_percentage,
        },
        "upgrade_recommendations": [
            {
                "reason": rec.reason,
                "suggested_tier": rec.suggested_tier,
                "benefit": rec.benefit,
            }
            for rec in service.upgrade_recommendations(
                tier.id, food_logs_today=today.meal_count
            )
        ],
    }


@router.put("/profile/goal")
async def update_goal(
    user_id: UUID, body: FitnessGoalUpdate, request: Request
) -> dict[str, object]:
    """Change the user's fitness goal and return the resolved targets."""
    container = _container(request)
    _unwrap(container.profile_service.update_fitness_goal(user_id, body.fitness_goal))
    goal = container.report_service.goal_resolver.resolve(body.fitness_goal)
    return {
        "fitness_goal": body.fitness_goal.strip(),
        "goal": {
            "calories": goal.calories,
            "protein": goal.protein,
            "carbs": goal.carbs,
            "fats": goal.fats,
        },
    }


def _serialize_entry(entry: FoodLogEntry) -> dict[str, object]:
    return {
        "id": entry.id,
        "meal_name": entry.meal_name,
        "timestamp": entry.timestamp.isoformat(),
        "quantity": entry.quantity,
        "nutrition": entry.nutrition.as_dict(),
    }


def _serialize_summary(summary: DailySummary) -> dict[str, object]:
    return {
        "day": summary.day.isoformat(),
        "total_calories": summary.total_calories,
        "total_protein": summary.total_protein,
        "total_carbs": summary.total_carbs,
        "total_fats": summary.total_fats,
        "meal_count": summary.meal_count,
    }


def _serialize_trend(trend: WeeklyTrend) -> dict[str, object]:
    return {
        "avg_calories": trend.avg_calories,
        "avg_protein": trend.avg_protein,
        "avg_carbs": trend.avg_carbs,
        "avg_fats": trend.avg_fats,
        "daily": [
            {
                "day": day.day.isoformat(),
                "calories": day.calories,
                "protein": day.protein,
                "carbs": day.carbs,
                "fats": day.fats,
                "count": day.count,
            }
            for day in trend.daily
        ],
    }


def _serialize_metric(metric: MetricProgress) -> dict[str, int]:
    return {
        "current": metric.current,
        "goal": metric.goal,
        "percentage": metric.percentage,
    }


def _serialize_progress(report: ProgressReport) -> dict[str, object]:
    return {
        "calories": _serialize_metric(report.calories),
        "protein": _serialize_metric(report.protein),
        "carbs": _serialize_metric(report.carbs),
        "fats": _serialize_metric(report.fats),
    }


def _serialize_insight_report(report: InsightReport) -> dict[str, object]:
    return {
        "source": report.source,
        "insights": [
            insight.model_dump(mode="json", by_alias=True)
            for insight in report.analysis.insights
        ],
        "summary": report.analysis.summary.model_dump(mode="json", by_alias=True),
    }


def _serialize_stored_insight(item: StoredInsight) -> dict[str, object]:
    return {
        "id": item.id,
        "date": item.day.isoformat() if item.day else None,
        "created_at": item.created_at.isoformat() if item.created_at else None,
        **item.insight.model_dump(mode="json", by_alias=True),
    }
