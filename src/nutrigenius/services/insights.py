"""Nutrition insights from an LLM with deterministic local fallback."""

import json
import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from nutrigenius.domain.food_logs import FoodLogEntry
from nutrigenius.domain.insights import (
    AnalysisSummary,
    Insight,
    InsightReport,
    InsightType,
    NutritionAnalysis,
    StoredInsight,
)
from nutrigenius.domain.results import Failure, Result, Success
from nutrigenius.domain.summaries import DailySummary, WeeklyTrend

LOW_CALORIE_THRESHOLD = 1200
HIGH_CALORIE_THRESHOLD = 2500
LOW_PROTEIN_THRESHOLD = 50

SYSTEM_PROMPT = (
    "You are a certified nutritionist and health expert. "
    "Always respond with valid JSON and provide actionable advice."
)

_non_negative_int = {"type": "integer", "minimum": 0}

INSIGHT_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "insights": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "type": {
                        "type": "string",
                        "enum": [kind.value for kind in InsightType],
                    },
                    "title": {"type": "string"},
                    "message": {"type": "string"},
                    "actionableAdvice": {"type": "string"},
                },
                "required": ["type", "title", "message", "actionableAdvice"],
                "additionalProperties": False,
            },
        },
        "summary": {
            "type": "object",
            "properties": {
                "totalCalories": _non_negative_int,
                "avgProtein": _non_negative_int,
                "avgCarbs": _non_negative_int,
                "avgFats": _non_negative_int,
                "trends": {"type": "array", "items": {"type": "string"}},
            },
            "required": [
                "totalCalories",
                "avgProtein",
                "avgCarbs",
                "avgFats",
                "trends",
            ],
            "additionalProperties": False,
        },
    },
    "required": ["insights", "summary"],
    "additionalProperties": False,
}

_logger = logging.getLogger(__name__)


class TextGenerationClient(Protocol):
    """Interface for a structured text-generation service."""

    async def complete(  # noqa: PLR0913
        self,
        *,
        model: str,
        prompt: str,
        system: str,
        schema: dict[str, object],
        temperature: float | None,
        max_output_tokens: int | None,
        store: bool,
    ) -> str:
        """Return the raw completion text."""


class InsightRepository(Protocol):
    """Persistence interface for generated insights."""

    def create_insights(
        self, user_id: UUID, insights: list[Insight], created_at: datetime
    ) -> None:
        """Persist insights for a user."""

    def list_insights(self, user_id: UUID, limit: int) -> list[StoredInsight]:
        """Return the most recent insights for a user."""


@dataclass
class InsightGenerator:
    """Produces insights remotely or with local threshold rules."""

    client: TextGenerationClient
    model: str
    temperature: float | None = 0.6
    max_output_tokens: int | None = 1500
    store: bool = False

    def generate_local(
        self, summary: DailySummary, trend: WeeklyTrend
    ) -> Iterator[Insight]:
        """Yield rule-based insights for a day's totals."""
        if summary.total_calories < LOW_CALORIE_THRESHOLD:
            yield Insight(
                type=InsightType.DEFICIENCY,
                title="Low Calorie Intake",
                message=(
                    "Your daily calorie intake appears to be below "
                    "recommended levels."
                ),
                actionable_advice=(
                    "Consider adding healthy, calorie-dense foods like nuts, "
                    "avocados, or whole grains to your meals."
                ),
            )
        elif summary.total_calories > HIGH_CALORIE_THRESHOLD:
            yield Insight(
                type=InsightType.EXCESS,
                title="High Calorie Intake",
                message=(
                    "Your daily calorie intake is higher than typical "
                    "recommendations."
                ),
                actionable_advice=(
                    "Focus on portion control and choose nutrient-dense, "
                    "lower-calorie foods."
                ),
            )
        if summary.total_protein < LOW_PROTEIN_THRESHOLD:
            yield Insight(
                type=InsightType.DEFICIENCY,
                title="Low Protein Intake",
                message=(
                    "Your protein intake could be increased for better muscle "
                    "maintenance and satiety."
                ),
                actionable_advice=(
                    "Include lean proteins like chicken, fish, beans, or Greek "
                    "yogurt in each meal."
                ),
            )
        yield Insight(
            type=InsightType.RECOMMENDATION,
            title="Balanced Nutrition",
            message=(
                "Maintaining a balanced diet with variety is key to optimal health."
            ),
            actionable_advice=(
                "Try to include a variety of colorful fruits and vegetables, "
                "whole grains, and lean proteins in your daily meals."
            ),
        )

    def local_analysis(
        self, summary: DailySummary, trend: WeeklyTrend
    ) -> NutritionAnalysis:
        """Build a full analysis from the local rules."""
        return NutritionAnalysis(
            insights=list(self.generate_local(summary, trend)),
            summary=AnalysisSummary(
                total_calories=summary.total_calories,
                avg_protein=trend.avg_protein,
                avg_carbs=trend.avg_carbs,
                avg_fats=trend.avg_fats,
                trends=["Consistent meal logging", "Room for more variety"],
            ),
        )

    async def generate_remote(
        self, entries: Sequence[FoodLogEntry], fitness_goal: str | None
    ) -> Result[NutritionAnalysis]:
        """Ask the text-generation service for an analysis."""
        prompt = build_analysis_prompt(entries, fitness_goal or "general health")
        try:
            raw = await self.client.complete(
                model=self.model,
                prompt=prompt,
                system=SYSTEM_PROMPT,
                schema=INSIGHT_SCHEMA,
                temperature=self.temperature,
                max_output_tokens=self.max_output_tokens,
                store=self.store,
            )
            analysis = NutritionAnalysis.model_validate_json(raw)
        except Exception as exc:  # noqa: BLE001
            return Failure(reason=f"{type(exc).__name__}: {exc}", error=exc)
        return Success(analysis)


@dataclass
class InsightService:
    """Runs remote analysis with local fallback and stores the results."""

    generator: InsightGenerator
    repository: InsightRepository

    async def analyze(
        self,
        user_id: UUID,
        entries: Sequence[FoodLogEntry],
        fitness_goal: str | None,
        summary: DailySummary,
        trend: WeeklyTrend,
    ) -> InsightReport:
        """Return a remote analysis, or the local one when the remote fails."""
        result = await self.generator.generate_remote(entries, fitness_goal)
        if isinstance(result, Failure):
            _logger.warning("Remote nutrition analysis failed: %s", result.reason)
            return InsightReport(
                analysis=self.generator.local_analysis(summary, trend),
                source="local",
                failure_reason=result.reason,
            )

        analysis = result.value
        if analysis.insights:
            try:
                self.repository.create_insights(
                    user_id, analysis.insights, datetime.now(tz=UTC)
                )
            except Exception:
                _logger.exception("Failed to save nutritional insights")
        return InsightReport(analysis=analysis, source="remote")

    def list_insights(
        self, user_id: UUID, limit: int = 20
    ) -> Result[list[StoredInsight]]:
        """Return stored insights for a user."""
        try:
            return Success(self.repository.list_insights(user_id, limit))
        except Exception as exc:  # noqa: BLE001
            _logger.warning("Failed to load insights for %s: %s", user_id, exc)
            return Failure(reason=str(exc), error=exc)


def build_analysis_prompt(entries: Sequence[FoodLogEntry], fitness_goal: str) -> str:
    """Render the nutrition analysis prompt."""
    logs = [
        {
            "mealName": entry.meal_name,
            "timestamp": entry.timestamp.isoformat(),
            "quantity": entry.quantity,
            "nutritionalInfo": entry.nutrition.as_dict(),
        }
        for entry in entries
    ]
    return (
        "Analyze the following food logs and provide personalized "
        "nutritional insights.\n"
        f"Food logs: {json.dumps(logs)}\n"
        f"User goals: {fitness_goal}\n"
        "Each insight type must be one of deficiency, excess or recommendation. "
        "Include a short summary with total calories, average macros and trends."
    )
