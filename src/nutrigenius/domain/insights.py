"""Models for nutrition insights and analysis results."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

InsightSource = Literal["remote", "local"]


class InsightType(str, Enum):
    """Kind of observation an insight makes."""

    DEFICIENCY = "deficiency"
    EXCESS = "excess"
    RECOMMENDATION = "recommendation"


class Insight(BaseModel):
    """Short qualitative observation about nutrition patterns."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    type: InsightType
    title: str = Field(min_length=1)
    message: str = Field(min_length=1)
    actionable_advice: str = Field(min_length=1, alias="actionableAdvice")


class AnalysisSummary(BaseModel):
    """Numeric overview that accompanies an analysis."""

    model_config = ConfigDict(populate_by_name=True)

    total_calories: int = Field(default=0, ge=0, alias="totalCalories")
    avg_protein: int = Field(default=0, ge=0, alias="avgProtein")
    avg_carbs: int = Field(default=0, ge=0, alias="avgCarbs")
    avg_fats: int = Field(default=0, ge=0, alias="avgFats")
    trends: list[str] = Field(default_factory=list)


class NutritionAnalysis(BaseModel):
    """Structured output of a nutrition analysis."""

    insights: list[Insight]
    summary: AnalysisSummary


@dataclass(frozen=True)
class InsightReport:
    """Analysis result along with where it came from."""

    analysis: NutritionAnalysis
    source: InsightSource
    failure_reason: str | None = None


@dataclass(frozen=True)
class StoredInsight:
    """Insight persisted for a user."""

    id: str
    day: date | None
    created_at: datetime | None
    insight: Insight
