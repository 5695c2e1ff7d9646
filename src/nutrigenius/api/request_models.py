"""Request bodies accepted by the HTTP API."""

from datetime import datetime

from pydantic import BaseModel, Field

RawNumber = int | float | str | None


class FoodLogCreate(BaseModel):
    """New food log entry; nutrient values are coerced, never rejected."""

    meal_name: str = Field(min_length=1)
    timestamp: datetime | None = None
    quantity: str | None = None
    calories: RawNumber = None
    protein: RawNumber = None
    carbs: RawNumber = None
    fats: RawNumber = None


class FoodLogUpdate(BaseModel):
    """Partial update of a food log entry."""

    meal_name: str | None = None
    timestamp: datetime | None = None
    quantity: str | None = None
    calories: RawNumber = None
    protein: RawNumber = None
    carbs: RawNumber = None
    fats: RawNumber = None


class FitnessGoalUpdate(BaseModel):
    """New fitness goal label."""

    fitness_goal: str
