"""Models for AI nutrition and workout estimates."""

from typing import Literal

from pydantic import BaseModel, Field


class NutritionEstimate(BaseModel):
    """Estimated macros for a described or photographed meal."""

    food_name: str
    calories: float = Field(ge=0.0)
    protein: float = Field(ge=0.0)
    carbs: float = Field(ge=0.0)
    fats: float = Field(ge=0.0)
    serving_size: str
    confidence: float = Field(ge=0.0, le=1.0)


class SetEstimate(BaseModel):
    """Single parsed exercise set."""

    reps: int = Field(ge=0)
    weight: float = Field(ge=0.0)
    weight_unit: Literal["kg", "lbs"]
    set_type: Literal["warmup", "working", "dropset", "failure"]


class ExerciseEstimate(BaseModel):
    """Parsed exercise with its sets."""

    name: str
    body_part: str
    sets: list[SetEstimate]


class WorkoutEstimate(BaseModel):
    """Structured output for workout parsing."""

    exercises: list[ExerciseEstimate]
