"""Pydantic models for API request and response payloads."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from ironlog.domain.logs import (
    ExerciseSetEntry,
    FoodInputMode,
    FoodLogEntry,
    MealType,
    SetType,
    WorkoutEntry,
    WorkoutExerciseEntry,
    WorkoutInputMode,
)
from ironlog.domain.models import DailyLogRecord
from ironlog.domain.scoring import DailyAdherenceInput
from ironlog.domain.targets import CalorieGoal, Gender, HeightUnit, WeightUnit
from ironlog.services.profiles import (
    DEFAULT_WATER_TARGET_ML,
    OnboardingData,
    TargetsPreview,
)
from ironlog.services.splits import empty_split


class OnboardingRequest(BaseModel):
    """Onboarding answers in the user's chosen units."""

    username: str = Field(min_length=1)
    age: int = Field(ge=1, le=150)
    gender: Gender
    height: float = Field(gt=0)
    height_unit: HeightUnit = HeightUnit.CM
    start_weight: float = Field(gt=0)
    current_weight: float = Field(gt=0)
    goal_weight: float = Field(gt=0)
    weight_unit: WeightUnit = WeightUnit.KG
    calorie_goal: CalorieGoal = CalorieGoal.MAINTENANCE
    custom_calories: int | None = Field(default=None, gt=0)
    water_target: int | None = Field(default=None, gt=0)
    workout_split: dict[str, list[str]] = Field(default_factory=empty_split)
    email: str | None = None

    def to_domain(
        self, default_water_target: int = DEFAULT_WATER_TARGET_ML
    ) -> OnboardingData:
        """Convert to the onboarding domain record."""
        return OnboardingData(
            username=self.username,
            age=self.age,
            gender=self.gender,
            height=self.height,
            height_unit=self.height_unit,
            start_weight=self.start_weight,
            current_weight=self.current_weight,
            goal_weight=self.goal_weight,
            weight_unit=self.weight_unit,
            calorie_goal=self.calorie_goal,
            custom_calories=self.custom_calories,
            water_target=self.water_target or default_water_target,
            workout_split=self.workout_split,
            email=self.email,
        )


class TargetsResponse(BaseModel):
    """Computed energy and macro targets."""

    bmr: float | None
    maintenance: int
    calories: int
    protein: int
    carbs: int
    fats: int

    @classmethod
    def from_preview(cls, preview: TargetsPreview) -> "TargetsResponse":
        """Build a response from a targets preview."""
        return cls(
            bmr=preview.bmr,
            maintenance=preview.maintenance,
            calories=preview.macros.calories,
            protein=preview.macros.protein,
            carbs=preview.macros.carbs,
            fats=preview.macros.fats,
        )


class TargetsUpdateRequest(BaseModel):
    """Manually edited daily targets."""

    calories: int = Field(ge=0)
    protein: int = Field(ge=0)
    carbs: int = Field(ge=0)
    fats: int = Field(ge=0)
    water_target: int = Field(gt=0)


class AIKeyRequest(BaseModel):
    """AI credential to store; null clears it."""

    api_key: str | None = None


class AdherenceRequest(BaseModel):
    """One user-day of adherence data."""

    calorie_target: float = Field(ge=0)
    calories_consumed: float = Field(ge=0)
    protein_target: float = Field(ge=0)
    protein_consumed: float = Field(ge=0)
    water_target: float = Field(ge=0)
    water_consumed: float = Field(ge=0)
    worked_out: bool = False
    is_rest_day: bool = False
    current_weight: float = Field(gt=0)
    goal_weight: float = Field(gt=0)
    previous_weight: float = Field(gt=0)
    streak_days: int = Field(default=0, ge=0)

    def to_domain(self) -> DailyAdherenceInput:
        """Convert to the adherence domain record."""
        return DailyAdherenceInput(**self.model_dump())


class ScoreResponse(BaseModel):
    """Progress score for a day."""

    day: str | None = None
    score: float
    source: str


class FoodEstimateRequest(BaseModel):
    """Meal description and/or base64 photo to estimate."""

    description: str | None = None
    image_base64: str | None = None


class WorkoutEstimateRequest(BaseModel):
    """Free-text workout description."""

    description: str = Field(min_length=1)



class FoodLogRequest(BaseModel):
    """Food entry to add to a day."""

    meal_type: MealType = MealType.SNACK
    food_name: str = Field(min_length=1)
    calories: float = Field(ge=0)
    protein: float = Field(default=0.0, ge=0)
    carbs: float = Field(default=0.0, ge=0)
    fats: float = Field(default=0.0, ge=0)
    serving_size: str | None = None
    input_mode: FoodInputMode = FoodInputMode.MANUAL
    ai_prompt: str | None = None

    def to_domain(self) -> FoodLogEntry:
        """Convert to the food log domain record."""
        return FoodLogEntry(**self.model_dump())


class WaterLogRequest(BaseModel):
    """Water to add to a day; negative amounts undo a previous add."""

    amount_ml: int = Field(ge=-10_000, le=10_000)


class ExerciseSetRequest(BaseModel):
    """One exercise set."""

    reps: int = Field(ge=0)
    weight: float = Field(default=0.0, ge=0)
    weight_unit: WeightUnit | None = None
    set_type: SetType = SetType.WORKING


class ExerciseRequest(BaseModel):
    """One exercise with its sets."""

    name: str = Field(min_length=1)
    body_part: str = ""
    sets: list[ExerciseSetRequest] = Field(default_factory=list)
    notes: str | None = None


class WorkoutLogRequest(BaseModel):
    """Completed workout to add to a day."""

    exercises: list[ExerciseRequest] = Field(min_length=1)
    notes: str | None = None
    input_mode: WorkoutInputMode = WorkoutInputMode.MANUAL
    started_at: datetime | None = None

    def to_domain(self) -> WorkoutEntry:
        """Convert to the workout domain record."""
        return WorkoutEntry(
            exercises=tuple(
                WorkoutExerciseEntry(
                    name=exercise.name,
                    body_part=exercise.body_part,
                    sets=tuple(
                        ExerciseSetEntry(**workout_set.model_dump())
                        for workout_set in exercise.sets
                    ),
                    notes=exercise.notes,
                )
                for exercise in self.exercises
            ),
            notes=self.notes,
            input_mode=self.input_mode,
            started_at=self.started_at,
        )


class WeightLogRequest(BaseModel):
    """Body weight measurement; unit defaults to the profile's."""

    weight: float = Field(gt=0)
    unit: WeightUnit | None = None
    recorded_at: datetime | None = None


class DaySummaryResponse(BaseModel):
    """Water and progress score for one logged day."""

    day: date
    water_ml: int
    progress_score: float

    @classmethod
    def from_record(cls, record: DailyLogRecord) -> "DaySummaryResponse":
        """Build a response from a daily log record."""
        return cls(
            day=record.day,
            water_ml=record.water_ml,
            progress_score=record.progress_score,
        )
