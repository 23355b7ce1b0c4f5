"""Profile onboarding and daily target management."""

import logging
import math
from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID

from ironlog.domain.models import UserProfile
from ironlog.domain.targets import (
    BiometricInput,
    CalorieGoal,
    Gender,
    HeightUnit,
    MacroBreakdown,
    WeightUnit,
)
from ironlog.services.calories import (
    calculate_bmr_for,
    calculate_macros,
    calculate_maintenance,
    convert_height,
    convert_weight,
    get_calorie_target,
)
from ironlog.services.splits import empty_split

DEFAULT_MAINTENANCE = 2000
DEFAULT_WATER_TARGET_ML = 3000
INITIAL_PROGRESS_SCORE = 50.0

_logger = logging.getLogger(__name__)


class ProfileNotFoundError(LookupError):
    """Raised when a user has not completed onboarding."""

    def __init__(self, user_id: UUID) -> None:
        super().__init__(f"Profile not found for user {user_id}")
        self.user_id = user_id


class InvalidAIKeyError(ValueError):
    """Raised when an AI credential is rejected by the provider."""


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile for a user, if present."""

    def upsert_profile(self, profile: UserProfile) -> None:
        """Create or replace a profile."""

    def update_targets(
        self, user_id: UUID, targets: MacroBreakdown, water_target: int
    ) -> None:
        """Overwrite calorie, macro and water targets."""

    def set_progress_score(self, user_id: UUID, score: float) -> None:
        """Store the latest progress score on the profile."""

    def set_ai_api_key(self, user_id: UUID, api_key: str | None) -> None:
        """Store or clear the user's AI credential."""

    def set_current_weight(self, user_id: UUID, weight: float) -> None:
        """Store the latest body weight in the profile's unit."""


class AIKeyValidator(Protocol):
    """Interface for checking an AI credential with the provider."""

    async def validate(self, api_key: str) -> bool:
        """Return True when the key can make a request."""


@dataclass(frozen=True)
class OnboardingData:
    """Raw onboarding answers in the user's chosen units."""

    username: str
    age: int
    gender: Gender
    height: float
    height_unit: HeightUnit
    start_weight: float
    current_weight: float
    goal_weight: float
    weight_unit: WeightUnit
    calorie_goal: CalorieGoal = CalorieGoal.MAINTENANCE
    custom_calories: int | None = None
    water_target: int = DEFAULT_WATER_TARGET_ML
    workout_split: dict[str, list[str]] = field(default_factory=empty_split)
    email: str | None = None

    def biometrics(self) -> BiometricInput:
        """Return biometrics converted to kg and cm."""
        return BiometricInput(
            weight_kg=convert_weight(
                self.current_weight, self.weight_unit, WeightUnit.KG
            ),
            height_cm=convert_height(self.height, self.height_unit, HeightUnit.CM),
            age=self.age,
            gender=self.gender,
        )


@dataclass(frozen=True)
class TargetsPreview:
    """Computed energy and macro targets for an onboarding answer set."""

    bmr: float | None
    maintenance: int
    macros: MacroBreakdown


def compute_targets(data: OnboardingData) -> TargetsPreview:
    """Derive BMR, maintenance and macro targets from onboarding answers."""
    biometrics = data.biometrics()
    if all(
        math.isfinite(value)
        for value in (biometrics.weight_kg, biometrics.height_cm, biometrics.age)
    ):
        bmr: float | None = calculate_bmr_for(biometrics)
        maintenance = calculate_maintenance(bmr)
    else:
        bmr = None
        maintenance = DEFAULT_MAINTENANCE
    calories = get_calorie_target(maintenance, data.calorie_goal, data.custom_calories)
    macros = calculate_macros(calories, biometrics.weight_kg, data.calorie_goal)
    return TargetsPreview(bmr=bmr, maintenance=maintenance, macros=macros)


@dataclass
class ProfileService:
    """Application service for profile and target changes."""

    repository: ProfileRepository
    key_validator: AIKeyValidator

    def get_profile(self, user_id: UUID) -> UserProfile:
        """Return a profile or raise when onboarding is incomplete."""
        profile = self.repository.get_profile(user_id)
        if profile is None:
            raise ProfileNotFoundError(user_id)
        return profile

    def complete_onboarding(self, user_id: UUID, data: OnboardingData) -> UserProfile:
        """Compute targets from onboarding answers and store the profile."""
        existing = self.repository.get_profile(user_id)
        targets = compute_targets(data).macros
        profile = UserProfile(
            id=user_id,
            username=data.username,
            age=data.age,
            gender=data.gender,
            height=data.height,
            height_unit=data.height_unit,
            start_weight=data.start_weight,
            current_weight=data.current_weight,
            goal_weight=data.goal_weight,
            weight_unit=data.weight_unit,
            calorie_target=targets.calories,
            protein_target=targets.protein,
            carb_target=targets.carbs,
            fat_target=targets.fats,
            water_target=data.water_target,
            workout_split=data.workout_split,
            progress_score=INITIAL_PROGRESS_SCORE,
            ai_api_key=existing.ai_api_key if existing else None,
            email=data.email or (existing.email if existing else None),
        )
        self.repository.upsert_profile(profile)
        _logger.info(
            "Onboarding saved: user=%s goal=%s calories=%s",
            user_id,
            data.calorie_goal,
            targets.calories,
        )
        return profile

    def get_ai_key(self, user_id: UUID) -> str | None:
        """Return the stored AI credential, or None without a profile or key."""
        profile = self.repository.get_profile(user_id)
        return profile.ai_api_key if profile else None

    def update_targets(
        self, user_id: UUID, targets: MacroBreakdown, water_target: int
    ) -> None:
        """Overwrite targets edited on the profile page."""
        self.get_profile(user_id)
        self.repository.update_targets(user_id, targets, water_target)

    async def set_ai_key(self, user_id: UUID, api_key: str | None) -> None:
        """Validate and store an AI credential; None clears it."""
        self.get_profile(user_id)
        if api_key is None:
            self.repository.set_ai_api_key(user_id, None)
            return
        cleaned = api_key.strip()
        if not cleaned or not await self.key_validator.validate(cleaned):
            raise InvalidAIKeyError("AI API key was rejected")
        self.repository.set_ai_api_key(user_id, cleaned)
