"""Supabase-backed user profile repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from ironlog.domain.models import UserProfile
from ironlog.domain.scoring import DEFAULT_SCORE
from ironlog.domain.targets import Gender, HeightUnit, MacroBreakdown, WeightUnit
from ironlog.services.profiles import ProfileRepository

# Existing users column; it holds whichever provider key the user saved.
_AI_KEY_COLUMN = "gemini_api_key"
_PROFILE_COLUMNS = (
    "id, email, username, age, gender, height, height_unit, start_weight, "
    "current_weight, goal_weight, weight_unit, calorie_target, protein_target, "
    "carb_target, fat_target, water_target, workout_split, progress_score, "
    f"{_AI_KEY_COLUMN}"
)


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile persistence."""

    client: Client

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile for a user, if present."""
        response = (
            self.client.table("users")
            .select(_PROFILE_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def upsert_profile(self, profile: UserProfile) -> None:
        """Create or replace the profile row."""
        payload: dict[str, object] = {
            "id": str(profile.id),
            "username": profile.username,
            "age": profile.age,
            "gender": str(profile.gender),
            "height": profile.height,
            "height_unit": str(profile.height_unit),
            "start_weight": profile.start_weight,
            "current_weight": profile.current_weight,
            "goal_weight": profile.goal_weight,
            "weight_unit": str(profile.weight_unit),
            "calorie_target": profile.calorie_target,
            "protein_target": profile.protein_target,
            "carb_target": profile.carb_target,
            "fat_target": profile.fat_target,
            "water_target": profile.water_target,
            "workout_split": profile.workout_split,
            "progress_score": profile.progress_score,
            _AI_KEY_COLUMN: profile.ai_api_key,
            "updated_at": _now(),
        }
        if profile.email:
            payload["email"] = profile.email
        response = self.client.table("users").upsert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to upsert profile in Supabase")

    def update_targets(
        self, user_id: UUID, targets: MacroBreakdown, water_target: int
    ) -> None:
        """Overwrite calorie, macro and water targets."""
        self.client.table("users").update(
            {
                "calorie_target": targets.calories,
                "protein_target": targets.protein,
                "carb_target": targets.carbs,
                "fat_target": targets.fats,
                "water_target": water_target,
                "updated_at": _now(),
            }
        ).eq("id", str(user_id)).execute()

    def set_progress_score(self, user_id: UUID, score: float) -> None:
        """Store the latest progress score on the profile."""
        self.client.table("users").update(
            {"progress_score": score, "updated_at": _now()}
        ).eq("id", str(user_id)).execute()

    def set_ai_api_key(self, user_id: UUID, api_key: str | None) -> None:
        """Store or clear the user's AI credential."""
        self.client.table("users").update(
            {_AI_KEY_COLUMN: api_key, "updated_at": _now()}
        ).eq("id", str(user_id)).execute()

    def set_current_weight(self, user_id: UUID, weight: float) -> None:
        """Store the latest body weight in the profile's unit."""
        self.client.table("users").update(
            {"current_weight": weight, "updated_at": _now()}
        ).eq("id", str(user_id)).execute()


def _parse_profile(row: dict[str, object]) -> UserProfile:
    split = row.get("workout_split")
    return UserProfile(
        id=UUID(str(row["id"])),
        username=str(row.get("username") or ""),
        age=int(row.get("age", 0)),
        gender=Gender(row.get("gender", Gender.OTHER)),
        height=float(row.get("height", 0.0)),
        height_unit=HeightUnit(row.get("height_unit", HeightUnit.CM)),
        start_weight=float(row.get("start_weight", 0.0)),
        current_weight=float(row.get("current_weight", 0.0)),
        goal_weight=float(row.get("goal_weight", 0.0)),
        weight_unit=WeightUnit(row.get("weight_unit", WeightUnit.KG)),
        calorie_target=int(row.get("calorie_target", 0)),
        protein_target=int(row.get("protein_target", 0)),
        carb_target=int(row.get("carb_target", 0)),
        fat_target=int(row.get("fat_target", 0)),
        water_target=int(row.get("water_target", 0)),
        workout_split=split if isinstance(split, dict) else {},
        progress_score=_score_or_default(row.get("progress_score")),
        ai_api_key=row.get(_AI_KEY_COLUMN) or None,
        email=row.get("email") or None,
    )


def _now() -> str:
    return datetime.now(tz=UTC).isoformat()


def _score_or_default(value: object) -> float:
    return float(value) if value is not None else DEFAULT_SCORE
