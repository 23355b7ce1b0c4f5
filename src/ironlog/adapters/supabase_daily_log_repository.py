"""Supabase repository for daily logs, food, workouts and weights."""

from dataclasses import dataclass
from datetime import UTC, date, datetime, time
from uuid import UUID

from supabase import Client

from ironlog.domain.logs import FoodLogEntry, WorkoutEntry
from ironlog.domain.models import DailyIntake, DailyLogRecord, WeightEntry
from ironlog.domain.scoring import DEFAULT_SCORE
from ironlog.domain.targets import WeightUnit
from ironlog.services.logs import ActivityLogRepository
from ironlog.services.scoring import DailyLogRepository


_DAILY_LOG_COLUMNS = "id, user_id, date, water_ml, progress_score"


@dataclass
class SupabaseDailyLogRepository(DailyLogRepository, ActivityLogRepository):
    """Supabase implementation for per-day log reads and writes."""

    client: Client

    def get_daily_log(self, user_id: UUID, day: date) -> DailyLogRecord | None:
        """Return the daily log row for a user-day, if present."""
        response = (
            self.client.table("daily_logs")
            .select(_DAILY_LOG_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_daily_log(response.data[0])

    def get_intake(self, user_id: UUID, day: date) -> DailyIntake:
        """Return summed food log macros for a day."""
        daily_log = self.get_daily_log(user_id, day)
        if daily_log is None:
            return DailyIntake(calories=0.0, protein=0.0, carbs=0.0, fats=0.0)
        response = (
            self.client.table("food_logs")
            .select("calories, protein, carbs, fats")
            .eq("daily_log_id", str(daily_log.id))
            .execute()
        )
        rows = response.data or []
        return DailyIntake(
            calories=sum(float(row.get("calories") or 0) for row in rows),
            protein=sum(float(row.get("protein") or 0) for row in rows),
            carbs=sum(float(row.get("carbs") or 0) for row in rows),
            fats=sum(float(row.get("fats") or 0) for row in rows),
        )

    def get_water_ml(self, user_id: UUID, day: date) -> int:
        """Return water logged for a day."""
        daily_log = self.get_daily_log(user_id, day)
        return daily_log.water_ml if daily_log else 0

    def has_completed_workout(self, user_id: UUID, day: date) -> bool:
        """Return True when a completed workout was logged for the day."""
        daily_log = self.get_daily_log(user_id, day)
        if daily_log is None:
            return False
        response = (
            self.client.table("workout_logs")
            .select("id, completed_at")
            .eq("daily_log_id", str(daily_log.id))
            .execute()
        )
        return any(row.get("completed_at") for row in response.data or [])

    def list_active_days(self, user_id: UUID, start: date, end: date) -> set[date]:
        """Return days in [start, end] with any food or workout logged."""
        response = (
            self.client.table("daily_logs")
            .select("id, date")
            .eq("user_id", str(user_id))
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .execute()
        )
        days_by_log = {
            str(row["id"]): date.fromisoformat(str(row["date"]))
            for row in response.data or []
        }
        if not days_by_log:
            return set()
        log_ids = list(days_by_log)
        active: set[date] = set()
        for table in ("food_logs", "workout_logs"):
            rows = (
                self.client.table(table)
                .select("daily_log_id")
                .in_("daily_log_id", log_ids)
                .execute()
            ).data or []
            for row in rows:
                log_day = days_by_log.get(str(row.get("daily_log_id")))
                if log_day is not None:
                    active.add(log_day)
        return active

    def get_weight_before(self, user_id: UUID, day: date) -> WeightEntry | None:
        """Return the most recent weight entry recorded before a day."""
        day_start = datetime.combine(day, time.min, tzinfo=UTC)
        response = (
            self.client.table("weight_entries")
            .select("weight, unit, recorded_at")
            .eq("user_id", str(user_id))
            .lt("recorded_at", day_start.isoformat())
            .order("recorded_at", desc=True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return WeightEntry(
            weight=float(row["weight"]),
            unit=WeightUnit(row.get("unit") or WeightUnit.KG),
            recorded_at=datetime.fromisoformat(str(row["recorded_at"])),
        )

    def set_progress_score(self, user_id: UUID, day: date, score: float) -> None:
        """Overwrite the stored progress score, creating the day if needed."""
        daily_log = self.get_daily_log(user_id, day)
        if daily_log is not None:
            self.client.table("daily_logs").update({"progress_score": score}).eq(
                "id", str(daily_log.id)
            ).execute()
            return
        response = (
            self.client.table("daily_logs")
            .insert(
                {
                    "user_id": str(user_id),
                    "date": day.isoformat(),
                    "water_ml": 0,
                    "progress_score": score,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create daily log in Supabase")

    def ensure_daily_log(self, user_id: UUID, day: date) -> DailyLogRecord:
        """Return the daily log for a user-day, creating it when missing."""
        existing = self.get_daily_log(user_id, day)
        if existing is not None:
            return existing
        response = (
            self.client.table("daily_logs")
            .insert(
                {
                    "user_id": str(user_id),
                    "date": day.isoformat(),
                    "water_ml": 0,
                    "progress_score": DEFAULT_SCORE,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create daily log in Supabase")
        return _parse_daily_log(response.data[0])

    def add_food_log(
        self,
        user_id: UUID,
        daily_log_id: UUID,
        entry: FoodLogEntry,
        logged_at: datetime,
    ) -> UUID:
        """Store a food entry and return its id."""
        response = (
            self.client.table("food_logs")
            .insert(
                {
                    "daily_log_id": str(daily_log_id),
                    "user_id": str(user_id),
                    "meal_type": str(entry.meal_type),
                    "food_name": entry.food_name,
                    "calories": entry.calories,
                    "protein": entry.protein,
                    "carbs": entry.carbs,
                    "fats": entry.fats,
                    "serving_size": entry.serving_size,
                    "input_mode": str(entry.input_mode),
                    "ai_prompt": entry.ai_prompt,
                    "logged_at": logged_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create food log in Supabase")
        return UUID(str(response.data[0]["id"]))

    def set_water_ml(self, daily_log_id: UUID, water_ml: int) -> None:
        """Overwrite the water total of a daily log."""
        self.client.table("daily_logs").update({"water_ml": water_ml}).eq(
            "id", str(daily_log_id)
        ).execute()

    def add_workout_log(
        self,
        user_id: UUID,
        daily_log_id: UUID,
        entry: WorkoutEntry,
        completed_at: datetime,
    ) -> UUID:
        """Store a workout with its exercises and sets and return its id."""
        response = (
            self.client.table("workout_logs")
            .insert(
                {
                    "daily_log_id": str(daily_log_id),
                    "user_id": str(user_id),
                    "started_at": (entry.started_at or completed_at).isoformat(),
                    "completed_at": completed_at.isoformat(),
                    "notes": entry.notes,
                    "input_mode": str(entry.input_mode),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create workout log in Supabase")
        workout_log_id = str(response.data[0]["id"])
        for index, exercise in enumerate(entry.exercises):
            exercise_response = (
                self.client.table("workout_exercises")
                .insert(
                    {
                        "workout_log_id": workout_log_id,
                        "exercise_name": exercise.name,
                        "body_part": exercise.body_part,
                        "order_index": index,
                        "notes": exercise.notes,
                    }
                )
                .execute()
            )
            if not exercise_response.data:
                raise RuntimeError("Failed to create workout exercise in Supabase")
            if not exercise.sets:
                continue
            exercise_id = str(exercise_response.data[0]["id"])
            self.client.table("exercise_sets").insert(
                [
                    {
                        "workout_exercise_id": exercise_id,
                        "set_number": number,
                        "reps": workout_set.reps,
                        "weight": workout_set.weight,
                        "weight_unit": str(workout_set.weight_unit or WeightUnit.KG),
                        "set_type": str(workout_set.set_type),
                    }
                    for number, workout_set in enumerate(exercise.sets, start=1)
                ]
            ).execute()
        return UUID(workout_log_id)

    def add_weight_entry(
        self, user_id: UUID, weight: float, unit: WeightUnit, recorded_at: datetime
    ) -> None:
        """Append a body weight measurement."""
        response = (
            self.client.table("weight_entries")
            .insert(
                {
                    "user_id": str(user_id),
                    "weight": weight,
                    "unit": str(unit),
                    "recorded_at": recorded_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create weight entry in Supabase")

    def list_daily_logs(
        self, user_id: UUID, start: date, end: date
    ) -> list[DailyLogRecord]:
        """Return daily logs in [start, end], oldest first."""
        response = (
            self.client.table("daily_logs")
            .select(_DAILY_LOG_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .order("date")
            .execute()
        )
        return [_parse_daily_log(row) for row in response.data or []]

    def export_rows(self, user_id: UUID) -> dict[str, list[dict[str, object]]]:
        """Return every daily, food and workout row owned by a user."""
        selections = {
            "daily_logs": ("daily_logs", "*"),
            "food_logs": ("food_logs", "*"),
            "workout_logs": (
                "workout_logs",
                "*, workout_exercises(*, exercise_sets(*))",
            ),
            "weight_entries": ("weight_entries", "*"),
        }
        rows: dict[str, list[dict[str, object]]] = {}
        for key, (table, columns) in selections.items():
            response = (
                self.client.table(table)
                .select(columns)
                .eq("user_id", str(user_id))
                .execute()
            )
            rows[key] = list(response.data or [])
        return rows


def _parse_daily_log(row: dict[str, object]) -> DailyLogRecord:
    return DailyLogRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        day=date.fromisoformat(str(row["date"])),
        water_ml=int(row.get("water_ml") or 0),
        progress_score=_score_or_default(row.get("progress_score")),
    )


def _score_or_default(value: object) -> float:
    return float(value) if value is not None else DEFAULT_SCORE
