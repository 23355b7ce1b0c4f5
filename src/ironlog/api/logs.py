"""Food, water, workout, weight and history endpoints."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, HTTPException, Request, status

from ironlog.api.auth import current_user_id, require_api_token
from ironlog.api.models import (
    DaySummaryResponse,
    FoodLogRequest,
    WaterLogRequest,
    WeightLogRequest,
    WorkoutLogRequest,
)
from ironlog.services.logs import DEFAULT_HISTORY_DAYS
from ironlog.services.profiles import ProfileNotFoundError

if TYPE_CHECKING:
    from ironlog.containers import AppContainer

router = APIRouter(tags=["logs"], dependencies=[Depends(require_api_token)])


@router.post("/days/{day}/food", status_code=status.HTTP_201_CREATED)
async def log_food(
    day: date,
    payload: FoodLogRequest,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, str]:
    """Add a food entry to a day."""
    container: AppContainer = request.app.state.container
    try:
        food_log_id = container.log_service.log_food(
            user_id, day, payload.to_domain()
        )
    except ProfileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
    return {"id": str(food_log_id)}


@router.post("/days/{day}/water")
async def log_water(
    day: date,
    payload: WaterLogRequest,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Add water to a day and return the day's total."""
    container: AppContainer = request.app.state.container
    try:
        total = container.log_service.log_water(user_id, day, payload.amount_ml)
    except ProfileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
    return {"day": day.isoformat(), "water_ml": total}


@router.post("/days/{day}/workouts", status_code=status.HTTP_201_CREATED)
async def log_workout(
    day: date,
    payload: WorkoutLogRequest,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, str]:
    """Store a completed workout with its exercises and sets."""
    container: AppContainer = request.app.state.container
    try:
        workout_id = container.log_service.log_workout(
            user_id, day, payload.to_domain()
        )
    except ProfileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return {"id": str(workout_id)}


@router.post("/weights", status_code=status.HTTP_201_CREATED)
async def log_weight(
    payload: WeightLogRequest,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, float]:
    """Record a weigh-in and update the profile's current weight."""
    container: AppContainer = request.app.state.container
    try:
        current = container.log_service.log_weight(
            user_id, payload.weight, payload.unit, payload.recorded_at
        )
    except ProfileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
    return {"current_weight": current}


@router.get("/history")
async def history(
    request: Request,
    start: date | None = None,
    end: date | None = None,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, list[DaySummaryResponse]]:
    """Return per-day water and scores; defaults to the last 30 days."""
    container: AppContainer = request.app.state.container
    resolved_end = end or datetime.now(tz=UTC).date()
    resolved_start = start or resolved_end - timedelta(days=DEFAULT_HISTORY_DAYS)
    try:
        records = container.log_service.history(
            user_id, resolved_start, resolved_end
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return {"days": [DaySummaryResponse.from_record(record) for record in records]}


@router.get("/export")
async def export_data(
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Return the user's profile and every log as JSON."""
    container: AppContainer = request.app.state.container
    try:
        return container.log_service.export(user_id)
    except ProfileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
