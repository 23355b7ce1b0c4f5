"""Profile, onboarding and target endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, HTTPException, Request, status

from ironlog.api.auth import current_user_id, require_api_token
from ironlog.api.models import (
    AIKeyRequest,
    OnboardingRequest,
    TargetsResponse,
    TargetsUpdateRequest,
)
from ironlog.domain.targets import MacroBreakdown
from ironlog.services.profiles import (
    InvalidAIKeyError,
    ProfileNotFoundError,
    compute_targets,
)
from ironlog.services.splits import SPLIT_PRESETS

if TYPE_CHECKING:
    from ironlog.containers import AppContainer

router = APIRouter(tags=["profile"], dependencies=[Depends(require_api_token)])


@router.post("/targets/preview")
async def preview_targets(
    payload: OnboardingRequest, request: Request
) -> TargetsResponse:
    """Return BMR, maintenance and macro targets without saving."""
    container: AppContainer = request.app.state.container
    data = payload.to_domain(container.settings.default_water_target_ml)
    return TargetsResponse.from_preview(compute_targets(data))


@router.put("/profile")
async def save_profile(
    payload: OnboardingRequest,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Complete onboarding and store computed targets."""
    container: AppContainer = request.app.state.container
    data = payload.to_domain(container.settings.default_water_target_ml)
    profile = container.profile_service.complete_onboarding(user_id, data)
    return {
        "id": str(profile.id),
        "calorie_target": profile.calorie_target,
        "protein_target": profile.protein_target,
        "carb_target": profile.carb_target,
        "fat_target": profile.fat_target,
        "water_target": profile.water_target,
        "progress_score": profile.progress_score,
    }


@router.patch("/profile/targets", status_code=status.HTTP_204_NO_CONTENT)
async def update_targets(
    payload: TargetsUpdateRequest,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> None:
    """Overwrite targets edited on the profile page."""
    container: AppContainer = request.app.state.container
    targets = MacroBreakdown(
        calories=payload.calories,
        protein=payload.protein,
        carbs=payload.carbs,
        fats=payload.fats,
    )
    try:
        container.profile_service.update_targets(
            user_id, targets, payload.water_target
        )
    except ProfileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc


@router.put("/profile/ai-key", status_code=status.HTTP_204_NO_CONTENT)
async def set_ai_key(
    payload: AIKeyRequest,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> None:
    """Validate and store the user's AI key."""
    container: AppContainer = request.app.state.container
    try:
        await container.profile_service.set_ai_key(user_id, payload.api_key)
    except ProfileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
    except InvalidAIKeyError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc


@router.get("/splits/presets")
async def split_presets() -> dict[str, object]:
    """Return the built-in weekly split presets."""
    return {
        "presets": [
            {
                "name": preset.name,
                "layout": {day: list(parts) for day, parts in preset.layout.items()},
            }
            for preset in SPLIT_PRESETS
        ]
    }
