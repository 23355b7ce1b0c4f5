"""AI estimation endpoints."""

from __future__ import annotations

import base64
import binascii
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, HTTPException, Request, status

from ironlog.api.auth import current_user_id, require_api_token
from ironlog.api.models import FoodEstimateRequest, WorkoutEstimateRequest
from ironlog.domain.estimates import NutritionEstimate, WorkoutEstimate
from ironlog.services.estimation import EstimationError, MissingCredentialError

if TYPE_CHECKING:
    from ironlog.containers import AppContainer

router = APIRouter(
    prefix="/estimates", tags=["estimates"], dependencies=[Depends(require_api_token)]
)


@router.post("/food")
async def estimate_food(
    payload: FoodEstimateRequest,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> NutritionEstimate:
    """Estimate macros from a meal description and/or photo."""
    container: AppContainer = request.app.state.container
    image_bytes = _decode_image(payload.image_base64)
    if not payload.description and not image_bytes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A description or an image is required",
        )
    api_key = container.profile_service.get_ai_key(user_id)
    try:
        return await container.estimation_service.estimate_food(
            api_key=api_key,
            description=payload.description,
            image_bytes=image_bytes,
        )
    except MissingCredentialError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    except EstimationError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)
        ) from exc


@router.post("/workout")
async def estimate_workout(
    payload: WorkoutEstimateRequest,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> WorkoutEstimate:
    """Parse a free-text workout into exercises and sets."""
    container: AppContainer = request.app.state.container
    api_key = container.profile_service.get_ai_key(user_id)
    try:
        return await container.estimation_service.parse_workout(
            api_key=api_key, description=payload.description
        )
    except MissingCredentialError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    except EstimationError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)
        ) from exc


def _decode_image(image_base64: str | None) -> bytes | None:
    if not image_base64:
        return None
    encoded = image_base64.split(",", 1)[1] if "," in image_base64 else image_base64
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid image encoding"
        ) from exc
