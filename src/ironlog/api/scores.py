"""Progress score endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, HTTPException, Request, status

from ironlog.api.auth import current_user_id, require_api_token
from ironlog.api.models import AdherenceRequest, ScoreResponse
from ironlog.domain.scoring import ScoreSource
from ironlog.services.profiles import ProfileNotFoundError
from ironlog.services.scoring import calculate_progress_score_local

if TYPE_CHECKING:
    from ironlog.containers import AppContainer

router = APIRouter(tags=["scores"], dependencies=[Depends(require_api_token)])


@router.post("/score/preview")
async def preview_score(payload: AdherenceRequest) -> ScoreResponse:
    """Score supplied adherence data with the local rules."""
    score = calculate_progress_score_local(payload.to_domain())
    return ScoreResponse(score=score, source=ScoreSource.LOCAL)


@router.post("/days/{day}/score")
async def score_day(
    day: date,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> ScoreResponse:
    """Recompute and store the progress score for a day."""
    container: AppContainer = request.app.state.container
    try:
        result = await container.progress_score_service.score_day(user_id, day)
    except ProfileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
    return ScoreResponse(
        day=result.day.isoformat(), score=result.score, source=result.source
    )
