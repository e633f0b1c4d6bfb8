"""Evaluation summary, workflow and ranking endpoints."""

import structlog
from fastapi import APIRouter

from api.config import get_settings
from api.exceptions import to_app_error
from api.schemas.evaluation import (
    EvaluationSummaryRequest,
    EvaluationSummaryResult,
    RankedUnitResult,
    RankingRequest,
    TransitionRequest,
    TransitionResult,
)
from api.schemas.responses import SuccessResponse
from emulation.exceptions import EmulationScoringError
from emulation.scoring.ranking import rank_units
from emulation.scoring.stages import summarize_evaluation
from emulation.workflow import allowed_actions, apply_transition

router = APIRouter(prefix="/evaluations", tags=["evaluations"])
logger = structlog.get_logger(__name__)


@router.post(
    "/summary",
    response_model=SuccessResponse[EvaluationSummaryResult],
    summary="Resolve final scores and stage totals",
)
async def summary(request: EvaluationSummaryRequest) -> SuccessResponse[EvaluationSummaryResult]:
    """
    Settle each criterion's final score and add up every stage.

    Review totals are null when no criterion has been reviewed in that stage.
    """
    totals = summarize_evaluation([s.to_record() for s in request.scores])
    return SuccessResponse(
        data=EvaluationSummaryResult.model_validate(totals.to_dict()),
        meta={"criteria_count": len(request.scores)},
    )


@router.post(
    "/transition",
    response_model=SuccessResponse[TransitionResult],
    summary="Move an evaluation to its next stage",
)
async def transition(request: TransitionRequest) -> SuccessResponse[TransitionResult]:
    try:
        next_status = apply_transition(request.status, request.action, request.role)
    except EmulationScoringError as exc:
        raise to_app_error(exc) from exc
    return SuccessResponse(
        data=TransitionResult(
            previous_status=request.status,
            status=next_status,
            allowed_actions=allowed_actions(next_status, request.role),
        )
    )


@router.post(
    "/ranking",
    response_model=SuccessResponse[list[RankedUnitResult]],
    summary="Rank units by total final score",
)
async def ranking(request: RankingRequest) -> SuccessResponse[list[RankedUnitResult]]:
    settings = get_settings()
    ranked = rank_units([u.to_record() for u in request.units], top_n=settings.ranking_top_n)
    return SuccessResponse(
        data=[RankedUnitResult.model_validate(r.to_dict()) for r in ranked],
        meta={"total": len(request.units)},
    )
