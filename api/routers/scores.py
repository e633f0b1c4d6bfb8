"""Criteria scoring endpoints.

Stateless wrappers around the score engine: callers send the criterion,
the unit's inputs and any detail records, and get the computed score back.
"""

import structlog
from fastapi import APIRouter

from api.config import get_settings
from api.exceptions import to_app_error
from api.schemas.responses import SuccessResponse
from api.schemas.scoring import (
    BonusPenaltyRequest,
    CalculateScoreRequest,
    ClusterLeaderRequest,
    ClusterLeaderResult,
    FixedScoreRequest,
    ParentScoreRequest,
    QualitativeRequest,
    QuantitativeRequest,
    ScoreResult,
    TreeScoreRequest,
    TreeScoreResult,
)
from emulation.exceptions import CriteriaTreeError
from emulation.scoring.engine import (
    calculate_bonus_penalty_score,
    calculate_fixed_score,
    calculate_parent_score,
    calculate_qualitative_score,
    calculate_quantitative_score,
    calculate_score,
    find_cluster_leader,
)
from emulation.scoring.tree import aggregate_tree

router = APIRouter(prefix="/scores", tags=["scores"])
logger = structlog.get_logger(__name__)


@router.post(
    "/calculate",
    response_model=SuccessResponse[ScoreResult],
    summary="Score a criterion by its type",
)
async def calculate(request: CalculateScoreRequest) -> SuccessResponse[ScoreResult]:
    """
    Score one criterion for one unit.

    When leader_actual is omitted but cluster_results are given, the cluster
    leader is looked up from them first.
    """
    leader_actual = request.leader_actual
    meta: dict = {}
    if leader_actual is None and request.cluster_results:
        leader = find_cluster_leader([r.to_record() for r in request.cluster_results])
        if leader is not None:
            leader_actual = leader.actual_value
            meta["cluster_leader"] = leader.to_dict()

    score = calculate_score(
        criterion=request.criterion.to_record(),
        result=request.result.to_record(),
        formula_detail=request.formula_detail.to_record() if request.formula_detail else None,
        target=request.target_record(),
        leader_actual=leader_actual,
    )
    logger.debug(
        "Criterion scored",
        criteria_id=request.criterion.id,
        unit_id=request.result.unit_id,
        score=score,
    )
    return SuccessResponse(data=ScoreResult(score=score), meta=meta or None)


@router.post("/quantitative", response_model=SuccessResponse[ScoreResult])
async def quantitative(request: QuantitativeRequest) -> SuccessResponse[ScoreResult]:
    """Evaluate a quantitative formula directly."""
    score = calculate_quantitative_score(
        actual=request.actual,
        target=request.target,
        max_score=request.max_score,
        formula_type=request.formula_type,
        leader_actual=request.leader_actual,
    )
    return SuccessResponse(data=ScoreResult(score=score))


@router.post("/qualitative", response_model=SuccessResponse[ScoreResult])
async def qualitative(request: QualitativeRequest) -> SuccessResponse[ScoreResult]:
    score = calculate_qualitative_score(request.is_achieved, request.max_score)
    return SuccessResponse(data=ScoreResult(score=score))


@router.post("/fixed", response_model=SuccessResponse[ScoreResult])
async def fixed(request: FixedScoreRequest) -> SuccessResponse[ScoreResult]:
    score = calculate_fixed_score(
        count=request.count,
        point_per_unit=request.point_per_unit,
        max_score_limit=request.max_score_limit,
    )
    return SuccessResponse(data=ScoreResult(score=score))


@router.post("/bonus-penalty", response_model=SuccessResponse[ScoreResult])
async def bonus_penalty(request: BonusPenaltyRequest) -> SuccessResponse[ScoreResult]:
    score = calculate_bonus_penalty_score(
        bonus_count=request.bonus_count,
        penalty_count=request.penalty_count,
        bonus_point=request.bonus_point,
        penalty_point=request.penalty_point,
        min_score=request.min_score,
        max_score=request.max_score,
    )
    return SuccessResponse(data=ScoreResult(score=score))


@router.post("/parent", response_model=SuccessResponse[ScoreResult])
async def parent(request: ParentScoreRequest) -> SuccessResponse[ScoreResult]:
    """Sum child scores of a parent criterion."""
    return SuccessResponse(data=ScoreResult(score=calculate_parent_score(request.children_scores)))


@router.post(
    "/cluster-leader",
    response_model=SuccessResponse[ClusterLeaderResult | None],
    summary="Find the unit leading the cluster",
)
async def cluster_leader(
    request: ClusterLeaderRequest,
) -> SuccessResponse[ClusterLeaderResult | None]:
    """Data is null when no results are given."""
    leader = find_cluster_leader([r.to_record() for r in request.results])
    if leader is None:
        return SuccessResponse(data=None)
    return SuccessResponse(
        data=ClusterLeaderResult(unit_id=leader.unit_id, actual_value=leader.actual_value)
    )


@router.post(
    "/tree",
    response_model=SuccessResponse[TreeScoreResult],
    summary="Aggregate a criteria tree",
)
async def tree(request: TreeScoreRequest) -> SuccessResponse[TreeScoreResult]:
    """
    Compute every parent score from the supplied leaf scores.

    Parents whose total exceeds their max score are listed as violations;
    totals are not clamped.
    """
    settings = get_settings()
    try:
        tree_score = aggregate_tree(
            criteria=[c.to_record() for c in request.criteria],
            leaf_scores=request.leaf_scores,
            report_ceiling=settings.report_parent_ceiling,
        )
    except CriteriaTreeError as exc:
        raise to_app_error(exc) from exc
    return SuccessResponse(
        data=TreeScoreResult.model_validate(tree_score.to_dict()),
        meta={"violation_count": len(tree_score.violations)},
    )
