"""Criteria score engine.

Computes the score of a leaf criterion from its type and submitted inputs:

- Quantitative (type 1): actual vs target on one of four formula curves
- Qualitative (type 2): full marks or nothing
- Fixed score (type 3): count x points per unit, optionally capped
- Bonus/penalty (type 4): bonus minus penalty, optionally clamped

Parents (type 0) are the sum of their children. Every function here is pure:
missing inputs resolve to 0 or to a conservative branch instead of raising,
so one bad line item cannot break a whole evaluation total.
"""

import math
from collections.abc import Iterable, Sequence
from decimal import ROUND_HALF_UP, Decimal

import structlog

from emulation.scoring.models import (
    AnyFormulaDetail,
    BonusPenaltyDetail,
    ClusterLeader,
    CriteriaResult,
    CriteriaTarget,
    CriteriaType,
    Criterion,
    FixedScoreDetail,
    FormulaType,
)

logger = structlog.get_logger(__name__)

# Share of max score awarded for meeting the target
BASELINE_SHARE = 0.5

_CENTS = Decimal("0.01")

# Floats at or above this magnitude have no fractional part
_ROUNDING_LIMIT = 1e16


def round_score(value: float) -> float:
    """Round half-up to 2 decimal places.

    Non-finite and very large values are returned unchanged.
    """
    if not math.isfinite(value) or abs(value) >= _ROUNDING_LIMIT:
        return float(value)
    return float(Decimal(str(value)).quantize(_CENTS, rounding=ROUND_HALF_UP))


def calculate_quantitative_score(
    actual: float,
    target: float,
    max_score: float,
    formula_type: int,
    leader_actual: float | None = None,
) -> float:
    """
    Score a quantitative criterion.

    Args:
        actual: Value the unit achieved
        target: Value the unit was assigned
        max_score: Maximum score of the criterion
        formula_type: Scoring curve (1-4)
        leader_actual: Cluster leader's actual value (formula 4 only)

    Returns:
        Score rounded to 2 decimals, 0 when the target is 0
    """
    if target == 0:
        return 0.0

    rate = actual / target
    baseline = BASELINE_SHARE * max_score

    if formula_type == FormulaType.UNDER_TARGET:
        return round_score(baseline * rate)

    elif formula_type == FormulaType.MEETS_TARGET:
        if rate >= 1.0:
            return round_score(baseline)
        return round_score(baseline * rate)

    elif formula_type == FormulaType.CLUSTER_LEADER:
        if rate > 1.0:
            return max_score
        return round_score(baseline)

    elif formula_type == FormulaType.EXCEEDS_NOT_LEADING:
        if leader_actual is None or leader_actual <= target:
            # No leader ahead of the target: treat as met
            return round_score(baseline)
        if actual <= target:
            return round_score(baseline * rate)
        excess_ratio = (actual - target) / (leader_actual - target)
        return round_score(min(baseline + excess_ratio * baseline, max_score))

    return 0.0


def calculate_qualitative_score(is_achieved: bool, max_score: float) -> float:
    """Full marks when achieved, otherwise 0."""
    return max_score if is_achieved else 0.0


def calculate_fixed_score(
    count: float,
    point_per_unit: float,
    max_score_limit: float | None = None,
) -> float:
    """Points per counted unit. A set limit caps the raw product."""
    score = count * point_per_unit

    if max_score_limit is not None and score > max_score_limit:
        return max_score_limit

    return round_score(score)


def calculate_bonus_penalty_score(
    bonus_count: float,
    penalty_count: float,
    bonus_point: float = 0.0,
    penalty_point: float = 0.0,
    min_score: float | None = None,
    max_score: float | None = None,
) -> float:
    """Bonus minus penalty, clamped to whichever bounds are given, then rounded."""
    score = bonus_count * bonus_point - penalty_count * penalty_point

    if min_score is not None and score < min_score:
        score = min_score
    if max_score is not None and score > max_score:
        score = max_score

    return round_score(score)


def calculate_score(
    criterion: Criterion,
    result: CriteriaResult,
    formula_detail: AnyFormulaDetail | None = None,
    target: CriteriaTarget | None = None,
    leader_actual: float | None = None,
) -> float:
    """
    Score one criterion for one unit by dispatching on its type.

    Args:
        criterion: Criterion definition
        result: Inputs the unit submitted
        formula_detail: Detail record matching the criterion type (types 3 and 4)
        target: Assigned target (type 1)
        leader_actual: Cluster leader's actual value (type 1, formula 4)

    Returns:
        Computed score, 0 when required inputs are missing
    """
    criteria_type = criterion.criteria_type
    max_score = criterion.max_score

    if formula_detail is not None and formula_detail.criteria_type != criteria_type:
        logger.warning(
            "Formula detail does not match criterion type",
            criteria_id=criterion.id,
            criteria_type=criteria_type,
            detail_type=int(formula_detail.criteria_type),
        )
        formula_detail = None

    if criteria_type == CriteriaType.QUANTITATIVE:
        if result.actual_value is None or target is None or target.target_value is None:
            logger.debug("Missing actual or target value", criteria_id=criterion.id)
            return 0.0
        return calculate_quantitative_score(
            actual=result.actual_value,
            target=target.target_value,
            max_score=max_score,
            formula_type=criterion.formula_type or FormulaType.UNDER_TARGET,
            leader_actual=leader_actual,
        )

    elif criteria_type == CriteriaType.QUALITATIVE:
        # self_score is already resolved to 0 or max_score by the caller
        return result.self_score if result.self_score is not None else 0.0

    elif criteria_type == CriteriaType.FIXED_SCORE:
        if result.actual_value is None or not isinstance(formula_detail, FixedScoreDetail):
            logger.debug("Missing count or fixed score detail", criteria_id=criterion.id)
            return 0.0
        return calculate_fixed_score(
            count=result.actual_value,
            point_per_unit=formula_detail.point_per_unit,
            max_score_limit=formula_detail.max_score_limit,
        )

    elif criteria_type == CriteriaType.BONUS_PENALTY:
        if not isinstance(formula_detail, BonusPenaltyDetail):
            logger.debug("Missing bonus/penalty detail", criteria_id=criterion.id)
            return 0.0
        return calculate_bonus_penalty_score(
            bonus_count=result.bonus_count or 0,
            penalty_count=result.penalty_count or 0,
            bonus_point=formula_detail.bonus_point,
            penalty_point=formula_detail.penalty_point,
            min_score=formula_detail.min_score,
            max_score=formula_detail.max_score,
        )

    return 0.0


def calculate_parent_score(children_scores: Iterable[float]) -> float:
    """Sum of child scores. The parent's own max score is not applied."""
    return round_score(sum(children_scores))


def find_cluster_leader(results: Sequence[CriteriaResult]) -> ClusterLeader | None:
    """
    Find the unit with the highest actual value for a criterion.

    Missing actual values count as 0. On ties the first unit holding the
    maximum wins.

    Returns:
        ClusterLeader, or None when there are no results
    """
    if not results:
        return None

    leader = results[0]
    max_actual = leader.actual_value or 0.0

    for result in results:
        actual = result.actual_value or 0.0
        if actual > max_actual:
            max_actual = actual
            leader = result

    return ClusterLeader(unit_id=leader.unit_id, actual_value=max_actual)
