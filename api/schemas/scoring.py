"""Criteria scoring schemas."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from emulation.scoring.models import (
    BonusPenaltyDetail,
    CriteriaResult,
    CriteriaTarget,
    Criterion,
    FixedScoreDetail,
    FormulaDetail,
)


class CriterionIn(BaseModel):
    """Criterion definition as stored by the rubric."""

    id: str
    name: str = ""
    criteria_type: int = Field(
        ..., description="0 parent, 1 quantitative, 2 qualitative, 3 fixed, 4 bonus/penalty"
    )
    max_score: float = Field(..., ge=0)
    formula_type: int | None = Field(None, description="Quantitative curve 1-4")
    parent_id: str | None = None
    display_order: int = 0
    code: str | None = None

    def to_record(self) -> Criterion:
        return Criterion(**self.model_dump())


class ResultIn(BaseModel):
    """Inputs a unit submitted for one criterion."""

    criteria_id: str = ""
    unit_id: str = ""
    actual_value: float | None = None
    self_score: float | None = None
    bonus_count: int | None = Field(None, ge=0)
    penalty_count: int | None = Field(None, ge=0)

    def to_record(self) -> CriteriaResult:
        return CriteriaResult(**self.model_dump())


class TargetIn(BaseModel):
    """Target assigned to the unit."""

    target_value: float | None = None


class FormulaDetailIn(BaseModel):
    """Quantitative formula bookkeeping record."""

    kind: Literal["formula"] = "formula"
    formula_type: int = 1
    description: str | None = None

    def to_record(self) -> FormulaDetail:
        return FormulaDetail(formula_type=self.formula_type, description=self.description)


class FixedScoreDetailIn(BaseModel):
    """Fixed score detail."""

    kind: Literal["fixed_score"] = "fixed_score"
    point_per_unit: float
    max_score_limit: float | None = None

    def to_record(self) -> FixedScoreDetail:
        return FixedScoreDetail(
            point_per_unit=self.point_per_unit,
            max_score_limit=self.max_score_limit,
        )


class BonusPenaltyDetailIn(BaseModel):
    """Bonus/penalty detail."""

    kind: Literal["bonus_penalty"] = "bonus_penalty"
    bonus_point: float = 0.0
    penalty_point: float = 0.0
    min_score: float | None = None
    max_score: float | None = None

    def to_record(self) -> BonusPenaltyDetail:
        return BonusPenaltyDetail(
            bonus_point=self.bonus_point,
            penalty_point=self.penalty_point,
            min_score=self.min_score,
            max_score=self.max_score,
        )


FormulaDetailUnion = Annotated[
    FormulaDetailIn | FixedScoreDetailIn | BonusPenaltyDetailIn,
    Field(discriminator="kind"),
]


class CalculateScoreRequest(BaseModel):
    """Score one criterion for one unit."""

    criterion: CriterionIn
    result: ResultIn
    formula_detail: FormulaDetailUnion | None = None
    target: TargetIn | None = None
    leader_actual: float | None = None
    cluster_results: list[ResultIn] | None = Field(
        None,
        description="Peer results used to find the cluster leader when leader_actual is omitted",
    )

    def target_record(self) -> CriteriaTarget | None:
        if self.target is None:
            return None
        return CriteriaTarget(
            criteria_id=self.criterion.id,
            unit_id=self.result.unit_id,
            target_value=self.target.target_value,
        )


class QuantitativeRequest(BaseModel):
    """Inputs of the quantitative evaluator."""

    actual: float = Field(..., ge=0)
    target: float = Field(..., ge=0)
    max_score: float = Field(..., ge=0)
    formula_type: int
    leader_actual: float | None = None


class QualitativeRequest(BaseModel):
    """Inputs of the qualitative evaluator."""

    is_achieved: bool
    max_score: float = Field(..., ge=0)


class FixedScoreRequest(BaseModel):
    """Inputs of the fixed score evaluator."""

    count: float = Field(..., ge=0)
    point_per_unit: float
    max_score_limit: float | None = None


class BonusPenaltyRequest(BaseModel):
    """Inputs of the bonus/penalty evaluator."""

    bonus_count: float = Field(..., ge=0)
    penalty_count: float = Field(..., ge=0)
    bonus_point: float = 0.0
    penalty_point: float = 0.0
    min_score: float | None = None
    max_score: float | None = None


class ParentScoreRequest(BaseModel):
    """Child scores of a parent criterion."""

    children_scores: list[float]


class ClusterLeaderRequest(BaseModel):
    """All units' results for one criterion in a cluster."""

    results: list[ResultIn]


class TreeScoreRequest(BaseModel):
    """Criteria tree with computed leaf scores."""

    criteria: list[CriterionIn] = Field(..., min_length=1)
    leaf_scores: dict[str, float] = Field(default_factory=dict)


class ScoreResult(BaseModel):
    """Computed score."""

    score: float


class ClusterLeaderResult(BaseModel):
    """Unit leading the cluster for a criterion."""

    unit_id: str
    actual_value: float


class CeilingViolationResult(BaseModel):
    """Parent whose children exceed its max score."""

    criteria_id: str
    total: float
    max_score: float
    overrun: float


class TreeRowResult(BaseModel):
    """Flattened tree row."""

    id: str
    name: str
    code: str
    level: int
    max_score: float
    score: float
    is_leaf: bool


class TreeScoreResult(BaseModel):
    """Scores for a whole criteria tree."""

    total: float
    scores: dict[str, float]
    rows: list[TreeRowResult]
    violations: list[CeilingViolationResult]
