"""Evaluation workflow, summary and ranking schemas."""

from pydantic import BaseModel, Field

from emulation.scoring.ranking import UnitTotal
from emulation.scoring.stages import StageScores
from emulation.workflow import EvaluationStatus, Role, WorkflowAction


class StageScoresIn(BaseModel):
    """Stage scores of one criterion."""

    criteria_id: str
    self_score: float | None = None
    review1_score: float | None = None
    review2_score: float | None = None

    def to_record(self) -> StageScores:
        return StageScores(**self.model_dump())


class EvaluationSummaryRequest(BaseModel):
    """All criterion stage scores of one evaluation."""

    scores: list[StageScoresIn]


class EvaluationSummaryResult(BaseModel):
    """Totals per stage with settled scores."""

    total_self_score: float
    total_review1_score: float | None
    total_review2_score: float | None
    total_final_score: float
    final_scores: dict[str, float]


class TransitionRequest(BaseModel):
    """Workflow step requested on an evaluation."""

    status: EvaluationStatus
    action: WorkflowAction
    role: Role


class TransitionResult(BaseModel):
    """Evaluation status after the step."""

    previous_status: EvaluationStatus
    status: EvaluationStatus
    allowed_actions: list[WorkflowAction] = Field(
        default_factory=list, description="Actions the same role may take next"
    )


class UnitTotalIn(BaseModel):
    """A unit's total final score."""

    unit_id: str
    total_score: float
    unit_name: str | None = None

    def to_record(self) -> UnitTotal:
        return UnitTotal(**self.model_dump())


class RankingRequest(BaseModel):
    """Units of a cluster to rank."""

    units: list[UnitTotalIn]


class RankedUnitResult(BaseModel):
    """Ranked unit row."""

    rank: int
    unit_id: str
    unit_name: str | None
    total_score: float
