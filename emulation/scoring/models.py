"""Plain data records consumed by the criteria score engine.

These mirror the rows owned by the storage layer (criteria, targets,
formula details and submitted results). The engine only reads them.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar


class CriteriaType(IntEnum):
    """How a criterion is scored."""

    PARENT = 0  # Non-scoring, sum of children
    QUANTITATIVE = 1  # Actual vs target formula
    QUALITATIVE = 2  # Pass/fail
    FIXED_SCORE = 3  # Count x points per unit
    BONUS_PENALTY = 4  # Bonus minus penalty


class FormulaType(IntEnum):
    """Scoring curve for quantitative criteria."""

    UNDER_TARGET = 1
    MEETS_TARGET = 2
    CLUSTER_LEADER = 3
    EXCEEDS_NOT_LEADING = 4


@dataclass(frozen=True)
class Criterion:
    """A line item of the evaluation rubric."""

    id: str
    name: str
    criteria_type: int  # CriteriaType value; unknown values score 0
    max_score: float
    formula_type: int | None = None
    parent_id: str | None = None
    display_order: int = 0
    code: str | None = None

    @property
    def is_parent(self) -> bool:
        return self.criteria_type == CriteriaType.PARENT


@dataclass(frozen=True)
class CriteriaTarget:
    """Goal assigned to a unit for a quantitative criterion."""

    criteria_id: str
    unit_id: str
    target_value: float | None = None


@dataclass(frozen=True)
class CriteriaResult:
    """Raw inputs a unit submitted for one criterion."""

    criteria_id: str
    unit_id: str
    actual_value: float | None = None
    self_score: float | None = None
    bonus_count: int | None = None
    penalty_count: int | None = None


@dataclass(frozen=True)
class FormulaDetail:
    """Quantitative formula record. Scores are computed from the target instead."""

    criteria_type: ClassVar[CriteriaType] = CriteriaType.QUANTITATIVE

    formula_type: int = FormulaType.UNDER_TARGET
    description: str | None = None


@dataclass(frozen=True)
class FixedScoreDetail:
    """Points awarded per counted unit, optionally capped."""

    criteria_type: ClassVar[CriteriaType] = CriteriaType.FIXED_SCORE

    point_per_unit: float
    max_score_limit: float | None = None


@dataclass(frozen=True)
class BonusPenaltyDetail:
    """Points added per bonus and removed per penalty, optionally clamped."""

    criteria_type: ClassVar[CriteriaType] = CriteriaType.BONUS_PENALTY

    bonus_point: float = 0.0
    penalty_point: float = 0.0
    min_score: float | None = None
    max_score: float | None = None


# Tagged by each variant's ``criteria_type``
AnyFormulaDetail = FormulaDetail | FixedScoreDetail | BonusPenaltyDetail


@dataclass(frozen=True)
class ClusterLeader:
    """Unit holding the highest actual value for a criterion in a cluster."""

    unit_id: str
    actual_value: float

    def to_dict(self) -> dict:
        return {
            "unit_id": self.unit_id,
            "actual_value": self.actual_value,
        }
