"""Criteria tree aggregation.

Criteria reference their parent by id. The tree is rebuilt from those
references on every call and parent scores are computed bottom-up from the
leaf scores supplied by the caller. Parent totals are never clamped; totals
that overrun a parent's declared max score are reported as violations so the
review workflow can flag them.
"""

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field

import structlog

from emulation.exceptions import CriteriaTreeError
from emulation.scoring.engine import calculate_parent_score, round_score
from emulation.scoring.models import Criterion

logger = structlog.get_logger(__name__)


@dataclass
class CriteriaNode:
    """A criterion with its children, in display order."""

    criterion: Criterion
    code: str
    level: int
    children: list["CriteriaNode"] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        return not self.children


@dataclass
class CeilingViolation:
    """A parent whose children add up to more than its max score."""

    criteria_id: str
    total: float
    max_score: float

    @property
    def overrun(self) -> float:
        return round_score(self.total - self.max_score)

    def to_dict(self) -> dict:
        return {
            "criteria_id": self.criteria_id,
            "total": self.total,
            "max_score": self.max_score,
            "overrun": self.overrun,
        }


@dataclass
class TreeRow:
    """One flattened row of a scored criteria tree."""

    id: str
    name: str
    code: str
    level: int
    max_score: float
    score: float
    is_leaf: bool

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "code": self.code,
            "level": self.level,
            "max_score": self.max_score,
            "score": self.score,
            "is_leaf": self.is_leaf,
        }


@dataclass
class TreeScore:
    """Scores for every criterion of a tree."""

    roots: list[CriteriaNode]
    scores: dict[str, float]
    violations: list[CeilingViolation] = field(default_factory=list)

    @property
    def total(self) -> float:
        return calculate_parent_score(self.scores[node.criterion.id] for node in self.roots)

    def rows(self) -> list[TreeRow]:
        return list(flatten_tree(self.roots, self.scores))

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "scores": self.scores,
            "rows": [row.to_dict() for row in self.rows()],
            "violations": [v.to_dict() for v in self.violations],
        }


def _sort_key(criterion: Criterion) -> tuple[int, str]:
    return (criterion.display_order, criterion.id)


def build_criteria_tree(criteria: Sequence[Criterion]) -> list[CriteriaNode]:
    """
    Build the criteria tree from parent references.

    Children are ordered by display order. Criteria pointing at an unknown
    parent become roots. Each node gets a dotted code ("1", "1.2", ...)
    unless the criterion carries its own.

    Raises:
        CriteriaTreeError: On duplicate ids or a parent cycle
    """
    by_id: dict[str, Criterion] = {}
    for criterion in criteria:
        if criterion.id in by_id:
            raise CriteriaTreeError(
                f"Duplicate criterion id '{criterion.id}'",
                details={"criteria_id": criterion.id},
            )
        by_id[criterion.id] = criterion

    children_of: dict[str | None, list[Criterion]] = {}
    for criterion in criteria:
        parent_id = criterion.parent_id if criterion.parent_id in by_id else None
        children_of.setdefault(parent_id, []).append(criterion)

    visited: set[str] = set()

    def build(criterion: Criterion, code: str, level: int) -> CriteriaNode:
        visited.add(criterion.id)
        node = CriteriaNode(criterion=criterion, code=criterion.code or code, level=level)
        children = sorted(children_of.get(criterion.id, []), key=_sort_key)
        for index, child in enumerate(children, start=1):
            node.children.append(build(child, f"{node.code}.{index}", level + 1))
        return node

    roots = [
        build(criterion, str(index), 1)
        for index, criterion in enumerate(sorted(children_of.get(None, []), key=_sort_key), start=1)
    ]

    # Anything unreachable from a root sits on a parent cycle
    unreachable = sorted(set(by_id) - visited)
    if unreachable:
        raise CriteriaTreeError(
            "Criteria parent references form a cycle",
            details={"criteria_ids": unreachable},
        )

    return roots


def aggregate_tree(
    criteria: Sequence[Criterion],
    leaf_scores: Mapping[str, float],
    report_ceiling: bool = True,
) -> TreeScore:
    """
    Score every criterion of a tree.

    Args:
        criteria: All criteria of the rubric
        leaf_scores: Computed score per leaf criterion id (missing = 0)
        report_ceiling: Collect parents whose total exceeds their max score

    Returns:
        TreeScore with a score for every criterion id
    """
    roots = build_criteria_tree(criteria)
    scores: dict[str, float] = {}
    violations: list[CeilingViolation] = []

    def visit(node: CriteriaNode) -> float:
        criterion = node.criterion
        if node.is_leaf:
            score = leaf_scores.get(criterion.id, 0.0)
        else:
            score = calculate_parent_score(visit(child) for child in node.children)
            if report_ceiling and score > criterion.max_score:
                violations.append(
                    CeilingViolation(
                        criteria_id=criterion.id,
                        total=score,
                        max_score=criterion.max_score,
                    )
                )
        scores[criterion.id] = score
        return score

    for root in roots:
        visit(root)

    if violations:
        logger.warning(
            "Parent criteria exceed their max score",
            criteria_ids=[v.criteria_id for v in violations],
        )

    return TreeScore(roots=roots, scores=scores, violations=violations)


def flatten_tree(
    roots: Sequence[CriteriaNode],
    scores: Mapping[str, float],
) -> Iterator[TreeRow]:
    """Yield scored rows depth-first in display order."""
    for node in roots:
        criterion = node.criterion
        yield TreeRow(
            id=criterion.id,
            name=criterion.name,
            code=node.code,
            level=node.level,
            max_score=criterion.max_score,
            score=scores.get(criterion.id, 0.0),
            is_leaf=node.is_leaf,
        )
        yield from flatten_tree(node.children, scores)
