"""Review-stage scores and final score resolution.

Each criterion of an evaluation may carry a self score and up to two review
scores. The settled score is the better of the two reviews when both exist,
otherwise whichever review exists, otherwise the self score.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from emulation.scoring.engine import round_score


@dataclass(frozen=True)
class StageScores:
    """Scores recorded for one criterion across the review stages."""

    criteria_id: str
    self_score: float | None = None
    review1_score: float | None = None
    review2_score: float | None = None


@dataclass
class EvaluationTotals:
    """Per-stage totals of an evaluation."""

    total_self_score: float
    total_review1_score: float | None  # None = no criterion reviewed
    total_review2_score: float | None
    total_final_score: float
    final_scores: dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "total_self_score": self.total_self_score,
            "total_review1_score": self.total_review1_score,
            "total_review2_score": self.total_review2_score,
            "total_final_score": self.total_final_score,
            "final_scores": self.final_scores,
        }


def resolve_final_score(stage: StageScores) -> float:
    """Settled score for one criterion. A review score of 0 is still a review."""
    review1 = stage.review1_score
    review2 = stage.review2_score

    if review1 is not None and review2 is not None:
        return max(review1, review2)
    elif review1 is not None:
        return review1
    elif review2 is not None:
        return review2
    return stage.self_score if stage.self_score is not None else 0.0


def summarize_evaluation(stages: Sequence[StageScores]) -> EvaluationTotals:
    """Resolve final scores and add up every stage."""
    total_self = 0.0
    total_review1 = 0.0
    total_review2 = 0.0
    total_final = 0.0
    has_review1 = False
    has_review2 = False
    final_scores: dict[str, float] = {}

    for stage in stages:
        final = resolve_final_score(stage)
        final_scores[stage.criteria_id] = final

        total_self += stage.self_score or 0.0
        if stage.review1_score is not None:
            total_review1 += stage.review1_score
            has_review1 = True
        if stage.review2_score is not None:
            total_review2 += stage.review2_score
            has_review2 = True
        total_final += final

    return EvaluationTotals(
        total_self_score=round_score(total_self),
        total_review1_score=round_score(total_review1) if has_review1 else None,
        total_review2_score=round_score(total_review2) if has_review2 else None,
        total_final_score=round_score(total_final),
        final_scores=final_scores,
    )
