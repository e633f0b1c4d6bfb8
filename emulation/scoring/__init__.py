"""Criteria score engine and aggregation for emulation evaluations."""

# Lazy imports to avoid requiring all dependencies at import time
# Use explicit imports when needed:
# from emulation.scoring.engine import calculate_score
# from emulation.scoring.tree import aggregate_tree
# from emulation.scoring.stages import summarize_evaluation
# from emulation.scoring.ranking import rank_units

__all__ = [
    # Records
    "CriteriaType",
    "FormulaType",
    "Criterion",
    "CriteriaTarget",
    "CriteriaResult",
    "FormulaDetail",
    "FixedScoreDetail",
    "BonusPenaltyDetail",
    "ClusterLeader",
    # Engine
    "round_score",
    "calculate_quantitative_score",
    "calculate_qualitative_score",
    "calculate_fixed_score",
    "calculate_bonus_penalty_score",
    "calculate_score",
    "calculate_parent_score",
    "find_cluster_leader",
    # Tree
    "CriteriaNode",
    "CeilingViolation",
    "TreeRow",
    "TreeScore",
    "build_criteria_tree",
    "aggregate_tree",
    "flatten_tree",
    # Review stages
    "StageScores",
    "EvaluationTotals",
    "resolve_final_score",
    "summarize_evaluation",
    # Ranking
    "UnitTotal",
    "RankedUnit",
    "rank_units",
]


from importlib import import_module
from typing import Any

_MODULES = {
    "emulation.scoring.models": (
        "CriteriaType",
        "FormulaType",
        "Criterion",
        "CriteriaTarget",
        "CriteriaResult",
        "FormulaDetail",
        "FixedScoreDetail",
        "BonusPenaltyDetail",
        "ClusterLeader",
    ),
    "emulation.scoring.engine": (
        "round_score",
        "calculate_quantitative_score",
        "calculate_qualitative_score",
        "calculate_fixed_score",
        "calculate_bonus_penalty_score",
        "calculate_score",
        "calculate_parent_score",
        "find_cluster_leader",
    ),
    "emulation.scoring.tree": (
        "CriteriaNode",
        "CeilingViolation",
        "TreeRow",
        "TreeScore",
        "build_criteria_tree",
        "aggregate_tree",
        "flatten_tree",
    ),
    "emulation.scoring.stages": (
        "StageScores",
        "EvaluationTotals",
        "resolve_final_score",
        "summarize_evaluation",
    ),
    "emulation.scoring.ranking": ("UnitTotal", "RankedUnit", "rank_units"),
}


def __getattr__(name: str) -> Any:
    """Lazy import for scoring submodules."""
    for module_name, names in _MODULES.items():
        if name in names:
            return getattr(import_module(module_name), name)
    raise AttributeError(f"module 'emulation.scoring' has no attribute '{name}'")
