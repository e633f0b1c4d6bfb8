"""Competitive emulation scoring - domain package."""

# Lazy imports keep `import emulation` free of submodule side effects.
# Use explicit imports when needed:
# from emulation.scoring.engine import calculate_score
# from emulation.workflow import apply_transition

__all__ = [
    "calculate_score",
    "calculate_parent_score",
    "find_cluster_leader",
    "apply_transition",
    "EvaluationStatus",
    "WorkflowAction",
]


from typing import Any


def __getattr__(name: str) -> Any:
    """Lazy import for emulation submodules."""
    if name in ("calculate_score", "calculate_parent_score", "find_cluster_leader"):
        from emulation.scoring.engine import (
            calculate_parent_score,
            calculate_score,
            find_cluster_leader,
        )

        return locals()[name]
    elif name in ("apply_transition", "EvaluationStatus", "WorkflowAction"):
        from emulation.workflow import EvaluationStatus, WorkflowAction, apply_transition

        return locals()[name]
    raise AttributeError(f"module 'emulation' has no attribute '{name}'")
