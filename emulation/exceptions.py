"""Domain exceptions.

The score engine itself never raises for incomplete numeric input. These
errors cover structural problems (a cyclic criteria tree) and the review
workflow that surrounds the engine.
"""

from typing import Any


class EmulationScoringError(Exception):
    """Base exception for the emulation scoring domain."""

    code = "emulation_error"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class CriteriaTreeError(EmulationScoringError):
    """Criteria parent/child references do not form a tree."""

    code = "invalid_criteria_tree"


class WorkflowError(EmulationScoringError):
    """An evaluation cannot move to the requested stage."""

    code = "invalid_transition"

    def __init__(self, status: str, action: str):
        super().__init__(
            message=f"Cannot {action} an evaluation in status '{status}'",
            details={"status": status, "action": action},
        )
        self.status = status
        self.action = action


class PermissionDeniedError(EmulationScoringError):
    """The acting role may not perform a workflow action."""

    code = "authorization_error"

    def __init__(self, role: str, action: str):
        super().__init__(
            message=f"Role '{role}' is not allowed to {action}",
            details={"role": role, "action": action},
        )
        self.role = role
        self.action = action
