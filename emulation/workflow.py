"""Evaluation review workflow.

An evaluation moves through the review stages in a fixed order:

    draft --submit--> submitted --review1--> review1_completed
      --explain--> explanation_submitted --review2--> review2_completed
      --finalize--> finalized

Units submit and explain; cluster leaders and administrators review and
finalize. The score engine does not look at any of this, it scores whatever
inputs it is given.
"""

from enum import StrEnum

import structlog

from emulation.exceptions import PermissionDeniedError, WorkflowError

logger = structlog.get_logger(__name__)


class EvaluationStatus(StrEnum):
    """Stage of a unit's evaluation."""

    DRAFT = "draft"
    SUBMITTED = "submitted"
    REVIEW1_COMPLETED = "review1_completed"
    EXPLANATION_SUBMITTED = "explanation_submitted"
    REVIEW2_COMPLETED = "review2_completed"
    FINALIZED = "finalized"


class EvaluationPeriodStatus(StrEnum):
    """Stage of an evaluation period as a whole."""

    DRAFT = "draft"
    ACTIVE = "active"
    REVIEW1 = "review1"
    REVIEW2 = "review2"
    COMPLETED = "completed"


class WorkflowAction(StrEnum):
    """Step that moves an evaluation forward."""

    SUBMIT = "submit"
    REVIEW1 = "review1"
    EXPLAIN = "explain"
    REVIEW2 = "review2"
    FINALIZE = "finalize"


class Role(StrEnum):
    """Application role of the acting user."""

    ADMIN = "admin"
    CLUSTER_LEADER = "cluster_leader"
    USER = "user"


# action -> (required current status, resulting status)
TRANSITIONS: dict[WorkflowAction, tuple[EvaluationStatus, EvaluationStatus]] = {
    WorkflowAction.SUBMIT: (EvaluationStatus.DRAFT, EvaluationStatus.SUBMITTED),
    WorkflowAction.REVIEW1: (EvaluationStatus.SUBMITTED, EvaluationStatus.REVIEW1_COMPLETED),
    WorkflowAction.EXPLAIN: (
        EvaluationStatus.REVIEW1_COMPLETED,
        EvaluationStatus.EXPLANATION_SUBMITTED,
    ),
    WorkflowAction.REVIEW2: (
        EvaluationStatus.EXPLANATION_SUBMITTED,
        EvaluationStatus.REVIEW2_COMPLETED,
    ),
    WorkflowAction.FINALIZE: (EvaluationStatus.REVIEW2_COMPLETED, EvaluationStatus.FINALIZED),
}

REVIEWER_ROLES = frozenset({Role.ADMIN, Role.CLUSTER_LEADER})

ACTION_ROLES: dict[WorkflowAction, frozenset[Role]] = {
    WorkflowAction.SUBMIT: frozenset({Role.USER}),
    WorkflowAction.REVIEW1: REVIEWER_ROLES,
    WorkflowAction.EXPLAIN: frozenset({Role.USER}),
    WorkflowAction.REVIEW2: REVIEWER_ROLES,
    WorkflowAction.FINALIZE: REVIEWER_ROLES,
}


def can_transition(status: EvaluationStatus, action: WorkflowAction) -> bool:
    """Check whether an action applies to the current status."""
    required, _ = TRANSITIONS[action]
    return status == required


def allowed_actions(status: EvaluationStatus, role: Role) -> list[WorkflowAction]:
    """Actions the role may take on an evaluation in this status."""
    return [
        action
        for action in WorkflowAction
        if can_transition(status, action) and role in ACTION_ROLES[action]
    ]


def apply_transition(
    status: EvaluationStatus,
    action: WorkflowAction,
    role: Role,
) -> EvaluationStatus:
    """
    Move an evaluation to its next stage.

    Raises:
        PermissionDeniedError: Role may not perform the action
        WorkflowError: Action does not apply to the current status
    """
    if role not in ACTION_ROLES[action]:
        raise PermissionDeniedError(role=role.value, action=action.value)

    if not can_transition(status, action):
        raise WorkflowError(status=status.value, action=action.value)

    _, next_status = TRANSITIONS[action]
    logger.info(
        "Evaluation status changed",
        action=action.value,
        from_status=status.value,
        to_status=next_status.value,
        role=role.value,
    )
    return next_status
