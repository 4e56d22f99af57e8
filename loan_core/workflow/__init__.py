"""Loan status workflow: state machine, permissions and orchestration."""

from loan_core.workflow.orchestrator import LoanWorkflow
from loan_core.workflow.permissions import can_perform, resolve_permissions
from loan_core.workflow.roles import resolve_actor, resolve_role
from loan_core.workflow.state_machine import (
    INITIAL_STATUS,
    TERMINAL_STATUSES,
    TRANSITIONS,
    allowed_targets,
    can_transition,
    is_terminal,
    next_valid_statuses,
)

__all__ = [
    "INITIAL_STATUS",
    "LoanWorkflow",
    "TERMINAL_STATUSES",
    "TRANSITIONS",
    "allowed_targets",
    "can_perform",
    "can_transition",
    "is_terminal",
    "next_valid_statuses",
    "resolve_actor",
    "resolve_permissions",
    "resolve_role",
]
