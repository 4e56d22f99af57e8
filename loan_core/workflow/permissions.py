"""Role permission resolver."""

from typing import Any

from loan_core.models.actor import Capabilities
from loan_core.models.enums import LoanAction, LoanStatus, UserRole
from loan_core.workflow.state_machine import OVERRIDE_ROLES, as_role, as_status

FULL_ACCESS = Capabilities(
    can_view=True,
    can_edit=True,
    can_submit=True,
    can_approve=True,
    can_reject=True,
    can_disburse=True,
    can_manage_repayments=True,
    can_close=True,
    can_override=True,
)

NO_ACCESS = Capabilities()

# Accountant status windows
ACCOUNTANT_VIEW = frozenset(
    {
        LoanStatus.PENDING,
        LoanStatus.UNDER_REVIEW,
        LoanStatus.APPROVED,
        LoanStatus.DISBURSED,
        LoanStatus.ACTIVE,
        LoanStatus.OVERDUE,
    }
)
ACCOUNTANT_APPROVE = frozenset({LoanStatus.PENDING, LoanStatus.UNDER_REVIEW, LoanStatus.APPROVED})
ACCOUNTANT_REJECT = frozenset({LoanStatus.PENDING, LoanStatus.UNDER_REVIEW})
REPAYMENT_STATUSES = frozenset(
    {LoanStatus.APPROVED, LoanStatus.DISBURSED, LoanStatus.ACTIVE, LoanStatus.OVERDUE}
)

ACTION_CAPABILITY = {
    LoanAction.EDIT: "can_edit",
    LoanAction.SUBMIT: "can_submit",
    LoanAction.APPROVE: "can_approve",
    LoanAction.REJECT: "can_reject",
    LoanAction.DISBURSE: "can_disburse",
    LoanAction.MANAGE_REPAYMENTS: "can_manage_repayments",
    LoanAction.CLOSE: "can_close",
}


def resolve_permissions(role: Any, status: Any, is_owner: bool = False) -> Capabilities:
    """Capabilities of ``role`` on a loan in ``status``.

    ADMIN and MANAGER get everything. ACCOUNTANT reviews and manages
    repayments within fixed status windows but never edits, disburses or
    closes. LOAN_OFFICER may edit and submit only their own DRAFT loans.
    Every other role, and anything unrecognized, gets nothing.
    """
    actor_role = as_role(role)
    if actor_role in OVERRIDE_ROLES:
        return FULL_ACCESS

    current = as_status(status)
    if current is None:
        return NO_ACCESS

    if actor_role == UserRole.ACCOUNTANT:
        return Capabilities(
            can_view=current in ACCOUNTANT_VIEW,
            can_approve=current in ACCOUNTANT_APPROVE,
            can_reject=current in ACCOUNTANT_REJECT,
            can_manage_repayments=current in REPAYMENT_STATUSES,
        )

    if actor_role == UserRole.LOAN_OFFICER:
        owns_draft = current == LoanStatus.DRAFT and bool(is_owner)
        return Capabilities(can_view=True, can_edit=owns_draft, can_submit=owns_draft)

    return NO_ACCESS


def can_perform(action: Any, role: Any, status: Any, is_owner: bool = False) -> bool:
    """Check a single action against :func:`resolve_permissions`."""
    try:
        loan_action = LoanAction(action)
    except ValueError:
        return False
    capabilities = resolve_permissions(role, status, is_owner)
    return getattr(capabilities, ACTION_CAPABILITY[loan_action])
