"""Guarded loan status transitions.

Every operation is one decision: check the actor's capability for the
loan's current status, check the edge against the transition table, and
hand back the new status with an audit record. Persisting the status,
writing the audit record and notifying anyone is left to the caller; a
rejected operation raises and leaves the loan untouched.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable

from loan_core.config import LoanCoreConfig, LoanProductLimits
from loan_core.exceptions import InvalidTransition, PermissionDenied
from loan_core.finance.financials import validate_terms
from loan_core.logging import transition_context
from loan_core.models.actor import Actor
from loan_core.models.audit import AuditRecord, TransitionResult
from loan_core.models.enums import AuditAction, LoanAction, LoanStatus
from loan_core.models.loan import LoanRecord
from loan_core.workflow.permissions import ACTION_CAPABILITY, resolve_permissions
from loan_core.workflow.state_machine import as_status, can_transition, is_terminal

logger = logging.getLogger(__name__)

# Capability that guards a move into each status
TARGET_ACTION = {
    LoanStatus.DRAFT: LoanAction.SUBMIT,
    LoanStatus.PENDING: LoanAction.SUBMIT,
    LoanStatus.UNDER_REVIEW: LoanAction.APPROVE,
    LoanStatus.APPROVED: LoanAction.APPROVE,
    LoanStatus.REJECTED: LoanAction.REJECT,
    LoanStatus.DISBURSED: LoanAction.DISBURSE,
    LoanStatus.ACTIVE: LoanAction.MANAGE_REPAYMENTS,
    LoanStatus.OVERDUE: LoanAction.MANAGE_REPAYMENTS,
    LoanStatus.CLOSED: LoanAction.CLOSE,
}

TARGET_AUDIT_ACTION = {
    LoanStatus.PENDING: AuditAction.LOAN_SUBMITTED,
    LoanStatus.APPROVED: AuditAction.LOAN_APPROVED,
    LoanStatus.REJECTED: AuditAction.LOAN_REJECTED,
    LoanStatus.DISBURSED: AuditAction.DISBURSEMENT,
    LoanStatus.CLOSED: AuditAction.LOAN_CLOSED,
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LoanWorkflow:
    """Workflow orchestrator.

    Parameters
    ----------
    limits : LoanProductLimits | None
        Product bounds checked when a loan leaves DRAFT. Only structural
        checks run when omitted.
    clock : Callable[[], datetime] | None
        Source of audit timestamps (default: current UTC time). Decisions
        never depend on it.
    """

    def __init__(
        self,
        limits: LoanProductLimits | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.limits = limits
        self._clock = clock or _utcnow

    @classmethod
    def from_config(
        cls,
        config: LoanCoreConfig,
        clock: Callable[[], datetime] | None = None,
    ) -> "LoanWorkflow":
        """Workflow enforcing the product limits of ``config``."""
        return cls(limits=config.limits, clock=clock)

    def submit_for_review(self, loan: LoanRecord, actor: Actor, notes: str = "") -> TransitionResult:
        """DRAFT -> PENDING. Terms must be valid before a loan leaves DRAFT."""
        return self._transition(
            loan, actor, LoanStatus.PENDING, LoanAction.SUBMIT,
            notes or "Loan submitted for review",
        )

    def start_review(self, loan: LoanRecord, actor: Actor, notes: str = "") -> TransitionResult:
        """PENDING -> UNDER_REVIEW."""
        return self._transition(
            loan, actor, LoanStatus.UNDER_REVIEW, LoanAction.APPROVE,
            notes or "Loan moved to under review",
        )

    def approve(self, loan: LoanRecord, actor: Actor, notes: str = "") -> TransitionResult:
        """UNDER_REVIEW -> APPROVED."""
        return self._transition(loan, actor, LoanStatus.APPROVED, LoanAction.APPROVE, notes)

    def reject(self, loan: LoanRecord, actor: Actor, notes: str = "") -> TransitionResult:
        """UNDER_REVIEW or APPROVED -> REJECTED."""
        return self._transition(loan, actor, LoanStatus.REJECTED, LoanAction.REJECT, notes)

    def disburse(self, loan: LoanRecord, actor: Actor, notes: str = "") -> TransitionResult:
        """APPROVED -> DISBURSED. Activation is a separate step."""
        return self._transition(
            loan, actor, LoanStatus.DISBURSED, LoanAction.DISBURSE,
            notes or "Loan disbursed",
        )

    def activate(self, loan: LoanRecord, actor: Actor, notes: str = "") -> TransitionResult:
        """DISBURSED or OVERDUE -> ACTIVE."""
        return self._transition(
            loan, actor, LoanStatus.ACTIVE, LoanAction.MANAGE_REPAYMENTS,
            notes or "Loan activated",
        )

    def mark_overdue(self, loan: LoanRecord, actor: Actor, notes: str = "") -> TransitionResult:
        """ACTIVE -> OVERDUE."""
        return self._transition(loan, actor, LoanStatus.OVERDUE, LoanAction.MANAGE_REPAYMENTS, notes)

    def close(self, loan: LoanRecord, actor: Actor, notes: str = "") -> TransitionResult:
        """ACTIVE or OVERDUE -> CLOSED."""
        return self._transition(loan, actor, LoanStatus.CLOSED, LoanAction.CLOSE, notes)

    def change_status(
        self,
        loan: LoanRecord,
        actor: Actor,
        target: Any,
        notes: str = "",
    ) -> TransitionResult:
        """Move a loan to any status, guarded by the capability for that target.

        Raises
        ------
        InvalidTransition
            If ``target`` is not a known status, or the edge is not allowed.
        PermissionDenied
            If the actor lacks the capability guarding ``target``.
        """
        new_status = as_status(target)
        if new_status is None:
            context = transition_context(loan.loan_id, "change_status", actor.role, loan.status, target)
            raise InvalidTransition(
                f"Unknown loan status: {target!r}",
                from_status=context["from_status"],
                to_status=context["to_status"],
                role=context["role"],
            )
        return self._transition(loan, actor, new_status, TARGET_ACTION[new_status], notes)

    def _transition(
        self,
        loan: LoanRecord,
        actor: Actor,
        target: LoanStatus,
        action: LoanAction,
        notes: str = "",
    ) -> TransitionResult:
        current = as_status(loan.status)
        context = transition_context(loan.loan_id, action.value, actor.role, loan.status, target)
        if current is None:
            raise InvalidTransition(
                f"Loan {loan.loan_id} has unknown status {loan.status!r}",
                from_status=context["from_status"],
                to_status=target.value,
                role=context["role"],
            )

        capabilities = resolve_permissions(actor.role, current, actor.is_loan_owner)
        if not getattr(capabilities, ACTION_CAPABILITY[action]):
            logger.warning(
                "Denied %s on loan %s: role %s lacks the capability at status %s",
                action.value, loan.loan_id, context["role"], context["from_status"],
                extra={"extra": context},
            )
            raise PermissionDenied(
                f"Role {context['role']} cannot {action.value} a loan in status "
                f"{context['from_status']}",
                action=action.value,
                role=context["role"],
                status=context["from_status"],
            )

        if not can_transition(current, target, actor.role):
            logger.warning(
                "Rejected transition %s -> %s on loan %s for role %s",
                context["from_status"], target.value, loan.loan_id, context["role"],
                extra={"extra": context},
            )
            raise InvalidTransition(
                f"Cannot transition from {context['from_status']} to {target.value} "
                f"with role {context['role']}",
                from_status=context["from_status"],
                to_status=target.value,
                role=context["role"],
            )

        # Terms are checked on every way out of DRAFT, overrides included
        if current == LoanStatus.DRAFT and target != LoanStatus.DRAFT:
            validate_terms(loan.terms, self.limits)

        audit = AuditRecord(
            loan_id=loan.loan_id,
            action=self._audit_action(current, target),
            previous_status=current,
            new_status=target,
            performed_by=actor.user_id,
            performed_by_role=actor.role,
            timestamp=self._clock(),
            notes=notes,
        )
        logger.debug(
            "Loan %s: %s -> %s by %s",
            loan.loan_id, context["from_status"], target.value, context["role"],
            extra={"extra": context},
        )
        return TransitionResult(
            loan_id=loan.loan_id,
            previous_status=current,
            new_status=target,
            action=action,
            audit=audit,
        )

    @staticmethod
    def _audit_action(current: LoanStatus, target: LoanStatus) -> AuditAction:
        if is_terminal(current) and not is_terminal(target):
            return AuditAction.LOAN_REOPENED
        return TARGET_AUDIT_ACTION.get(target, AuditAction.STATUS_CHANGE)


_default_workflow = LoanWorkflow()


def submit_for_review(loan: LoanRecord, actor: Actor, notes: str = "") -> LoanStatus:
    """Submit a DRAFT loan and return its new status."""
    return _default_workflow.submit_for_review(loan, actor, notes).new_status


def approve(loan: LoanRecord, actor: Actor, notes: str = "") -> LoanStatus:
    """Approve a loan under review and return its new status."""
    return _default_workflow.approve(loan, actor, notes).new_status


def reject(loan: LoanRecord, actor: Actor, notes: str = "") -> LoanStatus:
    """Reject a loan and return its new status."""
    return _default_workflow.reject(loan, actor, notes).new_status


def disburse(loan: LoanRecord, actor: Actor, notes: str = "") -> LoanStatus:
    """Disburse an approved loan and return its new status."""
    return _default_workflow.disburse(loan, actor, notes).new_status


def close(loan: LoanRecord, actor: Actor, notes: str = "") -> LoanStatus:
    """Close a repaying loan and return its new status."""
    return _default_workflow.close(loan, actor, notes).new_status
