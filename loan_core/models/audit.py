"""Audit and transition result models."""

from dataclasses import dataclass
from datetime import datetime

from loan_core.models.enums import AuditAction, LoanAction, LoanStatus, UserRole


@dataclass(frozen=True)
class AuditRecord:
    """Audit trail entry for a status change, persisted by the caller."""

    loan_id: str
    action: AuditAction
    previous_status: LoanStatus
    new_status: LoanStatus
    performed_by: str | None
    performed_by_role: UserRole
    timestamp: datetime
    notes: str = ""


@dataclass(frozen=True)
class TransitionResult:
    """Outcome of an allowed workflow operation."""

    loan_id: str
    previous_status: LoanStatus
    new_status: LoanStatus
    action: LoanAction
    audit: AuditRecord
