"""Domain models for the loan lifecycle core."""

from loan_core.models.actor import Actor, Capabilities
from loan_core.models.audit import AuditRecord, TransitionResult
from loan_core.models.enums import (
    AuditAction,
    LedgerMethod,
    LoanAction,
    LoanStatus,
    UserRole,
)
from loan_core.models.loan import (
    Financials,
    LedgerEntry,
    LedgerReport,
    LoanRecord,
    LoanTerms,
    PaymentEvent,
)

__all__ = [
    "Actor",
    "AuditAction",
    "AuditRecord",
    "Capabilities",
    "Financials",
    "LedgerEntry",
    "LedgerMethod",
    "LedgerReport",
    "LoanAction",
    "LoanRecord",
    "LoanStatus",
    "LoanTerms",
    "PaymentEvent",
    "TransitionResult",
    "UserRole",
]
