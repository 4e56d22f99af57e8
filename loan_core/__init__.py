"""Loan lifecycle workflow and repayment ledger core."""

from loan_core.exceptions import (
    ConfigurationError,
    InvalidTerms,
    InvalidTransition,
    LoanCoreError,
    MalformedPayment,
    PermissionDenied,
)
from loan_core.finance import build_ledger, compute_financials, validate_terms
from loan_core.models import (
    Actor,
    Capabilities,
    LedgerEntry,
    LedgerMethod,
    LedgerReport,
    LoanRecord,
    LoanStatus,
    LoanTerms,
    PaymentEvent,
    UserRole,
)
from loan_core.workflow import (
    LoanWorkflow,
    can_transition,
    resolve_actor,
    resolve_permissions,
)

__version__ = "0.1.0"

__all__ = [
    "Actor",
    "Capabilities",
    "ConfigurationError",
    "InvalidTerms",
    "InvalidTransition",
    "LedgerEntry",
    "LedgerMethod",
    "LedgerReport",
    "LoanCoreError",
    "LoanRecord",
    "LoanStatus",
    "LoanTerms",
    "LoanWorkflow",
    "MalformedPayment",
    "PaymentEvent",
    "PermissionDenied",
    "UserRole",
    "build_ledger",
    "can_transition",
    "compute_financials",
    "resolve_actor",
    "resolve_permissions",
    "validate_terms",
]
