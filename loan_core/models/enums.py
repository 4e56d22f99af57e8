"""Enumeration types for the loan lifecycle."""

from enum import Enum


class LoanStatus(str, Enum):
    DRAFT = "draft"
    PENDING = "pending"
    UNDER_REVIEW = "under_review"
    APPROVED = "approved"
    REJECTED = "rejected"
    DISBURSED = "disbursed"
    ACTIVE = "active"
    OVERDUE = "overdue"
    CLOSED = "closed"


class UserRole(str, Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    ACCOUNTANT = "accountant"
    LOAN_OFFICER = "loan_officer"
    COLLECTIONS = "collections"
    UNDERWRITER = "underwriter"
    CUSTOMER = "customer"


class LoanAction(str, Enum):
    EDIT = "edit"
    SUBMIT = "submit"
    APPROVE = "approve"
    REJECT = "reject"
    DISBURSE = "disburse"
    MANAGE_REPAYMENTS = "manage_repayments"
    CLOSE = "close"


class AuditAction(str, Enum):
    STATUS_CHANGE = "STATUS_CHANGE"
    LOAN_SUBMITTED = "LOAN_SUBMITTED"
    LOAN_APPROVED = "LOAN_APPROVED"
    LOAN_REJECTED = "LOAN_REJECTED"
    DISBURSEMENT = "DISBURSEMENT"
    LOAN_CLOSED = "LOAN_CLOSED"
    LOAN_REOPENED = "LOAN_REOPENED"


class LedgerMethod(str, Enum):
    """How the ledger caps the interest recognized by each payment.

    ``PROPORTIONAL`` recognizes interest in proportion to the share of the
    total obligation collected before each payment. ``CAPPED`` applies the
    same proportional cap but also subtracts the interest already allocated
    to earlier payments, so the running interest total never exceeds the
    loan's total interest.

    The two differ once a payment lands after interest was front-loaded.
    With 10,000 at 12% over 12 months repaid as two payments of 5,600,
    ``PROPORTIONAL`` splits interest 1,200 + 600 while ``CAPPED`` splits
    it 1,200 + 0. ``CAPPED`` is the split shown on the loan application's
    repayment screen; ``PROPORTIONAL`` is the default for ledger reports.
    """

    PROPORTIONAL = "PROPORTIONAL"
    CAPPED = "CAPPED"
