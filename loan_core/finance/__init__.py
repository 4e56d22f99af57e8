"""Financial model, payment intake and repayment ledger."""

from loan_core.finance.financials import compute_financials, financials_for, validate_terms
from loan_core.finance.ledger import build_ledger, sort_payments
from loan_core.finance.payments import (
    parse_payment,
    parse_payments,
    parse_timestamp,
    validate_payment_amount,
)

__all__ = [
    "build_ledger",
    "compute_financials",
    "financials_for",
    "parse_payment",
    "parse_payments",
    "parse_timestamp",
    "sort_payments",
    "validate_payment_amount",
    "validate_terms",
]
