"""Synthetic loan and repayment data generators."""

from loan_core.generators.loan import LoanGenerator, PaymentHistoryGenerator

__all__ = [
    "LoanGenerator",
    "PaymentHistoryGenerator",
]
