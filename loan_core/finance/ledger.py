"""Repayment ledger: interest/principal split of every recorded payment.

The split is re-derived from the loan terms and the full payment history
on every call; nothing here is meant to be stored.

Interest is recognized in proportion to the share of the total
obligation collected before each payment. For payment ``i``::

    cap_before   = total_interest * min(1, paid_before / total_payable)
    remaining    = max(0, total_interest - cap_before)
    interest[i]  = min(amount[i], remaining)
    principal[i] = amount[i] - interest[i]
    balance[i]   = max(0, total_payable - paid_before - amount[i])

Each figure is rounded to cents per entry; the principal portion is the
rounded amount less the rounded interest, so the two always add up to
the entry amount. Rounding differences are not carried between entries.
"""

import logging
from typing import Iterable

from loan_core.exceptions import MalformedPayment
from loan_core.finance.financials import financials_for
from loan_core.finance.payments import check_payment
from loan_core.models.enums import LedgerMethod
from loan_core.models.loan import LedgerEntry, LedgerReport, LoanTerms, PaymentEvent
from loan_core.money import ZERO, money

logger = logging.getLogger(__name__)


def sort_payments(payments: Iterable[PaymentEvent]) -> list[PaymentEvent]:
    """Order payments by ``recorded_at``; ties keep their input order.

    Raises
    ------
    MalformedPayment
        If a payment is invalid, or naive and timezone-aware timestamps
        are mixed (they cannot be ordered).
    """
    payments = list(payments)
    for index, payment in enumerate(payments):
        check_payment(payment, index)

    aware = {payment.recorded_at.tzinfo is not None for payment in payments}
    if len(aware) > 1:
        raise MalformedPayment("Payments mix naive and timezone-aware timestamps")

    # sorted() is stable, so equal timestamps resolve by list position
    return sorted(payments, key=lambda payment: payment.recorded_at)


def build_ledger(
    terms: LoanTerms,
    payments: Iterable[PaymentEvent],
    method: LedgerMethod = LedgerMethod.PROPORTIONAL,
) -> LedgerReport:
    """Allocate each payment between interest and principal.

    Parameters
    ----------
    terms : LoanTerms
        Loan terms; supply the totals through the flat-rate model.
    payments : Iterable[PaymentEvent]
        Payment history in any order.
    method : LedgerMethod
        ``PROPORTIONAL`` (default) applies the proportional cap alone.
        ``CAPPED`` additionally bounds each payment's interest by the
        interest not yet allocated to earlier payments.

    Returns
    -------
    LedgerReport
        Entries in chronological order plus totals. An empty history
        gives no entries and ``remaining_balance == total_payable``.

    Raises
    ------
    InvalidTerms
        If the terms are invalid.
    MalformedPayment
        If any payment is invalid; no partial ledger is produced.
    """
    financials = financials_for(terms)
    ordered = sort_payments(payments)

    total_interest = financials.total_interest
    total_payable = financials.total_payable

    entries: list[LedgerEntry] = []
    paid_before = ZERO
    interest_allocated = ZERO

    for number, payment in enumerate(ordered, start=1):
        amount = payment.amount

        if total_payable > 0:
            collected_share = min(1, paid_before / total_payable)
        else:
            collected_share = 1
        remaining_cap = max(ZERO, total_interest - total_interest * collected_share)
        if method == LedgerMethod.CAPPED:
            remaining_cap = min(remaining_cap, max(ZERO, total_interest - interest_allocated))

        interest = money(min(amount, remaining_cap))
        principal = money(amount) - interest
        balance_after = max(ZERO, total_payable - paid_before - amount)

        entries.append(
            LedgerEntry(
                payment_number=number,
                payment_id=payment.payment_id,
                recorded_at=payment.recorded_at,
                amount=money(amount),
                interest_portion=interest,
                principal_portion=principal,
                balance_after=money(balance_after),
            )
        )
        paid_before += amount
        interest_allocated += interest

    total_paid = money(paid_before)
    report = LedgerReport(
        terms=terms,
        financials=financials,
        method=method,
        entries=entries,
        total_paid=total_paid,
        remaining_balance=max(money(ZERO), total_payable - total_paid),
        total_interest_allocated=money(sum((e.interest_portion for e in entries), ZERO)),
        total_principal_allocated=money(sum((e.principal_portion for e in entries), ZERO)),
        overpayment=max(money(ZERO), total_paid - total_payable),
    )

    if report.overpayment > 0:
        logger.warning(
            "Payments exceed total payable by %s",
            report.overpayment,
            extra={"extra": {"total_payable": str(total_payable), "total_paid": str(total_paid)}},
        )
    logger.debug(
        "Built %s ledger with %d entries, remaining balance %s",
        method.value,
        len(entries),
        report.remaining_balance,
    )
    return report
