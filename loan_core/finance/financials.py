"""Flat-rate loan financials."""

from decimal import Decimal
from typing import Any

from loan_core.config import LoanProductLimits
from loan_core.exceptions import InvalidTerms
from loan_core.models.loan import Financials, LoanTerms
from loan_core.money import ZERO, money, to_decimal

HUNDRED = Decimal("100")
MONTHS_PER_YEAR = Decimal("12")


def compute_financials(
    principal: Any,
    annual_rate_percent: Any,
    duration_months: int,
) -> Financials:
    """Compute total interest, total payable and the expected installment.

    Interest is flat (simple) for the whole term::

        total_interest = principal * rate% * months / 12

    The installment uses the amortizing annuity formula at ``rate / 12``
    per month. It is shown as the expected monthly payment only and is
    not consistent with the flat total; the ledger never uses it.

    Parameters
    ----------
    principal : Decimal | int | float | str
        Amount lent.
    annual_rate_percent : Decimal | int | float | str
        Annual rate in percent (12 means 12%).
    duration_months : int
        Term in months, at least 1.

    Returns
    -------
    Financials
        All money figures rounded to cents, half-up.

    Raises
    ------
    InvalidTerms
        If the duration is not a positive integer or principal/rate is
        negative or not a number.
    """
    principal_d, rate_d = _check_terms(principal, annual_rate_percent, duration_months)
    months = Decimal(duration_months)

    total_interest = money(principal_d * (rate_d / HUNDRED) * (months / MONTHS_PER_YEAR))
    total_payable = money(principal_d) + total_interest

    monthly_rate = rate_d / HUNDRED / MONTHS_PER_YEAR
    if monthly_rate > 0:
        growth = (1 + monthly_rate) ** duration_months
        installment = principal_d * (monthly_rate * growth) / (growth - 1)
    else:
        installment = principal_d / months

    if principal_d > 0:
        profit_margin = money(total_interest / principal_d * HUNDRED)
    else:
        profit_margin = money(ZERO)

    return Financials(
        principal=money(principal_d),
        annual_interest_rate_percent=rate_d,
        duration_months=duration_months,
        total_interest=total_interest,
        total_payable=total_payable,
        installment=money(installment),
        profit_margin=profit_margin,
    )


def financials_for(terms: LoanTerms) -> Financials:
    """Shortcut for :func:`compute_financials` on a :class:`LoanTerms`."""
    return compute_financials(
        terms.principal,
        terms.annual_interest_rate_percent,
        terms.duration_months,
    )


def validate_terms(terms: LoanTerms, limits: LoanProductLimits | None = None) -> None:
    """Check terms before a loan may leave DRAFT.

    Parameters
    ----------
    terms : LoanTerms
        Terms to check.
    limits : LoanProductLimits | None
        Product bounds. When omitted only structural checks run.

    Raises
    ------
    InvalidTerms
        On the first violated rule.
    """
    principal, rate = _check_terms(
        terms.principal,
        terms.annual_interest_rate_percent,
        terms.duration_months,
    )
    if limits is None:
        return

    if principal < limits.min_amount:
        raise InvalidTerms(f"Loan amount must be at least {limits.min_amount:,}")
    if principal > limits.max_amount:
        raise InvalidTerms(f"Loan amount cannot exceed {limits.max_amount:,}")
    if rate < limits.min_rate:
        raise InvalidTerms(f"Interest rate must be at least {limits.min_rate}%")
    if rate > limits.max_rate:
        raise InvalidTerms(f"Interest rate cannot exceed {limits.max_rate}%")
    if terms.duration_months < limits.min_duration_months:
        raise InvalidTerms(f"Duration must be at least {limits.min_duration_months} months")
    if terms.duration_months > limits.max_duration_months:
        raise InvalidTerms(f"Duration cannot exceed {limits.max_duration_months} months")


def _check_terms(principal: Any, rate: Any, duration_months: Any) -> tuple[Decimal, Decimal]:
    if isinstance(duration_months, bool) or not isinstance(duration_months, int):
        raise InvalidTerms(f"Duration must be a whole number of months: {duration_months!r}")
    if duration_months <= 0:
        raise InvalidTerms(f"Duration must be at least 1 month, got {duration_months}")

    try:
        principal_d = to_decimal(principal)
        rate_d = to_decimal(rate)
    except ValueError as exc:
        raise InvalidTerms(str(exc)) from exc

    if principal_d < 0:
        raise InvalidTerms(f"Principal cannot be negative: {principal_d}")
    if rate_d < 0:
        raise InvalidTerms(f"Interest rate cannot be negative: {rate_d}")
    return principal_d, rate_d
