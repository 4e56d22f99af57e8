"""Loan, payment and ledger models."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any

from loan_core.exceptions import InvalidTerms, InvalidTransition, MalformedPayment
from loan_core.models.enums import LedgerMethod, LoanStatus
from loan_core.money import to_decimal


@dataclass(frozen=True)
class LoanTerms:
    """Commercial terms of a loan.

    ``principal`` and ``annual_interest_rate_percent`` are coerced to
    Decimal (12 means 12% a year). Range checks live in
    :func:`loan_core.finance.financials.validate_terms`.
    """

    principal: Decimal
    annual_interest_rate_percent: Decimal
    duration_months: int

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "principal", to_decimal(self.principal))
            object.__setattr__(
                self,
                "annual_interest_rate_percent",
                to_decimal(self.annual_interest_rate_percent),
            )
        except ValueError as exc:
            raise InvalidTerms(f"Invalid loan terms: {exc}") from exc


@dataclass
class LoanRecord:
    """Loan record as handed over by the persistence layer."""

    loan_id: str
    terms: LoanTerms
    status: LoanStatus = LoanStatus.DRAFT
    created_by: str | None = None
    officer_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LoanRecord":
        """Build a record from a loan document.

        Accepts the document keys ``id``, ``amount``, ``interestRate``,
        ``durationMonths``, ``status``, ``created_by``/``createdBy`` and
        ``officerId``.
        """
        duration = data.get("durationMonths", data.get("duration_months"))
        try:
            duration_months = int(duration)
        except (TypeError, ValueError):
            raise InvalidTerms(f"Invalid duration: {duration!r}") from None
        if duration_months != duration and not isinstance(duration, str):
            raise InvalidTerms(f"Duration must be a whole number of months: {duration!r}")

        terms = LoanTerms(
            principal=data.get("amount"),
            annual_interest_rate_percent=data.get("interestRate", data.get("interest_rate", 0)),
            duration_months=duration_months,
        )
        status = data.get("status") or LoanStatus.DRAFT
        if not isinstance(status, LoanStatus):
            try:
                status = LoanStatus(str(status).lower())
            except ValueError:
                raise InvalidTransition(
                    f"Unknown loan status: {status!r}", from_status=str(status)
                ) from None

        return cls(
            loan_id=str(data.get("id", data.get("loan_id", ""))),
            terms=terms,
            status=status,
            created_by=data.get("created_by", data.get("createdBy")),
            officer_id=data.get("officerId", data.get("officer_id")),
        )


@dataclass(frozen=True)
class PaymentEvent:
    """A recorded repayment. Immutable once recorded.

    ``amount`` is coerced to Decimal. Negative amounts are kept so the
    ledger can reject them with their position in the history.
    """

    payment_id: str
    amount: Decimal
    recorded_at: datetime

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "amount", to_decimal(self.amount))
        except ValueError as exc:
            raise MalformedPayment(f"Payment {self.payment_id}: invalid amount ({exc})") from exc


@dataclass(frozen=True)
class Financials:
    """Derived figures for a set of loan terms."""

    principal: Decimal
    annual_interest_rate_percent: Decimal
    duration_months: int
    total_interest: Decimal  # Flat simple interest over the whole term
    total_payable: Decimal  # principal + total_interest
    installment: Decimal  # Annuity payment, informational only
    profit_margin: Decimal  # total_interest / principal, in percent


@dataclass(frozen=True)
class LedgerEntry:
    """Interest/principal split of one payment. Derived, never stored."""

    payment_number: int  # 1, 2, 3, ... in chronological order
    payment_id: str
    recorded_at: datetime
    amount: Decimal
    interest_portion: Decimal
    principal_portion: Decimal
    balance_after: Decimal


@dataclass(frozen=True)
class LedgerReport:
    """Ledger entries plus running totals for one loan."""

    terms: LoanTerms
    financials: Financials
    method: LedgerMethod
    entries: list[LedgerEntry] = field(default_factory=list)
    total_paid: Decimal = Decimal("0.00")
    remaining_balance: Decimal = Decimal("0.00")
    total_interest_allocated: Decimal = Decimal("0.00")
    total_principal_allocated: Decimal = Decimal("0.00")
    overpayment: Decimal = Decimal("0.00")  # Paid beyond total_payable
