"""Pytest configuration and fixtures."""

from datetime import datetime
from decimal import Decimal

import pytest

from loan_core.models import Actor, LoanRecord, LoanStatus, LoanTerms, PaymentEvent, UserRole


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def sample_loan_id() -> str:
    """Sample loan ID."""
    return "loan-test-001"


@pytest.fixture
def officer_id() -> str:
    """ID of the officer who created the sample loan."""
    return "officer-test-001"


@pytest.fixture
def standard_terms() -> LoanTerms:
    """10,000 at 12% a year over 12 months: 1,200 interest, 11,200 payable."""
    return LoanTerms(
        principal=Decimal("10000"),
        annual_interest_rate_percent=Decimal("12"),
        duration_months=12,
    )


@pytest.fixture
def make_loan(sample_loan_id: str, officer_id: str, standard_terms: LoanTerms):
    """Factory for loan records in a given status."""

    def _make(status: LoanStatus = LoanStatus.DRAFT, terms: LoanTerms | None = None) -> LoanRecord:
        return LoanRecord(
            loan_id=sample_loan_id,
            terms=terms or standard_terms,
            status=status,
            created_by=officer_id,
            officer_id=officer_id,
        )

    return _make


@pytest.fixture
def make_payment():
    """Factory for payment events on a given day of 2024."""

    def _make(amount: str, day: int = 1, month: int = 1, payment_id: str | None = None) -> PaymentEvent:
        return PaymentEvent(
            payment_id=payment_id or f"pay-{month:02d}-{day:02d}",
            amount=Decimal(amount),
            recorded_at=datetime(2024, month, day, 10, 0),
        )

    return _make


@pytest.fixture
def admin() -> Actor:
    return Actor(user_id="admin-001", role=UserRole.ADMIN)


@pytest.fixture
def accountant() -> Actor:
    return Actor(user_id="acct-001", role=UserRole.ACCOUNTANT)


@pytest.fixture
def owning_officer(officer_id: str) -> Actor:
    return Actor(user_id=officer_id, role=UserRole.LOAN_OFFICER, is_loan_owner=True)


@pytest.fixture
def other_officer() -> Actor:
    return Actor(user_id="officer-other", role=UserRole.LOAN_OFFICER, is_loan_owner=False)
