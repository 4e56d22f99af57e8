"""Tests for custom exception hierarchy."""

from loan_core.exceptions import (
    ConfigurationError,
    InvalidTerms,
    InvalidTransition,
    LoanCoreError,
    MalformedPayment,
    PermissionDenied,
)


class TestExceptionHierarchy:
    """Test exception inheritance chain."""

    def test_loan_core_error_is_exception(self) -> None:
        assert isinstance(LoanCoreError("test"), Exception)

    def test_invalid_terms_is_loan_core_error(self) -> None:
        assert isinstance(InvalidTerms("test"), LoanCoreError)

    def test_permission_denied_is_loan_core_error(self) -> None:
        assert isinstance(PermissionDenied("test"), LoanCoreError)

    def test_invalid_transition_is_loan_core_error(self) -> None:
        assert isinstance(InvalidTransition("test"), LoanCoreError)

    def test_permission_and_transition_errors_are_distinct(self) -> None:
        assert not isinstance(PermissionDenied("test"), InvalidTransition)
        assert not isinstance(InvalidTransition("test"), PermissionDenied)

    def test_malformed_payment_is_loan_core_error(self) -> None:
        assert isinstance(MalformedPayment("test"), LoanCoreError)

    def test_configuration_error_is_loan_core_error(self) -> None:
        assert isinstance(ConfigurationError("test"), LoanCoreError)

    def test_exception_message(self) -> None:
        err = MalformedPayment("Payment #2: amount cannot be negative (-50)", index=1)
        assert str(err) == "Payment #2: amount cannot be negative (-50)"
        assert err.index == 1


class TestExceptionContext:
    """Test context attributes carried by workflow errors."""

    def test_permission_denied_attributes(self) -> None:
        err = PermissionDenied("no", action="approve", role="loan_officer", status="pending")
        assert err.action == "approve"
        assert err.role == "loan_officer"
        assert err.status == "pending"

    def test_invalid_transition_attributes(self) -> None:
        err = InvalidTransition("no", from_status="pending", to_status="approved", role="accountant")
        assert err.from_status == "pending"
        assert err.to_status == "approved"
        assert err.role == "accountant"

    def test_attributes_default_to_none(self) -> None:
        assert PermissionDenied("no").action is None
        assert InvalidTransition("no").to_status is None
        assert MalformedPayment("no").index is None
