"""Custom exception hierarchy for loan-core."""


class LoanCoreError(Exception):
    """Base exception for all loan-core errors."""


class InvalidTerms(LoanCoreError):
    """Raised when loan terms are structurally invalid or outside product limits."""


class PermissionDenied(LoanCoreError):
    """Raised when an actor lacks the capability for an operation at the loan's status."""

    def __init__(self, message: str, action: str | None = None, role: str | None = None,
                 status: str | None = None) -> None:
        super().__init__(message)
        self.action = action
        self.role = role
        self.status = status


class InvalidTransition(LoanCoreError):
    """Raised when a status change is not a declared edge and the actor cannot override."""

    def __init__(self, message: str, from_status: str | None = None,
                 to_status: str | None = None, role: str | None = None) -> None:
        super().__init__(message)
        self.from_status = from_status
        self.to_status = to_status
        self.role = role


class MalformedPayment(LoanCoreError):
    """Raised when a payment has a non-numeric or negative amount or an unusable timestamp."""

    def __init__(self, message: str, index: int | None = None) -> None:
        super().__init__(message)
        self.index = index


class ConfigurationError(LoanCoreError):
    """Raised when configuration is invalid or missing."""
