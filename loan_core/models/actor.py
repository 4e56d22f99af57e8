"""Actor and capability models."""

from dataclasses import dataclass

from loan_core.models.enums import UserRole


@dataclass(frozen=True)
class Actor:
    """The user requesting an operation, resolved once per request."""

    user_id: str | None
    role: UserRole
    is_loan_owner: bool = False


@dataclass(frozen=True)
class Capabilities:
    """What an actor may do with a loan in its current status."""

    can_view: bool = False
    can_edit: bool = False
    can_submit: bool = False
    can_approve: bool = False
    can_reject: bool = False
    can_disburse: bool = False
    can_manage_repayments: bool = False
    can_close: bool = False
    can_override: bool = False  # Bypass the transition table
