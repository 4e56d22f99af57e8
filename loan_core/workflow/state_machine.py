"""Loan status lifecycle.

    DRAFT -> PENDING -> UNDER_REVIEW -> APPROVED -> DISBURSED -> ACTIVE <-> OVERDUE
                                           |                      |            |
                                           +--> REJECTED          +-> CLOSED <-+

PENDING may return to DRAFT and UNDER_REVIEW to PENDING; APPROVED may
still be REJECTED. REJECTED and CLOSED are terminal. ADMIN and MANAGER
may move a loan between any two statuses.
"""

from typing import Any

from loan_core.models.enums import LoanStatus, UserRole

INITIAL_STATUS = LoanStatus.DRAFT

TERMINAL_STATUSES = frozenset({LoanStatus.REJECTED, LoanStatus.CLOSED})

OVERRIDE_ROLES = frozenset({UserRole.ADMIN, UserRole.MANAGER})

TRANSITIONS: dict[LoanStatus, frozenset[LoanStatus]] = {
    LoanStatus.DRAFT: frozenset({LoanStatus.PENDING}),
    LoanStatus.PENDING: frozenset({LoanStatus.UNDER_REVIEW, LoanStatus.DRAFT}),
    LoanStatus.UNDER_REVIEW: frozenset(
        {LoanStatus.APPROVED, LoanStatus.REJECTED, LoanStatus.PENDING}
    ),
    LoanStatus.APPROVED: frozenset({LoanStatus.DISBURSED, LoanStatus.REJECTED}),
    LoanStatus.REJECTED: frozenset(),
    LoanStatus.DISBURSED: frozenset({LoanStatus.ACTIVE}),
    LoanStatus.ACTIVE: frozenset({LoanStatus.OVERDUE, LoanStatus.CLOSED}),
    LoanStatus.OVERDUE: frozenset({LoanStatus.ACTIVE, LoanStatus.CLOSED}),
    LoanStatus.CLOSED: frozenset(),
}


def as_status(value: Any) -> LoanStatus | None:
    """Read a status from an enum member or its (case-insensitive) value."""
    if isinstance(value, LoanStatus):
        return value
    if isinstance(value, str):
        try:
            return LoanStatus(value.lower())
        except ValueError:
            return None
    return None


def as_role(value: Any) -> UserRole | None:
    """Read a role from an enum member or its (case-insensitive) value."""
    if isinstance(value, UserRole):
        return value
    if isinstance(value, str):
        try:
            return UserRole(value.lower())
        except ValueError:
            return None
    return None


def is_override_role(role: Any) -> bool:
    return as_role(role) in OVERRIDE_ROLES


def allowed_targets(status: Any) -> frozenset[LoanStatus]:
    """Statuses reachable from ``status`` without an override."""
    current = as_status(status)
    if current is None:
        return frozenset()
    return TRANSITIONS[current]


def is_terminal(status: Any) -> bool:
    return as_status(status) in TERMINAL_STATUSES


def can_transition(from_status: Any, to_status: Any, role: Any) -> bool:
    """Check whether ``role`` may move a loan from one status to another.

    ADMIN and MANAGER may make any move between known statuses; every
    other role is limited to the declared edges. Never raises: unknown
    statuses or roles give ``False``.
    """
    source = as_status(from_status)
    target = as_status(to_status)
    if source is None or target is None:
        return False
    if is_override_role(role):
        return True
    return target in TRANSITIONS[source]


def next_valid_statuses(status: Any, role: Any) -> list[LoanStatus]:
    """Statuses a role would be offered as the next step for a loan.

    Narrower than :func:`can_transition` for ACCOUNTANT and LOAN_OFFICER,
    which only drive the review and submission steps respectively.
    """
    current = as_status(status)
    actor_role = as_role(role)
    if current is None:
        return []
    if actor_role in OVERRIDE_ROLES:
        return list(LoanStatus)

    targets = TRANSITIONS[current]
    if actor_role == UserRole.ACCOUNTANT:
        review_steps = {
            LoanStatus.PENDING: {LoanStatus.UNDER_REVIEW},
            LoanStatus.UNDER_REVIEW: {LoanStatus.APPROVED, LoanStatus.REJECTED},
        }
        targets = targets & review_steps.get(current, set())
    elif actor_role == UserRole.LOAN_OFFICER:
        if current == LoanStatus.DRAFT:
            targets = targets & {LoanStatus.PENDING}
        else:
            targets = frozenset()

    return [candidate for candidate in LoanStatus if candidate in targets]
