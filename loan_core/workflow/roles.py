"""Resolve the requesting actor from a user profile, once per request."""

import logging
from typing import Any, Mapping

from loan_core.models.actor import Actor
from loan_core.models.enums import UserRole
from loan_core.models.loan import LoanRecord
from loan_core.workflow.state_machine import as_role

logger = logging.getLogger(__name__)

FALLBACK_ROLE = UserRole.CUSTOMER


def resolve_role(profile: Mapping[str, Any]) -> UserRole:
    """Map a profile to a :class:`UserRole`.

    A recognized ``role`` wins (``admin``, ``manager``, ...). Staff
    profiles carry ``role: "employee"`` and name their function in
    ``employee_category``. Anything unrecognized resolves to CUSTOMER,
    which holds no capabilities.
    """
    role = as_role(profile.get("role"))
    if role is not None:
        return role

    category = as_role(profile.get("employee_category"))
    if category is not None:
        return category

    logger.debug(
        "Unrecognized profile role %r / category %r, using %s",
        profile.get("role"),
        profile.get("employee_category"),
        FALLBACK_ROLE.value,
    )
    return FALLBACK_ROLE


def resolve_actor(profile: Mapping[str, Any], loan: LoanRecord | None = None) -> Actor:
    """Build the :class:`Actor` for a request.

    The actor owns the loan when the profile id matches the loan's
    creator or assigned officer.
    """
    user_id = profile.get("id", profile.get("user_id"))
    user_id = str(user_id) if user_id is not None else None

    is_owner = False
    if loan is not None and user_id is not None:
        is_owner = user_id in (loan.created_by, loan.officer_id)

    return Actor(user_id=user_id, role=resolve_role(profile), is_loan_owner=is_owner)
