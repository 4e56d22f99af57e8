"""Tests for role permission resolution."""

import pytest

from loan_core.models import Capabilities, LoanAction, LoanStatus, UserRole
from loan_core.workflow.permissions import FULL_ACCESS, NO_ACCESS, can_perform, resolve_permissions


class TestOverrideRoles:
    """ADMIN and MANAGER."""

    @pytest.mark.parametrize("role", [UserRole.ADMIN, UserRole.MANAGER])
    @pytest.mark.parametrize("status", list(LoanStatus))
    def test_full_access_in_every_status(self, role: UserRole, status: LoanStatus) -> None:
        assert resolve_permissions(role, status) == FULL_ACCESS

    def test_full_access_even_for_unknown_status(self) -> None:
        assert resolve_permissions(UserRole.ADMIN, "archived").can_override


class TestAccountant:
    """ACCOUNTANT status windows."""

    def test_pending(self) -> None:
        caps = resolve_permissions(UserRole.ACCOUNTANT, LoanStatus.PENDING)

        assert caps == Capabilities(can_view=True, can_approve=True, can_reject=True)

    def test_approved(self) -> None:
        caps = resolve_permissions(UserRole.ACCOUNTANT, LoanStatus.APPROVED)

        assert caps.can_approve
        assert not caps.can_reject
        assert caps.can_manage_repayments

    @pytest.mark.parametrize("status", [LoanStatus.ACTIVE, LoanStatus.OVERDUE, LoanStatus.DISBURSED])
    def test_repayment_statuses(self, status: LoanStatus) -> None:
        caps = resolve_permissions(UserRole.ACCOUNTANT, status)

        assert caps.can_view
        assert caps.can_manage_repayments
        assert not caps.can_approve

    @pytest.mark.parametrize("status", list(LoanStatus))
    def test_never_edits_disburses_or_closes(self, status: LoanStatus) -> None:
        caps = resolve_permissions(UserRole.ACCOUNTANT, status)

        assert not caps.can_edit
        assert not caps.can_disburse
        assert not caps.can_close
        assert not caps.can_override

    def test_draft_is_invisible(self) -> None:
        assert resolve_permissions(UserRole.ACCOUNTANT, LoanStatus.DRAFT) == NO_ACCESS


class TestLoanOfficer:
    """LOAN_OFFICER ownership rules."""

    def test_owner_of_draft(self) -> None:
        caps = resolve_permissions(UserRole.LOAN_OFFICER, LoanStatus.DRAFT, is_owner=True)

        assert caps == Capabilities(can_view=True, can_edit=True, can_submit=True)

    def test_non_owner_of_draft(self) -> None:
        caps = resolve_permissions(UserRole.LOAN_OFFICER, LoanStatus.DRAFT, is_owner=False)

        assert caps.can_view
        assert not caps.can_edit
        assert not caps.can_submit

    def test_owner_loses_edit_after_submission(self) -> None:
        caps = resolve_permissions(UserRole.LOAN_OFFICER, LoanStatus.PENDING, is_owner=True)

        assert not caps.can_edit
        assert not caps.can_submit


class TestOtherRoles:
    """Roles without workflow capabilities."""

    @pytest.mark.parametrize("role", [UserRole.COLLECTIONS, UserRole.UNDERWRITER, UserRole.CUSTOMER])
    def test_no_capabilities(self, role: UserRole) -> None:
        assert resolve_permissions(role, LoanStatus.ACTIVE, is_owner=True) == NO_ACCESS

    @pytest.mark.parametrize("role", ["employee", None, "", 7])
    def test_unknown_roles_get_nothing(self, role) -> None:
        assert resolve_permissions(role, LoanStatus.DRAFT, is_owner=True) == NO_ACCESS

    def test_unknown_status_gets_nothing(self) -> None:
        assert resolve_permissions(UserRole.LOAN_OFFICER, "archived", is_owner=True) == NO_ACCESS


class TestCanPerform:
    """Tests for can_perform."""

    def test_matches_capabilities(self) -> None:
        assert can_perform(LoanAction.SUBMIT, UserRole.LOAN_OFFICER, LoanStatus.DRAFT, is_owner=True)
        assert not can_perform(LoanAction.SUBMIT, UserRole.LOAN_OFFICER, LoanStatus.DRAFT)
        assert can_perform("approve", "accountant", "under_review")
        assert not can_perform("close", "accountant", "active")

    def test_unknown_action(self) -> None:
        assert not can_perform("delete", UserRole.ADMIN, LoanStatus.DRAFT)
