"""Property-based tests for the ledger and the workflow rules.

Uses hypothesis to check, for arbitrary terms, payment histories, roles
and statuses:

- interest never exceeds the loan's total interest (capped method)
- balances never increase and never go negative
- each entry's portions add up to its amount
- undeclared edges are refused to every role but ADMIN and MANAGER
- permission resolution has no hidden state
- closed and rejected loans grant no transition capability
"""

from datetime import datetime, timedelta
from decimal import Decimal

from hypothesis import given, settings
from hypothesis import strategies as st

from loan_core.finance.ledger import build_ledger
from loan_core.models import LedgerMethod, LoanStatus, LoanTerms, PaymentEvent, UserRole
from loan_core.workflow.permissions import resolve_permissions
from loan_core.workflow.state_machine import OVERRIDE_ROLES, TRANSITIONS, can_transition

# =============================================================================
# STRATEGIES
# =============================================================================


@st.composite
def loan_terms(draw):
    """Valid terms: up to 1,000,000 at up to 100% a year over 1-360 months."""
    return LoanTerms(
        principal=draw(
            st.decimals(min_value=Decimal("0"), max_value=Decimal("1000000"), places=2)
        ),
        annual_interest_rate_percent=draw(
            st.decimals(min_value=Decimal("0"), max_value=Decimal("100"), places=2)
        ),
        duration_months=draw(st.integers(min_value=1, max_value=360)),
    )


@st.composite
def payment_history(draw, max_size=30):
    """Payments with non-negative amounts at arbitrary (possibly equal) times."""
    amounts = draw(
        st.lists(
            st.decimals(min_value=Decimal("0"), max_value=Decimal("500000"), places=2),
            max_size=max_size,
        )
    )
    base = datetime(2024, 1, 1)
    payments = []
    for index, amount in enumerate(amounts):
        offset = draw(st.integers(min_value=0, max_value=400))
        payments.append(
            PaymentEvent(
                payment_id=f"p-{index}",
                amount=amount,
                recorded_at=base + timedelta(days=offset),
            )
        )
    return payments


methods = st.sampled_from(list(LedgerMethod))
roles = st.sampled_from(list(UserRole))
statuses = st.sampled_from(list(LoanStatus))

TRANSITION_CAPABILITIES = (
    "can_submit",
    "can_approve",
    "can_reject",
    "can_disburse",
    "can_manage_repayments",
    "can_close",
    "can_override",
)


# =============================================================================
# LEDGER PROPERTIES
# =============================================================================


class TestLedgerProperties:
    """Properties of build_ledger over arbitrary inputs."""

    @given(terms=loan_terms(), payments=payment_history())
    @settings(max_examples=200)
    def test_capped_interest_never_exceeds_total(self, terms: LoanTerms, payments) -> None:
        report = build_ledger(terms, payments, method=LedgerMethod.CAPPED)

        allocated = sum((e.interest_portion for e in report.entries), Decimal("0"))
        assert allocated <= report.financials.total_interest

    @given(terms=loan_terms(), payments=payment_history(), method=methods)
    @settings(max_examples=200)
    def test_each_entry_within_total_interest(self, terms: LoanTerms, payments, method) -> None:
        report = build_ledger(terms, payments, method=method)

        for entry in report.entries:
            assert Decimal("0") <= entry.interest_portion <= report.financials.total_interest

    @given(terms=loan_terms(), payments=payment_history(), method=methods)
    @settings(max_examples=200)
    def test_balance_is_monotonic_and_non_negative(self, terms: LoanTerms, payments, method) -> None:
        report = build_ledger(terms, payments, method=method)

        balances = [e.balance_after for e in report.entries]
        assert all(b >= 0 for b in balances)
        assert all(later <= earlier for earlier, later in zip(balances, balances[1:]))

    @given(terms=loan_terms(), payments=payment_history(), method=methods)
    @settings(max_examples=200)
    def test_portions_add_up_to_amount(self, terms: LoanTerms, payments, method) -> None:
        report = build_ledger(terms, payments, method=method)

        for entry in report.entries:
            assert entry.principal_portion >= 0
            assert entry.interest_portion + entry.principal_portion == entry.amount

    @given(terms=loan_terms(), payments=payment_history(), method=methods)
    @settings(max_examples=100)
    def test_entries_are_chronological(self, terms: LoanTerms, payments, method) -> None:
        report = build_ledger(terms, payments, method=method)

        times = [e.recorded_at for e in report.entries]
        assert times == sorted(times)
        assert [e.payment_number for e in report.entries] == list(range(1, len(payments) + 1))

    @given(terms=loan_terms(), payments=payment_history(), method=methods)
    @settings(max_examples=100)
    def test_deterministic(self, terms: LoanTerms, payments, method) -> None:
        assert build_ledger(terms, payments, method=method) == build_ledger(
            terms, list(payments), method=method
        )


# =============================================================================
# WORKFLOW PROPERTIES
# =============================================================================


class TestWorkflowProperties:
    """Properties of the transition table and permission resolver."""

    @given(source=statuses, target=statuses, role=roles)
    def test_undeclared_edges_need_override(self, source, target, role) -> None:
        if target not in TRANSITIONS[source] and role not in OVERRIDE_ROLES:
            assert can_transition(source, target, role) is False

    @given(source=statuses, target=statuses, role=roles)
    def test_override_roles_reach_every_status(self, source, target, role) -> None:
        if role in OVERRIDE_ROLES:
            assert can_transition(source, target, role) is True

    @given(role=roles, status=statuses, is_owner=st.booleans())
    def test_resolution_is_pure(self, role, status, is_owner) -> None:
        assert resolve_permissions(role, status, is_owner) == resolve_permissions(role, status, is_owner)

    @given(
        role=roles.filter(lambda r: r not in OVERRIDE_ROLES),
        status=st.sampled_from([LoanStatus.CLOSED, LoanStatus.REJECTED]),
        is_owner=st.booleans(),
    )
    def test_terminal_statuses_grant_no_transitions(self, role, status, is_owner) -> None:
        caps = resolve_permissions(role, status, is_owner)

        assert not any(getattr(caps, name) for name in TRANSITION_CAPABILITIES)
