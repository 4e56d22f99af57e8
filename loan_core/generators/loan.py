"""Synthetic microfinance loans and repayment histories."""

import random
from datetime import datetime, timedelta
from decimal import ROUND_DOWN, Decimal
from typing import Iterator

from loan_core.finance.financials import financials_for
from loan_core.generators.base import BaseGenerator
from loan_core.models.enums import LoanStatus
from loan_core.models.loan import LoanRecord, LoanTerms, PaymentEvent
from loan_core.money import CENT, money

# Annual rates in percent and terms in months typical of microfinance products
ANNUAL_RATES = [10, 12, 15, 18, 20, 24, 30]
DURATIONS = [3, 6, 9, 12, 18, 24]


class LoanGenerator(BaseGenerator):
    """Generate synthetic loan records."""

    def generate(self, status: LoanStatus = LoanStatus.DRAFT, officer_id: str | None = None) -> LoanRecord:
        """Generate a loan record.

        Parameters
        ----------
        status : LoanStatus
            Status of the generated loan (default DRAFT).
        officer_id : str | None
            Creating officer; a random id when omitted.

        Returns
        -------
        LoanRecord
            Generated loan.
        """
        officer = officer_id or self.fake.uuid4()
        terms = LoanTerms(
            principal=Decimal(random.randint(5, 500) * 100),  # 500 - 50,000
            annual_interest_rate_percent=Decimal(random.choice(ANNUAL_RATES)),
            duration_months=random.choice(DURATIONS),
        )
        return LoanRecord(
            loan_id=self.fake.uuid4(),
            terms=terms,
            status=status,
            created_by=officer,
            officer_id=officer,
        )

    def generate_batch(self, count: int, status: LoanStatus = LoanStatus.DRAFT) -> Iterator[LoanRecord]:
        """Generate ``count`` loan records."""
        for _ in range(count):
            yield self.generate(status=status)


class PaymentHistoryGenerator(BaseGenerator):
    """Generate chronological repayment histories for a loan."""

    def generate(
        self,
        terms: LoanTerms,
        count: int,
        start: datetime | None = None,
        settle: bool = False,
    ) -> list[PaymentEvent]:
        """Generate payments roughly one month apart.

        Parameters
        ----------
        terms : LoanTerms
            Terms of the loan being repaid.
        count : int
            Number of payments.
        start : datetime | None
            Disbursement time; payments start about a month later.
        settle : bool
            When true the amounts add up exactly to the total payable.
            Otherwise each payment is 50-120% of an even share.

        Returns
        -------
        list[PaymentEvent]
            Payments in chronological order.
        """
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        if count == 0:
            return []

        total_payable = financials_for(terms).total_payable
        share = (total_payable / count).quantize(CENT, rounding=ROUND_DOWN)
        start = start or datetime(2024, 1, 1, 9, 0)

        amounts: list[Decimal] = []
        for _ in range(count):
            if settle:
                amounts.append(share)
            else:
                factor = Decimal(str(round(random.uniform(0.5, 1.2), 2)))
                amounts.append(money(share * factor))
        if settle:
            # Last payment absorbs the rounding remainder
            amounts[-1] = total_payable - share * (count - 1)

        payments = []
        for i, amount in enumerate(amounts, start=1):
            recorded_at = start + timedelta(days=30 * i + random.randint(-3, 3))
            payments.append(
                PaymentEvent(
                    payment_id=self.fake.uuid4(),
                    amount=amount,
                    recorded_at=recorded_at,
                )
            )
        return payments
