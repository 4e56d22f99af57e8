#!/usr/bin/env python3
"""Benchmark ledger reconstruction.

Measures:
- Ledger build rate (loans/sec) for histories of different lengths
- Per-payment cost, to confirm the build stays linear in history length

Usage:
    python scripts/benchmark.py
    python scripts/benchmark.py --loans 500 --payments 12 120 1200
    python scripts/benchmark.py --method CAPPED
    LOAN_CORE_LEDGER_METHOD=capped LOG_FORMAT=json python scripts/benchmark.py
"""

import argparse
import logging
import sys
import time
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from loan_core.config import LoanCoreConfig
from loan_core.exceptions import InvalidTerms
from loan_core.finance import build_ledger, validate_terms
from loan_core.generators import LoanGenerator, PaymentHistoryGenerator
from loan_core.logging import setup_logging
from loan_core.models.enums import LedgerMethod

logger = logging.getLogger(__name__)


def benchmark_ledger(
    config: LoanCoreConfig,
    num_loans: int,
    num_payments: int,
    method: LedgerMethod,
    seed: int,
) -> tuple[float, int]:
    """Build ledgers for ``num_loans`` generated loans.

    Loans outside the configured product limits are skipped.

    Parameters
    ----------
    config : LoanCoreConfig
        Product limits to generate within.
    num_loans : int
        Number of loans to generate.
    num_payments : int
        Payments per loan.
    method : LedgerMethod
        Interest recognition method.
    seed : int
        Random seed.

    Returns
    -------
    tuple[float, int]
        Elapsed seconds spent building ledgers (generation excluded) and
        the number of ledgers built.
    """
    loan_gen = LoanGenerator(seed=seed)
    payment_gen = PaymentHistoryGenerator(seed=seed)

    cases = []
    for loan in loan_gen.generate_batch(num_loans):
        try:
            validate_terms(loan.terms, config.limits)
        except InvalidTerms:
            continue
        cases.append((loan.terms, payment_gen.generate(loan.terms, num_payments, settle=True)))

    if len(cases) < num_loans:
        logger.warning("Skipped %d loans outside product limits", num_loans - len(cases))

    start = time.perf_counter()
    for terms, payments in cases:
        build_ledger(terms, payments, method=method)
    return time.perf_counter() - start, len(cases)


def main() -> None:
    config = LoanCoreConfig.from_env()
    setup_logging(level=config.log_level, format_type=config.log_format)

    parser = argparse.ArgumentParser(description="Benchmark repayment ledger builds")
    parser.add_argument("--loans", type=int, default=200, help="Loans per run")
    parser.add_argument(
        "--payments", type=int, nargs="+", default=[12, 120, 1200], help="Payments per loan"
    )
    parser.add_argument(
        "--method",
        choices=[m.value for m in LedgerMethod],
        default=config.ledger.method.value,
        help="Interest recognition method (default: LOAN_CORE_LEDGER_METHOD)",
    )
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args()

    method = LedgerMethod(args.method)

    print(f"\n{'payments':>10} | {'loans/sec':>12} | {'us/payment':>12}")
    print("-" * 40)
    for num_payments in args.payments:
        elapsed, built = benchmark_ledger(config, args.loans, num_payments, method, args.seed)
        if not built:
            continue
        rate = built / elapsed if elapsed else float("inf")
        per_payment = elapsed / (built * num_payments) * 1_000_000
        print(f"{num_payments:>10} | {rate:>12,.0f} | {per_payment:>12.2f}")


if __name__ == "__main__":
    main()
