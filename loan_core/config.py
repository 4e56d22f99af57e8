"""Configuration management for loan-core."""

import os
from dataclasses import dataclass, field
from decimal import Decimal

from loan_core.exceptions import ConfigurationError
from loan_core.models.enums import LedgerMethod
from loan_core.money import to_decimal


@dataclass
class LedgerConfig:
    """Repayment ledger configuration."""

    method: LedgerMethod = LedgerMethod.PROPORTIONAL


@dataclass
class LoanProductLimits:
    """Amount, rate and duration bounds a loan product accepts."""

    min_amount: Decimal = Decimal("0")
    max_amount: Decimal = Decimal("1000000")
    min_rate: Decimal = Decimal("0")  # Annual, in percent
    max_rate: Decimal = Decimal("100")
    min_duration_months: int = 1
    max_duration_months: int = 360

    def validate(self) -> None:
        """Check that every range is well formed.

        Raises
        ------
        ConfigurationError
            If a bound is negative or a minimum exceeds its maximum.
        """
        ranges = {
            "amount": (self.min_amount, self.max_amount),
            "rate": (self.min_rate, self.max_rate),
            "duration_months": (self.min_duration_months, self.max_duration_months),
        }
        for name, (low, high) in ranges.items():
            if low < 0:
                raise ConfigurationError(f"Minimum {name} cannot be negative: {low}")
            if low > high:
                raise ConfigurationError(f"Minimum {name} {low} exceeds maximum {high}")


@dataclass
class LoanCoreConfig:
    """Main configuration for loan-core."""

    ledger: LedgerConfig = field(default_factory=LedgerConfig)
    limits: LoanProductLimits = field(default_factory=LoanProductLimits)
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "LoanCoreConfig":
        """Create config from environment variables."""
        method_name = os.getenv("LOAN_CORE_LEDGER_METHOD", LedgerMethod.PROPORTIONAL.value)
        try:
            method = LedgerMethod(method_name.upper())
        except ValueError:
            raise ConfigurationError(f"Unknown ledger method: {method_name}") from None

        limits = LoanProductLimits(
            min_amount=_env_decimal("LOAN_CORE_MIN_AMOUNT", "0"),
            max_amount=_env_decimal("LOAN_CORE_MAX_AMOUNT", "1000000"),
            min_rate=_env_decimal("LOAN_CORE_MIN_RATE", "0"),
            max_rate=_env_decimal("LOAN_CORE_MAX_RATE", "100"),
            min_duration_months=_env_int("LOAN_CORE_MIN_DURATION_MONTHS", "1"),
            max_duration_months=_env_int("LOAN_CORE_MAX_DURATION_MONTHS", "360"),
        )
        limits.validate()

        return cls(
            ledger=LedgerConfig(method=method),
            limits=limits,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )


def _env_decimal(name: str, default: str) -> Decimal:
    raw = os.getenv(name, default)
    try:
        return to_decimal(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None


def _env_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None
