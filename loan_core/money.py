"""Decimal helpers for money values."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

CENT = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value: Any) -> Decimal:
    """Convert ``value`` to Decimal, going through ``str`` for floats.

    Raises
    ------
    ValueError
        If the value is None, a bool, not numeric, or not finite.
    """
    if value is None or isinstance(value, bool):
        raise ValueError(f"not a number: {value!r}")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValueError(f"not a number: {value!r}") from None
    if not result.is_finite():
        raise ValueError(f"not a finite number: {value!r}")
    return result


def money(value: Any) -> Decimal:
    """Always return a 2-decimal Decimal with HALF_UP rounding."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
