"""Payment intake: parsing raw payment records and checking amounts."""

import logging
from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Any, Iterable

from loan_core.exceptions import MalformedPayment
from loan_core.models.loan import PaymentEvent
from loan_core.money import money, to_decimal

logger = logging.getLogger(__name__)


def parse_timestamp(value: Any) -> datetime:
    """Convert a stored timestamp into a timezone-aware datetime.

    Accepts datetimes, dates (midnight), ISO-8601 strings (a trailing
    ``Z`` is read as UTC) and POSIX timestamps in seconds. Values without
    an offset are taken as UTC, so parsed histories always sort together.

    Raises
    ------
    ValueError
        If the value cannot be read as a point in time.
    """
    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(float(value), tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as exc:
            raise ValueError(f"timestamp out of range: {value!r}") from exc
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return _as_utc(datetime.fromisoformat(text))
    raise ValueError(f"unparsable timestamp: {value!r}")


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_payment(record: dict[str, Any], index: int | None = None) -> PaymentEvent:
    """Build a :class:`PaymentEvent` from a repayment document.

    Parameters
    ----------
    record : dict
        Document with ``amount``, ``recordedAt`` (or ``recorded_at``) and
        an optional ``id``.
    index : int | None
        Position of the record in its list, used for ids and messages.

    Raises
    ------
    MalformedPayment
        If the amount is missing, not a number or negative, or the
        timestamp cannot be parsed.
    """
    where = f"Payment #{index + 1}" if index is not None else "Payment"

    try:
        amount = to_decimal(record.get("amount"))
    except ValueError as exc:
        raise MalformedPayment(f"{where}: invalid amount ({exc})", index=index) from exc
    if amount < 0:
        raise MalformedPayment(f"{where}: amount cannot be negative ({amount})", index=index)

    raw_time = record.get("recordedAt", record.get("recorded_at"))
    try:
        recorded_at = parse_timestamp(raw_time)
    except ValueError as exc:
        raise MalformedPayment(f"{where}: invalid timestamp ({exc})", index=index) from exc

    payment_id = record.get("id")
    if payment_id is None:
        payment_id = f"payment-{index + 1}" if index is not None else ""

    return PaymentEvent(payment_id=str(payment_id), amount=amount, recorded_at=recorded_at)


def parse_payments(records: Iterable[dict[str, Any]]) -> list[PaymentEvent]:
    """Parse a list of repayment documents, rejecting it on the first bad record."""
    payments = [parse_payment(record, index) for index, record in enumerate(records)]
    logger.debug("Parsed %d payment records", len(payments))
    return payments


def check_payment(payment: PaymentEvent, index: int | None = None) -> None:
    """Validate an already built payment event.

    Raises
    ------
    MalformedPayment
        If the amount is not a finite, non-negative Decimal or the
        timestamp is not a datetime.
    """
    where = f"Payment #{index + 1}" if index is not None else "Payment"
    if not isinstance(payment.amount, Decimal) or not payment.amount.is_finite():
        raise MalformedPayment(f"{where}: invalid amount {payment.amount!r}", index=index)
    if payment.amount < 0:
        raise MalformedPayment(f"{where}: amount cannot be negative ({payment.amount})", index=index)
    if not isinstance(payment.recorded_at, datetime):
        raise MalformedPayment(f"{where}: invalid timestamp {payment.recorded_at!r}", index=index)


def validate_payment_amount(amount: Any, remaining_balance: Any) -> Decimal:
    """Check a new payment against the outstanding balance before recording it.

    Returns
    -------
    Decimal
        The amount, rounded to cents.

    Raises
    ------
    MalformedPayment
        If the amount is not positive or exceeds the remaining balance.
    """
    try:
        amount_d = money(amount)
        balance_d = money(remaining_balance)
    except ValueError as exc:
        raise MalformedPayment(f"Invalid payment amount: {exc}") from exc

    if amount_d <= 0:
        raise MalformedPayment("Payment amount must be greater than 0")
    if amount_d > balance_d:
        raise MalformedPayment(
            f"Payment amount ({amount_d:,}) cannot exceed remaining balance ({balance_d:,})"
        )
    return amount_d
