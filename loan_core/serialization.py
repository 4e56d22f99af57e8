"""JSON-ready views of ledger reports, audit records and other results.

Amounts are emitted as strings so no precision is lost on the way to a
UI or an export file.
"""

from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from loan_core.models.loan import LedgerReport

LEDGER_COLUMNS = (
    "payment_number",
    "payment_id",
    "recorded_at",
    "amount",
    "interest_portion",
    "principal_portion",
    "balance_after",
)


def to_dict(obj: Any) -> dict:
    """Convert a result object to a JSON-ready dictionary."""
    if is_dataclass(obj) and not isinstance(obj, type):
        return dataclass_to_dict(obj)
    if isinstance(obj, dict):
        return {k: serialize_value(v) for k, v in obj.items()}
    return {"value": str(obj)}


def dataclass_to_dict(obj: Any) -> dict:
    return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}


def serialize_value(value: Any) -> Any:
    """Serialize a single value for JSON output."""
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if is_dataclass(value) and not isinstance(value, type):
        return dataclass_to_dict(value)
    if isinstance(value, dict):
        return {serialize_value(k): serialize_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    if isinstance(value, (set, frozenset)):
        return sorted(serialize_value(v) for v in value)
    return value


def ledger_rows(report: LedgerReport) -> list[dict[str, Any]]:
    """Flatten a ledger report into one row per payment, in ledger order.

    Suitable for a repayment table or a CSV writer using
    :data:`LEDGER_COLUMNS` as the header.
    """
    return [{column: serialize_value(getattr(entry, column)) for column in LEDGER_COLUMNS} for entry in report.entries]
