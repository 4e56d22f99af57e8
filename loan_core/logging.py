"""Logging setup for services embedding loan-core.

Workflow decisions and ledger warnings are emitted on the ``loan_core``
logger hierarchy with their context attached as ``extra={"extra": {...}}``
so the JSON formatter can lift it into top-level fields.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Any

STANDARD_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
    stream: IO[str] | None = None,
) -> None:
    """Configure the root logger.

    Parameters
    ----------
    level : str
        Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL). Unknown
        names fall back to INFO.
    format_type : str
        ``"standard"`` for pipe-separated text or ``"json"`` for one JSON
        object per line.
    stream : IO[str] | None
        Destination (default ``sys.stdout``).
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if format_type == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(fmt=STANDARD_FORMAT, datefmt=DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    logging.getLogger("loan_core").setLevel(log_level)

    # Generators are only used by tests and benchmarks
    logging.getLogger("faker").setLevel(logging.WARNING)


def transition_context(loan_id: str, action: str, role: Any, from_status: Any, to_status: Any) -> dict[str, str]:
    """Context attached to every workflow decision log line."""
    return {
        "loan_id": loan_id,
        "action": action,
        "role": _plain(role),
        "from_status": _plain(from_status),
        "to_status": _plain(to_status),
    }


def _plain(value: Any) -> str:
    return str(getattr(value, "value", value))


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with decision context as top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        context = getattr(record, "extra", None)
        if isinstance(context, dict):
            log_data.update(context)

        return json.dumps(log_data, default=str)


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``loan_core`` hierarchy conventions."""
    return logging.getLogger(name)
