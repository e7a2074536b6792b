"""
Logging for the e-portfolio core.

Every PortfolioService call binds an operation id; handlers installed by
configure_logging() stamp it on each record so the log lines of one
submission can be grouped. Production output is one JSON object per line.
"""

import json
import logging
import sys
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Iterator, Optional

# Bound by operation_scope(); read by OperationIdFilter
operation_id_var: ContextVar[Optional[str]] = ContextVar("operation_id", default=None)

_RESERVED_RECORD_KEYS = frozenset((
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "pathname", "process", "processName", "relativeCreated",
    "stack_info", "exc_info", "exc_text", "thread", "threadName",
    "message", "taskName", "operation_id",
))


def get_operation_id() -> Optional[str]:
    """Operation id of the enclosing operation_scope, or None."""
    return operation_id_var.get()


@contextmanager
def operation_scope(operation_id: Optional[str] = None) -> Iterator[str]:
    """Bind an operation ID for the duration of the block."""
    op_id = operation_id or uuid.uuid4().hex[:12]
    token = operation_id_var.set(op_id)
    try:
        yield op_id
    finally:
        operation_id_var.reset(token)


class OperationIdFilter(logging.Filter):
    """Copies the bound operation id onto each record ("-" outside a scope)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.operation_id = get_operation_id() or "-"  # type: ignore[attr-defined]
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with extra= fields merged in."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        op_id = getattr(record, "operation_id", None)
        if op_id and op_id != "-":
            log_obj["operation_id"] = op_id

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        # Values json cannot encode are logged as their str()
        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_KEYS and value is not None:
                try:
                    json.dumps(value)
                    log_obj[key] = value
                except (TypeError, ValueError):
                    log_obj[key] = str(value)

        return json.dumps(log_obj)


def _create_dev_formatter() -> logging.Formatter:
    return logging.Formatter(
        "%(asctime)s %(levelname)-5s [%(name)s] op=%(operation_id)s %(message)s",
        datefmt="%H:%M:%S",
    )


def configure_logging(
    *,
    log_level: str = "INFO",
    environment: str = "development",
    debug: bool = False,
) -> None:
    """
    Install a single stderr handler on the root logger.

    Calling it again replaces the previous handler. debug forces DEBUG;
    environment "production" selects JsonFormatter, anything else the
    compact dev format.
    """
    level = logging.DEBUG if debug else getattr(logging, log_level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    for h in root.handlers[:]:
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.addFilter(OperationIdFilter())

    if environment == "production":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(_create_dev_formatter())

    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Module logger; pass structured fields through extra=."""
    return logging.getLogger(name)
