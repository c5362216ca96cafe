"""Structured logging for request construction.

Records are rendered as single-line JSON objects so that the fields passed
through ``extra`` (error codes, parameter counts, the client context id)
stay machine readable. When a record is emitted inside an active
OpenTelemetry span, its trace and span ids are attached.

The level comes from ``N1QL_LOG_LEVEL`` unless ``setup_logging`` is given
one explicitly.
"""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any, Dict, FrozenSet, Optional

from opentelemetry import trace

_STANDARD_RECORD_FIELDS: FrozenSet[str] = frozenset(
    vars(logging.makeLogRecord({})).keys() | {"asctime", "message"}
)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _trace_fields() -> Dict[str, str]:
    span_context = trace.get_current_span().get_span_context()
    if not span_context.is_valid:
        return {}
    return {
        "trace_id": trace.format_trace_id(span_context.trace_id),
        "span_id": trace.format_span_id(span_context.span_id),
    }


class CustomJsonFormatter(logging.Formatter):
    """Render log records as JSON, keeping ``extra`` fields and trace ids."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _STANDARD_RECORD_FIELDS
        )
        payload.update(_trace_fields())

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def setup_logging(level: Optional[str] = None) -> None:
    """Send ``n1ql`` logs to stdout as JSON.

    Args:
        level: Log level name. Defaults to ``QuerySettings.log_level``.
    """
    if level is None:
        from n1ql.settings import get_settings
        level = get_settings().log_level
    level = level.upper()

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "n1ql_json": {"()": CustomJsonFormatter},
        },
        "filters": {
            "n1ql_context": {"()": "n1ql.logging.filters.ContextFilter"},
        },
        "handlers": {
            "n1ql_console": {
                "class": "logging.StreamHandler",
                "formatter": "n1ql_json",
                "filters": ["n1ql_context"],
                "stream": "ext://sys.stdout",
            }
        },
        "loggers": {
            "n1ql": {
                "level": level,
                "handlers": ["n1ql_console"],
                "propagate": False,
            }
        },
    })
