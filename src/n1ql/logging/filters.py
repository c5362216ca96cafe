"""Logging filters for context injection.

This module provides filters that inject context variables into log records,
so that log lines emitted while a request is being encoded can be correlated
with the client context id the query service will echo back.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar, Token
from typing import Optional

from n1ql.__version__ import __version__

client_context_id_var: ContextVar[Optional[str]] = ContextVar("client_context_id", default=None)


class ContextFilter(logging.Filter):
    """Logging filter that adds context variables to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Add context variables to the log record.

        Args:
            record: Log record to enhance

        Returns:
            Always True (doesn't filter out any records)
        """
        setattr(record, "client_context_id", client_context_id_var.get())
        setattr(record, "sdk_name", "n1ql")
        setattr(record, "sdk_version", __version__)

        return True


def set_request_context(client_context_id: Optional[str] = None) -> Optional[Token]:
    """Set request context variables.

    Returns:
        Token for ``reset_request_context``, or None when nothing was set.
    """
    if client_context_id is None:
        return None
    return client_context_id_var.set(client_context_id)


def reset_request_context(token: Optional[Token]) -> None:
    """Restore the context that was active before ``set_request_context``."""
    if token is not None:
        client_context_id_var.reset(token)


def clear_request_context() -> None:
    """Clear all request context variables."""
    client_context_id_var.set(None)
