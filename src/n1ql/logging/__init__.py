"""Logging infrastructure for the n1ql package.

This module provides structured logging with JSON output and context
tracking of the request currently being encoded.
"""

from n1ql.logging.filters import (
    ContextFilter,
    clear_request_context,
    reset_request_context,
    set_request_context,
)
from n1ql.logging.logger import CustomJsonFormatter, get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
    "CustomJsonFormatter",
    "ContextFilter",
    "set_request_context",
    "clear_request_context",
    "reset_request_context",
]
