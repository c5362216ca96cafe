"""Shared error model for the n1ql package."""

from n1ql.common.exceptions import (
    ErrorCode,
    N1QLError,
    duplicate_key_error,
    invalid_argument_error,
    invalid_state_error,
    serialization_error,
    unsupported_error,
)

__all__ = [
    "ErrorCode",
    "N1QLError",
    "duplicate_key_error",
    "invalid_argument_error",
    "invalid_state_error",
    "serialization_error",
    "unsupported_error",
]
