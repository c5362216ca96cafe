from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Standard error codes for n1ql request construction.

    Errors are categorized by code rather than by exception class, so callers
    catch ``N1QLError`` and branch on ``error_code`` when they need to.

    Attributes:
        VALIDATION_*: Argument and state validation errors (1xxx)
        DATA_*: Key uniqueness errors (2xxx)
        SERIALIZATION_*: Payload rendering errors (3xxx)
    """
    # Validation errors (1xxx)
    INVALID_ARGUMENT = "VALIDATION_001"
    UNSUPPORTED = "VALIDATION_002"
    INVALID_STATE = "VALIDATION_003"

    # Data errors (2xxx)
    DUPLICATE_KEY = "DATA_001"

    # Serialization errors (3xxx)
    SERIALIZATION_ERROR = "SERIALIZATION_001"


class N1QLError(Exception):
    """Base exception for all n1ql request errors.

    Attributes:
        message: Error message
        error_code: Error code from ErrorCode enum
        details: Additional error details
        cause: Optional underlying exception
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INVALID_ARGUMENT,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        """Initialize n1ql error.

        Args:
            message: Error message
            error_code: Error code from ErrorCode enum
            details: Additional error details
            cause: Optional underlying exception
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.cause = cause

        # Lazy import to avoid circular dependency
        from n1ql.logging import get_logger
        logger = get_logger(__name__)
        logger.error(
            message,
            extra={"error_code": error_code.value, "details": self.details},
            exc_info=cause is not None,
        )

    def __str__(self) -> str:
        """String representation of the error."""
        msg = f"[{self.error_code.value}] {self.message}"
        if self.cause:
            msg = f"{msg} (caused by: {type(self.cause).__name__}: {str(self.cause)})"
        return msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "error_name": self.error_code.name,
            "details": self.details,
        }


def invalid_argument_error(
    message: str,
    argument: Optional[str] = None,
    **kwargs
) -> N1QLError:
    """Create an invalid argument error.

    Args:
        message: Error message
        argument: Name of the offending argument
        **kwargs: Additional error details

    Returns:
        N1QLError with INVALID_ARGUMENT code
    """
    details = kwargs.pop("details", {})
    if argument:
        details["argument"] = argument

    return N1QLError(
        message=message,
        error_code=ErrorCode.INVALID_ARGUMENT,
        details=details,
        **kwargs
    )


def unsupported_error(
    message: str,
    value: Any = None,
    **kwargs
) -> N1QLError:
    """Create an error for a value the query service does not support.

    Args:
        message: Error message
        value: The rejected value
        **kwargs: Additional error details

    Returns:
        N1QLError with UNSUPPORTED code
    """
    details = kwargs.pop("details", {})
    if value is not None:
        details["value"] = str(value)

    return N1QLError(
        message=message,
        error_code=ErrorCode.UNSUPPORTED,
        details=details,
        **kwargs
    )


def duplicate_key_error(
    key: str,
    collection: str,
    **kwargs
) -> N1QLError:
    """Create a duplicate key error.

    Args:
        key: The key that was already present
        collection: Which keyed collection rejected it
        **kwargs: Additional error details

    Returns:
        N1QLError with DUPLICATE_KEY code
    """
    details = kwargs.pop("details", {})
    details["key"] = key
    details["collection"] = collection

    return N1QLError(
        message=f"An item with the key '{key}' has already been added to {collection}",
        error_code=ErrorCode.DUPLICATE_KEY,
        details=details,
        **kwargs
    )


def invalid_state_error(message: str, **kwargs) -> N1QLError:
    """Create an invalid state error.

    Args:
        message: Error message
        **kwargs: Additional error details

    Returns:
        N1QLError with INVALID_STATE code
    """
    return N1QLError(
        message=message,
        error_code=ErrorCode.INVALID_STATE,
        **kwargs
    )


def serialization_error(original_error: Exception, **kwargs) -> N1QLError:
    """Create an error for a payload that could not be rendered.

    Args:
        original_error: The underlying exception
        **kwargs: Additional error details

    Returns:
        N1QLError with SERIALIZATION_ERROR code
    """
    return N1QLError(
        message=f"Query request could not be serialized: {str(original_error)}",
        error_code=ErrorCode.SERIALIZATION_ERROR,
        cause=original_error,
        **kwargs
    )
