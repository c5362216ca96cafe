from n1ql.__version__ import __version__

from n1ql.common.exceptions import ErrorCode, N1QLError
from n1ql.constants import (
    Compression,
    Encoding,
    Format,
    QueryParameter,
    ScanConsistency,
)
from n1ql.query_request import QueryRequest, QueryRequestFactory, get_query_request
from n1ql.types import QueryPlan


__all__ = [
    "__version__",

    "QueryRequest",
    "QueryRequestFactory",
    "get_query_request",
    "QueryPlan",

    # Enums (public API)
    "Compression",
    "Encoding",
    "Format",
    "QueryParameter",
    "ScanConsistency",

    # Exceptions (public API)
    "N1QLError",
    "ErrorCode",
]
