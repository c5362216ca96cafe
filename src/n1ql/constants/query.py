"""Query service wire constants.

This module contains the enumerations and fixed lookup tables that describe
how a query request is rendered for the query service HTTP endpoint. As the
lowest layer of the package it has no dependencies on other n1ql modules.

Wire keys are case-sensitive and must match the service exactly.
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping


PARAMETER_SIGIL = "$"
ADMIN_NAMESPACE = "admin:"
LOCAL_NAMESPACE = "local:"


class QueryParameter(str, Enum):
    """Request parameter names understood by the query service."""

    STATEMENT = "statement"
    PREPARED = "prepared"
    ENCODED_PLAN = "encoded_plan"
    TIMEOUT = "timeout"
    READONLY = "readonly"
    METRICS = "metrics"
    ARGS = "args"
    FORMAT = "format"
    ENCODING = "encoding"
    COMPRESSION = "compression"
    SIGNATURE = "signature"
    SCAN_CONSISTENCY = "scan_consistency"
    SCAN_VECTOR = "scan_vector"
    SCAN_WAIT = "scan_wait"
    PRETTY = "pretty"
    CREDS = "creds"
    CLIENT_CONTEXT_ID = "client_context_id"


class Format(str, Enum):
    """Desired format for the query results."""

    JSON = "JSON"
    XML = "XML"
    CSV = "CSV"
    TSV = "TSV"


class Encoding(str, Enum):
    """Character encoding for the query results."""

    UTF8 = "UTF8"


class Compression(str, Enum):
    """Compression applied to response data on the wire."""

    ZIP = "ZIP"
    RLE = "RLE"
    LZMA = "LZMA"
    LZO = "LZO"
    NONE = "NONE"


class ScanConsistency(str, Enum):
    """Consistency guarantee requested for index scans.

    Only NOT_BOUNDED and REQUEST_PLUS can be set on a request; AT_PLUS and
    STATEMENT_PLUS are listed so the wire table is complete.
    """

    NOT_BOUNDED = "not_bounded"
    REQUEST_PLUS = "request_plus"
    AT_PLUS = "at_plus"
    STATEMENT_PLUS = "statement_plus"


SCAN_CONSISTENCY_WIRE_VALUES: Mapping[ScanConsistency, str] = MappingProxyType({
    ScanConsistency.NOT_BOUNDED: "not_bounded",
    ScanConsistency.REQUEST_PLUS: "request_plus",
    ScanConsistency.AT_PLUS: "at_plus",
    ScanConsistency.STATEMENT_PLUS: "statement_plus",
})

UNSUPPORTED_SCAN_CONSISTENCIES = frozenset({
    ScanConsistency.AT_PLUS,
    ScanConsistency.STATEMENT_PLUS,
})
