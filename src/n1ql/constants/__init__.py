"""Constants module for the n1ql request package.

Organization:
    - query: wire parameter names, result format enums and the
      scan consistency lookup table
"""

from n1ql.constants.query import (
    ADMIN_NAMESPACE,
    LOCAL_NAMESPACE,
    PARAMETER_SIGIL,
    SCAN_CONSISTENCY_WIRE_VALUES,
    UNSUPPORTED_SCAN_CONSISTENCIES,
    Compression,
    Encoding,
    Format,
    QueryParameter,
    ScanConsistency,
)

__all__ = [
    "ADMIN_NAMESPACE",
    "LOCAL_NAMESPACE",
    "PARAMETER_SIGIL",
    "SCAN_CONSISTENCY_WIRE_VALUES",
    "UNSUPPORTED_SCAN_CONSISTENCIES",
    "Compression",
    "Encoding",
    "Format",
    "QueryParameter",
    "ScanConsistency",
]
