from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import SettingsConfigDict

from n1ql.constants import UNSUPPORTED_SCAN_CONSISTENCIES, ScanConsistency
from .base import N1QLBaseSettings


_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class QuerySettings(N1QLBaseSettings):
    """Default values applied to requests built through the factory.

    Every field maps to an ``N1QL_``-prefixed environment variable, for
    example ``N1QL_TIMEOUT_MS=7500`` or ``N1QL_SCAN_CONSISTENCY=request_plus``.
    """

    model_config = SettingsConfigDict(
        env_prefix="N1QL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    timeout_ms: int = Field(
        default=0,
        ge=0,
        description="Server-side timeout in milliseconds. 0 lets the query run for as long as it takes"
    )
    scan_wait_ms: Optional[int] = Field(
        default=None,
        ge=0,
        description="Maximum time in milliseconds to wait for an index to catch up to the scan vector"
    )
    scan_consistency: Optional[ScanConsistency] = Field(
        default=None,
        description="Index scan consistency: not_bounded or request_plus"
    )
    read_only: Optional[bool] = Field(
        default=None,
        description="Mark requests as read-only"
    )
    metrics: Optional[bool] = Field(
        default=None,
        description="Ask the service to return execution metrics with results"
    )
    signature: Optional[bool] = Field(
        default=None,
        description="Ask the service to include a result schema header"
    )
    pretty: bool = Field(
        default=False,
        description="Ask the service to pretty print results"
    )
    ad_hoc: bool = Field(
        default=True,
        description="Execute statements ad-hoc. False lets the transport substitute a prepared plan"
    )
    base_uri: Optional[str] = Field(
        default=None,
        description="Query service endpoint, e.g. http://localhost:8093/query"
    )
    log_level: str = Field(
        default="INFO",
        description="Log level used by setup_logging"
    )

    @classmethod
    def get_env_prefix(cls) -> str:
        return "N1QL_"

    @field_validator("scan_consistency")
    @classmethod
    def validate_scan_consistency(cls, v: Optional[ScanConsistency]) -> Optional[ScanConsistency]:
        """Only consistencies the service accepts may be configured."""
        if v in UNSUPPORTED_SCAN_CONSISTENCIES:
            raise ValueError(
                f"Scan consistency '{v.value}' is not supported. "
                f"Use 'not_bounded' or 'request_plus'"
            )
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(
                f"Unknown log level: {v}. Use one of {', '.join(sorted(_LOG_LEVELS))}"
            )
        return level
