"""Query Request Factory.

This module provides a factory for creating query requests with the
defaults configured in the environment (see ``n1ql.settings``) already
applied. ``QueryRequest.create`` never reads settings; use the factory when
environment defaults should apply.
"""

from datetime import timedelta
from typing import Optional

from n1ql.logging import get_logger
from n1ql.query_request.request import QueryRequest
from n1ql.settings import QuerySettings
from n1ql.types import QueryPlan

logger = get_logger(__name__)


class QueryRequestFactory:
    """Factory for creating query requests auto-configured from settings.

    Example:
        >>> # N1QL_TIMEOUT_MS=7500 N1QL_SCAN_CONSISTENCY=request_plus
        >>> request = QueryRequestFactory.create(statement="SELECT 1")
        >>> request.get_form_values()
        {'statement': 'SELECT 1', 'timeout': '7500ms', 'scan_consistency': 'request_plus'}
    """

    @staticmethod
    def apply_settings(request: QueryRequest, settings: QuerySettings) -> QueryRequest:
        """Apply configured defaults to an existing request.

        Only settings that differ from a bare request's defaults are applied,
        so unset options stay absent from the materialized parameters.

        Args:
            request: Request to configure.
            settings: Source of the default values.

        Returns:
            The same request, for chaining.
        """
        if not settings.ad_hoc:
            request.ad_hoc(False)
        if settings.pretty:
            request.pretty(True)
        if settings.timeout_ms:
            request.timeout(timedelta(milliseconds=settings.timeout_ms))
        if settings.scan_wait_ms is not None:
            request.scan_wait(timedelta(milliseconds=settings.scan_wait_ms))
        if settings.scan_consistency is not None:
            request.scan_consistency(settings.scan_consistency)
        if settings.read_only is not None:
            request.read_only(settings.read_only)
        if settings.metrics is not None:
            request.metrics(settings.metrics)
        if settings.signature is not None:
            request.signature(settings.signature)
        if settings.base_uri:
            request.base_uri(settings.base_uri)

        return request

    @staticmethod
    def create(
        statement: Optional[str] = None,
        plan: Optional[QueryPlan] = None,
        settings: Optional[QuerySettings] = None,
    ) -> QueryRequest:
        """Create a request with configured defaults applied.

        Args:
            statement: Statement to execute.
            plan: Prepared plan to execute instead of a statement.
            settings: Settings to apply. Defaults to ``get_settings()``.

        Returns:
            Configured QueryRequest instance.

        Raises:
            ValueError: If both a statement and a plan are given.
            N1QLError: INVALID_ARGUMENT if the statement or plan is rejected.
        """
        if statement is not None and plan is not None:
            raise ValueError("Provide either a statement or a prepared plan, not both")

        if settings is None:
            from n1ql.settings import get_settings
            settings = get_settings()

        request = QueryRequestFactory.apply_settings(QueryRequest.create(), settings)
        if plan is not None:
            request.prepared(plan)
        elif statement is not None:
            request.statement(statement)

        logger.debug(
            "Created query request from settings",
            extra={"prepared": request.is_prepared, "ad_hoc": request.is_ad_hoc},
        )
        return request


def get_query_request(
    statement: Optional[str] = None,
    plan: Optional[QueryPlan] = None,
) -> QueryRequest:
    """Get a query request configured from the environment.

    Example:
        >>> request = get_query_request("SELECT name FROM `travel-sample` LIMIT 1")
    """
    return QueryRequestFactory.create(statement=statement, plan=plan)
