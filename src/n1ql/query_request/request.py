"""Query request builder for the query service HTTP API.

A ``QueryRequest`` accumulates the description of a single query through
fluent configuration calls and renders it into the parameter set the query
service expects. It never executes anything: the finished payload is handed
to an HTTP transport owned by the caller.

Example:
    >>> from datetime import timedelta
    >>> from n1ql import QueryRequest, ScanConsistency
    >>>
    >>> request = (
    ...     QueryRequest.create("SELECT * FROM `travel-sample` WHERE type = $type")
    ...     .add_named_parameter("type", "airline")
    ...     .timeout(timedelta(seconds=5))
    ...     .scan_consistency(ScanConsistency.REQUEST_PLUS)
    ... )
    >>> request.get_form_values()
    {'statement': 'SELECT * FROM `travel-sample` WHERE type = $type',
     'timeout': '5000ms', '$type': 'airline', 'scan_consistency': 'request_plus'}

Thread safety:
    A request is a plain mutable object. Configure it from one thread, then
    materialize it; ``get_form_values`` does not mutate state and may be
    called repeatedly.
"""

from __future__ import annotations

import json
import warnings
from datetime import timedelta
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union
from urllib.parse import quote_plus

from opentelemetry.trace import Status, StatusCode
from pydantic_core import to_jsonable_python

from n1ql.common.exceptions import (
    N1QLError,
    duplicate_key_error,
    invalid_argument_error,
    invalid_state_error,
    serialization_error,
    unsupported_error,
)
from n1ql.constants import (
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
from n1ql.logging import get_logger, reset_request_context, set_request_context
from n1ql.telemetry import get_tracer
from n1ql.types import QueryPlan

logger = get_logger(__name__)


def _to_milliseconds(duration: timedelta) -> int:
    # int() truncates toward zero
    return int(duration / timedelta(milliseconds=1))


def _parameter_key(name: str) -> str:
    return name if name.startswith(PARAMETER_SIGIL) else PARAMETER_SIGIL + name


def _form_value_string(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple, dict)):
        return json.dumps(value, default=to_jsonable_python)
    return str(value)


class QueryRequest:
    """Builds a query service request.

    Exactly one of a statement or a prepared plan is active at a time;
    setting either clears the other. All setters validate eagerly and return
    the same instance for chaining.
    """

    def __init__(self) -> None:
        self._statement: Optional[str] = None
        self._prepared_payload: Optional[QueryPlan] = None
        self._ad_hoc = True
        self._timeout: timedelta = timedelta(0)
        self._read_only: Optional[bool] = None
        self._include_metrics: Optional[bool] = None
        self._parameters: Dict[str, Any] = {}
        self._arguments: List[Any] = []
        self._format: Optional[Format] = None
        self._encoding: Optional[Encoding] = None
        self._compression: Optional[Compression] = None
        self._include_signature: Optional[bool] = None
        self._scan_consistency: Optional[ScanConsistency] = None
        self._scan_vector: Any = None
        self._scan_wait: Optional[timedelta] = None
        self._pretty = False
        self._credentials: Dict[str, str] = {}
        self._client_context_id: Optional[str] = None
        self._base_uri: Any = None

    @classmethod
    def create(cls, query: Union[str, QueryPlan, None] = None) -> "QueryRequest":
        """Create a new request, optionally with a statement or a prepared plan.

        Args:
            query: A statement string, a ``QueryPlan`` or None for an empty
                request.

        Returns:
            A fresh ``QueryRequest``.

        Raises:
            N1QLError: INVALID_ARGUMENT if the statement is blank or the plan
                has no encoded plan.
        """
        request = cls()
        if isinstance(query, QueryPlan):
            request.prepared(query)
        elif query is not None:
            request.statement(query)
        return request

    @property
    def is_prepared(self) -> bool:
        """True when a prepared plan is set instead of a statement."""
        return self._prepared_payload is not None

    @property
    def is_ad_hoc(self) -> bool:
        return self._ad_hoc

    def get_statement(self) -> Optional[str]:
        return self._statement

    def get_prepared_payload(self) -> Optional[QueryPlan]:
        return self._prepared_payload

    def get_base_uri(self) -> Any:
        return self._base_uri

    def statement(self, statement: str) -> "QueryRequest":
        """Set the statement to execute, replacing any prepared plan.

        Raises:
            N1QLError: INVALID_ARGUMENT if the statement is empty or blank.
        """
        if not statement or not statement.strip():
            raise invalid_argument_error(
                "Statement cannot be null, empty or whitespace.",
                argument="statement",
            )
        if self._prepared_payload is not None:
            logger.debug("Statement replaces prepared plan %s", self._prepared_payload.name)
        self._statement = statement
        self._prepared_payload = None
        return self

    def prepared(self, plan: Optional[QueryPlan]) -> "QueryRequest":
        """Execute a prepared plan instead of a statement.

        Raises:
            N1QLError: INVALID_ARGUMENT if the plan is missing or its encoded
                plan is empty or blank.
        """
        if plan is None or not plan.encoded_plan or not plan.encoded_plan.strip():
            raise invalid_argument_error(
                "A prepared plan with a non-empty encoded plan is required.",
                argument="plan",
            )
        if self._statement is not None:
            logger.debug("Prepared plan %s replaces statement", plan.name)
        self._statement = None
        self._prepared_payload = plan
        return self

    def ad_hoc(self, ad_hoc: bool) -> "QueryRequest":
        """Opt out of ad-hoc execution.

        When False the transport may prepare the statement and execute the
        resulting plan instead. The flag is advisory and is not sent.
        """
        self._ad_hoc = ad_hoc
        return self

    def timeout(self, timeout: timedelta) -> "QueryRequest":
        """Maximum time the service may spend on the request. Zero means no limit."""
        self._timeout = timeout
        return self

    def read_only(self, read_only: bool) -> "QueryRequest":
        self._read_only = read_only
        return self

    def metrics(self, include_metrics: bool) -> "QueryRequest":
        self._include_metrics = include_metrics
        return self

    def add_named_parameter(self, name: str, value: Any) -> "QueryRequest":
        """Add a named parameter. Names may be given with or without the ``$`` sigil.

        Raises:
            N1QLError: DUPLICATE_KEY if the name was already added.
        """
        key = _parameter_key(name)
        if key in self._parameters:
            raise duplicate_key_error(key, collection="named parameters")
        self._parameters[key] = value
        return self

    def add_named_parameters(
        self,
        parameters: Union[Mapping[str, Any], Iterable[Tuple[str, Any]]],
    ) -> "QueryRequest":
        """Add several named parameters in order.

        Either all parameters are added or, on a duplicate, none are.

        Raises:
            N1QLError: DUPLICATE_KEY if any name was already added or repeats
                within ``parameters``.
        """
        items = parameters.items() if isinstance(parameters, Mapping) else parameters
        staged: Dict[str, Any] = {}
        for name, value in items:
            key = _parameter_key(name)
            if key in self._parameters or key in staged:
                raise duplicate_key_error(key, collection="named parameters")
            staged[key] = value
        self._parameters.update(staged)
        return self

    def add_positional_parameter(self, value: Any) -> "QueryRequest":
        self._arguments.append(value)
        return self

    def add_positional_parameters(self, *values: Any) -> "QueryRequest":
        self._arguments.extend(values)
        return self

    def format(self, format: Format) -> "QueryRequest":
        self._format = format
        return self

    def encoding(self, encoding: Encoding) -> "QueryRequest":
        self._encoding = encoding
        return self

    def compression(self, compression: Compression) -> "QueryRequest":
        self._compression = compression
        return self

    def signature(self, include_signature: bool) -> "QueryRequest":
        self._include_signature = include_signature
        return self

    def scan_consistency(self, scan_consistency: ScanConsistency) -> "QueryRequest":
        """Set the index scan consistency.

        Raises:
            N1QLError: UNSUPPORTED for AT_PLUS and STATEMENT_PLUS.
        """
        if scan_consistency in UNSUPPORTED_SCAN_CONSISTENCIES:
            raise unsupported_error(
                "AtPlus and StatementPlus are not currently supported by the query service.",
                value=scan_consistency.value,
            )
        self._scan_consistency = scan_consistency
        return self

    def scan_vector(self, scan_vector: Any) -> "QueryRequest":
        """Set the scan vector. The value is sent as-is."""
        self._scan_vector = scan_vector
        return self

    def scan_wait(self, scan_wait: timedelta) -> "QueryRequest":
        self._scan_wait = scan_wait
        return self

    def pretty(self, pretty: bool) -> "QueryRequest":
        self._pretty = pretty
        return self

    def add_credentials(self, username: str, password: str, is_admin: bool) -> "QueryRequest":
        """Add a user/password pair, namespaced as ``admin:`` or ``local:``.

        Raises:
            N1QLError: INVALID_ARGUMENT for a blank username, DUPLICATE_KEY if
                the namespaced username was already added.
        """
        if not username or not username.strip():
            raise invalid_argument_error(
                "Username cannot be null, empty or whitespace.",
                argument="username",
            )
        if is_admin:
            if not username.startswith(ADMIN_NAMESPACE):
                username = ADMIN_NAMESPACE + username
        elif not username.startswith(LOCAL_NAMESPACE):
            username = LOCAL_NAMESPACE + username

        if username in self._credentials:
            raise duplicate_key_error(username, collection="credentials")
        self._credentials[username] = password
        return self

    def client_context_id(self, client_context_id: str) -> "QueryRequest":
        self._client_context_id = client_context_id
        return self

    def base_uri(self, base_uri: Any) -> "QueryRequest":
        """Set the query service endpoint. Stored for the transport, not sent."""
        self._base_uri = base_uri
        return self

    def get_form_values(self) -> Dict[str, Any]:
        """Materialize the request into the parameters sent to the service.

        Values are typed (booleans, lists, objects) since the payload is
        posted as JSON. Keys appear in a fixed order, named parameters in
        the order they were added.

        Returns:
            Ordered mapping of wire parameter name to value.

        Raises:
            N1QLError: INVALID_STATE if neither a statement nor a prepared
                plan has been set.
        """
        if not self._statement and self._prepared_payload is None:
            raise invalid_state_error("A statement or prepared plan must be provided.")

        form_values: Dict[str, Any] = {}

        if self._prepared_payload is not None:
            form_values[QueryParameter.PREPARED.value] = self._prepared_payload.name
            form_values[QueryParameter.ENCODED_PLAN.value] = self._prepared_payload.encoded_plan
        else:
            form_values[QueryParameter.STATEMENT.value] = self._statement

        if self._timeout is not None and self._timeout > timedelta(0):
            form_values[QueryParameter.TIMEOUT.value] = f"{_to_milliseconds(self._timeout)}ms"
        if self._read_only is not None:
            form_values[QueryParameter.READONLY.value] = self._read_only
        if self._include_metrics is not None:
            form_values[QueryParameter.METRICS.value] = self._include_metrics

        form_values.update(self._parameters)

        if self._arguments:
            form_values[QueryParameter.ARGS.value] = list(self._arguments)
        if self._format is not None:
            form_values[QueryParameter.FORMAT.value] = self._format.name
        if self._encoding is not None:
            form_values[QueryParameter.ENCODING.value] = self._encoding.name
        if self._compression is not None:
            form_values[QueryParameter.COMPRESSION.value] = self._compression.name
        if self._include_signature is not None:
            form_values[QueryParameter.SIGNATURE.value] = self._include_signature
        if self._scan_consistency is not None:
            form_values[QueryParameter.SCAN_CONSISTENCY.value] = (
                SCAN_CONSISTENCY_WIRE_VALUES[self._scan_consistency]
            )
        if self._scan_vector is not None:
            form_values[QueryParameter.SCAN_VECTOR.value] = self._scan_vector
        if self._scan_wait is not None:
            form_values[QueryParameter.SCAN_WAIT.value] = str(_to_milliseconds(self._scan_wait))
        if self._pretty:
            form_values[QueryParameter.PRETTY.value] = self._pretty
        if self._credentials:
            form_values[QueryParameter.CREDS.value] = [
                {"user": user, "pass": password}
                for user, password in self._credentials.items()
            ]
        if self._client_context_id:
            form_values[QueryParameter.CLIENT_CONTEXT_ID.value] = self._client_context_id

        logger.debug(
            "Materialized query request",
            extra={"prepared": self.is_prepared, "parameter_count": len(form_values)},
        )
        return form_values

    def get_form_values_as_json(self) -> str:
        """Render the request as the JSON body posted to the service.

        Raises:
            N1QLError: INVALID_STATE as for ``get_form_values``,
                SERIALIZATION_ERROR if a parameter value cannot be rendered.
        """
        tracer = get_tracer(__name__)
        with tracer.start_as_current_span("n1ql.query_request.encode") as span:
            span.set_attribute("n1ql.prepared", self.is_prepared)
            span.set_attribute("n1ql.named_parameter_count", len(self._parameters))
            span.set_attribute("n1ql.positional_parameter_count", len(self._arguments))
            if self._client_context_id:
                span.set_attribute("n1ql.client_context_id", self._client_context_id)

            token = set_request_context(client_context_id=self._client_context_id or None)
            try:
                form_values = self.get_form_values()
                try:
                    return json.dumps(form_values, default=to_jsonable_python)
                except (TypeError, ValueError) as exc:
                    raise serialization_error(exc) from exc
            except N1QLError as exc:
                span.record_exception(exc)
                span.set_status(Status(StatusCode.ERROR))
                raise
            finally:
                reset_request_context(token)

    def get_query_parameters_as_form_urlencoded(self) -> str:
        """Render the request as an ``application/x-www-form-urlencoded`` string.

        Deprecated: the service accepts a JSON body, use
        ``get_form_values_as_json`` instead.
        """
        warnings.warn(
            "get_query_parameters_as_form_urlencoded is deprecated, "
            "use get_form_values_as_json instead",
            DeprecationWarning,
            stacklevel=2,
        )
        return "&".join(
            f"{quote_plus(key)}={quote_plus(_form_value_string(value))}"
            for key, value in self.get_form_values().items()
        )

    def __str__(self) -> str:
        # Diagnostic only: never raises
        try:
            base_uri = self._base_uri if self._base_uri is not None else ""
            return f"{base_uri}[{self.get_form_values_as_json()}]"
        except Exception:
            return ""
