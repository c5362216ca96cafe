"""Query request construction.

Builders only produce the request payload; sending it to the query service
is the job of the caller's HTTP transport.

Available:
    - QueryRequest: fluent builder, materializer and serializer
    - QueryRequestFactory / get_query_request: builders with settings
      defaults applied
"""

from n1ql.query_request.request import QueryRequest
from n1ql.query_request.factory import QueryRequestFactory, get_query_request

__all__ = [
    "QueryRequest",
    "QueryRequestFactory",
    "get_query_request",
]
