"""Prepared query plan value object."""

from typing import Optional

from pydantic import ConfigDict, Field

from n1ql.types.base import N1QLBaseModel


class QueryPlan(N1QLBaseModel):
    """A precompiled, named representation of a statement.

    Plans are produced by a prepare step against the query service and are
    substituted for the raw statement text when a request is sent. The
    request builder only reads ``name`` and ``encoded_plan``; whether the
    plan is usable (a non-blank ``encoded_plan``) is checked when it is
    attached to a request, not here.

    Example:
        >>> plan = QueryPlan(name="a1b2c3", encoded_plan="H4sIAAAAAAAA/6RS...")
        >>> request = QueryRequest.create(plan)
    """
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = Field(
        default=None,
        description="Name the query service assigned to the prepared statement"
    )
    encoded_plan: str = Field(
        default="",
        description="Opaque encoded plan returned by the prepare step"
    )
