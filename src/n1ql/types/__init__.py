"""Value types shared across the n1ql package."""

from n1ql.types.base import N1QLBaseModel
from n1ql.types.plan import QueryPlan

__all__ = [
    "N1QLBaseModel",
    "QueryPlan",
]
