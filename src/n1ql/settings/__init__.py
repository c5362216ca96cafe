"""Settings module for the n1ql package.

Configuration is built on Pydantic Settings. Values come from, in order of
precedence:
    1. Environment variables (``N1QL_`` prefix, case-insensitive)
    2. A ``.env`` file in the working directory
    3. Default values in code

Quick Start:
    >>> from n1ql.settings import get_settings
    >>>
    >>> settings = get_settings()
    >>> settings.timeout_ms
    0
"""

from .main import _reload_settings, get_settings
from .base import N1QLBaseSettings
from .query import QuerySettings

__all__ = [
    "get_settings",
    "N1QLBaseSettings",
    "QuerySettings",
]
