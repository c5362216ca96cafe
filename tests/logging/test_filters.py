import logging

from n1ql.__version__ import __version__
from n1ql.logging.filters import (
    ContextFilter,
    clear_request_context,
    client_context_id_var,
    reset_request_context,
    set_request_context,
)


def _record() -> logging.LogRecord:
    return logging.LogRecord(
        name="test.logger",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="sample",
        args=(),
        exc_info=None,
    )


def test_context_filter_adds_sdk_fields():
    record = _record()
    assert ContextFilter().filter(record)
    assert record.sdk_name == "n1ql"
    assert record.sdk_version == __version__


def test_context_filter_uses_request_context():
    set_request_context(client_context_id="ctx-1")
    try:
        record = _record()
        assert ContextFilter().filter(record)
        assert record.client_context_id == "ctx-1"
    finally:
        clear_request_context()


def test_context_filter_no_context_is_graceful():
    clear_request_context()
    record = _record()
    assert ContextFilter().filter(record)
    assert record.client_context_id is None


def test_reset_restores_outer_context():
    outer = set_request_context(client_context_id="outer")
    try:
        inner = set_request_context(client_context_id="inner")
        reset_request_context(inner)
        assert client_context_id_var.get() == "outer"
    finally:
        reset_request_context(outer)
    assert client_context_id_var.get() is None


def test_set_without_id_returns_no_token():
    assert set_request_context(client_context_id=None) is None
    reset_request_context(None)
