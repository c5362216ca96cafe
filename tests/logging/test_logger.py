import json
import logging

from n1ql.logging.logger import CustomJsonFormatter, get_logger, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="n1ql.test",
        level=logging.WARNING,
        pathname=__file__,
        lineno=10,
        msg="encoded %s",
        args=("request",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_emits_json_with_extras():
    output = json.loads(CustomJsonFormatter().format(_record(error_code="DATA_001")))

    assert output["message"] == "encoded request"
    assert output["level"] == "WARNING"
    assert output["logger"] == "n1ql.test"
    assert output["error_code"] == "DATA_001"
    assert "timestamp" in output
    assert "trace_id" not in output


def test_formatter_includes_exception():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        import sys
        record = _record()
        record.exc_info = sys.exc_info()

    output = json.loads(CustomJsonFormatter().format(record))

    assert "RuntimeError: boom" in output["exception"]


def test_setup_logging_configures_package_logger():
    setup_logging("debug")
    try:
        logger = get_logger("n1ql")
        assert logger.level == logging.DEBUG
        handler = logger.handlers[0]
        assert isinstance(handler.formatter, CustomJsonFormatter)
    finally:
        logger = get_logger("n1ql")
        logger.handlers.clear()
        logger.propagate = True
        logger.setLevel(logging.NOTSET)


def test_setup_logging_defaults_to_configured_level(monkeypatch):
    from n1ql.settings import main as settings_main

    monkeypatch.setenv("N1QL_LOG_LEVEL", "warning")
    monkeypatch.setattr(settings_main, "_settings", None)

    setup_logging()
    try:
        assert get_logger("n1ql").level == logging.WARNING
    finally:
        logger = get_logger("n1ql")
        logger.handlers.clear()
        logger.propagate = True
        logger.setLevel(logging.NOTSET)
