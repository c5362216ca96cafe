"""Tests for environment-driven settings and the query request factory."""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from n1ql.constants import ScanConsistency
from n1ql.query_request import QueryRequest, QueryRequestFactory, get_query_request
from n1ql.settings import QuerySettings, _reload_settings, get_settings
from n1ql.settings import main as settings_main
from n1ql.types import QueryPlan


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in (
        "N1QL_TIMEOUT_MS", "N1QL_SCAN_WAIT_MS", "N1QL_SCAN_CONSISTENCY",
        "N1QL_READ_ONLY", "N1QL_METRICS", "N1QL_SIGNATURE", "N1QL_PRETTY",
        "N1QL_AD_HOC", "N1QL_BASE_URI", "N1QL_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(settings_main, "_settings", None)


class TestQuerySettings:
    """Test QuerySettings loading and validation."""

    def test_defaults(self):
        settings = QuerySettings(_env_file=None)

        assert settings.timeout_ms == 0
        assert settings.scan_wait_ms is None
        assert settings.scan_consistency is None
        assert settings.pretty is False
        assert settings.ad_hoc is True
        assert settings.log_level == "INFO"
        assert QuerySettings.get_env_prefix() == "N1QL_"

    def test_environment_variables_are_read(self, monkeypatch):
        monkeypatch.setenv("N1QL_TIMEOUT_MS", "7500")
        monkeypatch.setenv("N1QL_SCAN_CONSISTENCY", "request_plus")
        monkeypatch.setenv("N1QL_PRETTY", "true")
        monkeypatch.setenv("N1QL_LOG_LEVEL", "debug")

        settings = QuerySettings(_env_file=None)

        assert settings.timeout_ms == 7500
        assert settings.scan_consistency == ScanConsistency.REQUEST_PLUS
        assert settings.pretty is True
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize("value", ["at_plus", "statement_plus"])
    def test_unsupported_scan_consistency_is_rejected(self, value):
        with pytest.raises(ValidationError, match="not supported"):
            QuerySettings(_env_file=None, scan_consistency=value)

    def test_negative_timeout_is_rejected(self):
        with pytest.raises(ValidationError):
            QuerySettings(_env_file=None, timeout_ms=-1)

    def test_unknown_log_level_is_rejected(self):
        with pytest.raises(ValidationError, match="Unknown log level"):
            QuerySettings(_env_file=None, log_level="LOUD")

    def test_get_settings_is_a_singleton(self):
        settings = get_settings()

        assert get_settings() is settings
        assert get_settings(force_reload=True) is not settings


class TestQueryRequestFactory:
    """Test QueryRequestFactory applying settings defaults."""

    def test_default_settings_add_nothing(self):
        request = QueryRequestFactory.create(
            statement="SELECT 1", settings=QuerySettings(_env_file=None)
        )

        assert request.get_form_values() == {"statement": "SELECT 1"}
        assert request.is_ad_hoc is True

    def test_settings_are_applied(self):
        settings = QuerySettings(
            _env_file=None,
            timeout_ms=7500,
            scan_wait_ms=20,
            scan_consistency="request_plus",
            read_only=True,
            metrics=True,
            signature=False,
            pretty=True,
            ad_hoc=False,
            base_uri="http://localhost:8093/query",
        )

        request = QueryRequestFactory.create(statement="SELECT 1", settings=settings)

        assert request.get_form_values() == {
            "statement": "SELECT 1",
            "timeout": "7500ms",
            "readonly": True,
            "metrics": True,
            "signature": False,
            "scan_consistency": "request_plus",
            "scan_wait": "20",
            "pretty": True,
        }
        assert request.is_ad_hoc is False
        assert request.get_base_uri() == "http://localhost:8093/query"

    def test_plan_is_used(self):
        plan = QueryPlan(name="p1", encoded_plan="abc")

        request = QueryRequestFactory.create(plan=plan, settings=QuerySettings(_env_file=None))

        assert request.is_prepared
        assert request.get_prepared_payload() is plan

    def test_statement_and_plan_together_are_rejected(self):
        with pytest.raises(ValueError, match="not both"):
            QueryRequestFactory.create(
                statement="SELECT 1",
                plan=QueryPlan(name="p1", encoded_plan="abc"),
                settings=QuerySettings(_env_file=None),
            )

    def test_apply_settings_keeps_request_values(self):
        request = QueryRequest.create("SELECT 1").timeout(timedelta(seconds=1))

        QueryRequestFactory.apply_settings(request, QuerySettings(_env_file=None))

        assert request.get_form_values()["timeout"] == "1000ms"

    def test_default_settings_keep_pretty_and_ad_hoc(self):
        request = QueryRequest.create("SELECT 1").pretty(True).ad_hoc(False)

        QueryRequestFactory.apply_settings(request, QuerySettings(_env_file=None))

        assert request.get_form_values() == {"statement": "SELECT 1", "pretty": True}
        assert request.is_ad_hoc is False

    def test_get_query_request_reads_environment(self, monkeypatch):
        monkeypatch.setenv("N1QL_TIMEOUT_MS", "250")
        _reload_settings()

        request = get_query_request("SELECT 1")

        assert request.get_form_values() == {"statement": "SELECT 1", "timeout": "250ms"}
