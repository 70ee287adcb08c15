"""Tests for notification providers and the provider registry."""

from __future__ import annotations

import logging

import httpx
import pytest

from vigil.alerting.providers import (
    AlertProvider,
    AlertProviderError,
    CustomAlertProvider,
    InvalidProviderSettingsError,
    LogAlertProvider,
    build_provider,
    register_provider,
    registered_types,
)
from vigil.alerting.providers import registry as registry_mod
from vigil.alerting.types import Alert, AlertType, Endpoint, Result


@pytest.fixture()
def endpoint() -> Endpoint:
    return Endpoint(name="api", group="core", url="https://api.example.com/health")


@pytest.fixture()
def alert() -> Alert:
    return Alert(type=AlertType.CUSTOM, description="api down")


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestCustomProvider:
    def test_from_settings(self):
        p = CustomAlertProvider.from_settings(
            {"url": "https://hooks.example.com/x", "method": "post", "headers": {"A": "b"}}
        )
        assert p.method == "POST"
        assert p.headers == {"A": "b"}
        assert p.is_valid()

    @pytest.mark.parametrize("url", ["", "ftp://example.com", "hooks.example.com"])
    def test_invalid_url(self, url):
        assert not CustomAlertProvider(url=url).is_valid()

    def test_placeholders_substituted(self, endpoint, alert):
        p = CustomAlertProvider(
            url="https://hooks.example.com/[ENDPOINT_NAME]",
            method="POST",
            body="[ENDPOINT_GROUP]/[ENDPOINT_NAME] [ALERT_TRIGGERED_OR_RESOLVED]: "
            "[ALERT_DESCRIPTION] ([RESULT_ERRORS]) [ENDPOINT_URL]",
            headers={"X-State": "[ALERT_TRIGGERED_OR_RESOLVED]"},
        )
        result = Result(success=False, errors=["timeout", "status 503"])
        request = p.build_request(endpoint, alert, result, resolved=False)

        assert str(request.url) == "https://hooks.example.com/api"
        assert request.method == "POST"
        assert request.headers["X-State"] == "TRIGGERED"
        assert request.content.decode() == (
            "core/api TRIGGERED: api down (timeout, status 503) https://api.example.com/health"
        )

    def test_resolved_text_override(self, endpoint, alert):
        p = CustomAlertProvider(
            url="https://hooks.example.com",
            body="[ALERT_TRIGGERED_OR_RESOLVED]",
            placeholders={"resolved": "ok again"},
        )
        request = p.build_request(endpoint, alert, Result(success=True), resolved=True)
        assert request.content.decode() == "ok again"

    def test_send_success(self, endpoint, alert):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200)

        p = CustomAlertProvider(url="https://hooks.example.com", client=_client(handler))
        p.send(endpoint, alert, Result(success=False), resolved=False)
        assert len(seen) == 1
        assert seen[0].method == "GET"

    def test_send_http_error_status(self, endpoint, alert):
        p = CustomAlertProvider(
            url="https://hooks.example.com",
            client=_client(lambda r: httpx.Response(500, text="boom")),
        )
        with pytest.raises(AlertProviderError, match="HTTP 500"):
            p.send(endpoint, alert, Result(success=False), resolved=False)

    def test_send_transport_error(self, endpoint, alert):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        p = CustomAlertProvider(url="https://hooks.example.com", client=_client(handler))
        with pytest.raises(AlertProviderError, match="request failed"):
            p.send(endpoint, alert, Result(success=False), resolved=False)

    def test_satisfies_protocol(self):
        assert isinstance(CustomAlertProvider(url="https://x.example.com"), AlertProvider)


class TestLogProvider:
    def test_logs_firing(self, endpoint, caplog):
        p = LogAlertProvider()
        with caplog.at_level(logging.WARNING, logger="vigil.alerts"):
            p.send(endpoint, Alert(type=AlertType.LOG), Result(success=False), resolved=False)
        record = next(r for r in caplog.records if r.getMessage() == "alert.firing")
        assert record.vigil_fields["endpoint"] == "core_api"
        assert record.vigil_fields["name"] == "core/api"

    def test_logs_resolved(self, endpoint, caplog):
        p = LogAlertProvider(level="info")
        with caplog.at_level(logging.INFO, logger="vigil.alerts"):
            p.send(endpoint, Alert(type=AlertType.LOG), Result(success=True), resolved=True)
        assert any(r.getMessage() == "alert.resolved" for r in caplog.records)

    def test_validity(self):
        assert LogAlertProvider.from_settings({"level": "ERROR"}).is_valid()
        assert not LogAlertProvider(level="loud").is_valid()


class TestRegistry:
    @pytest.fixture(autouse=True)
    def _restore_registry(self):
        saved = dict(registry_mod._PROVIDERS)
        yield
        registry_mod._PROVIDERS.clear()
        registry_mod._PROVIDERS.update(saved)

    def test_shipped_providers(self):
        assert registered_types() == [AlertType.CUSTOM, AlertType.LOG]

    def test_build_custom(self):
        p = build_provider("custom", {"url": "https://hooks.example.com"})
        assert isinstance(p, CustomAlertProvider)

    def test_unknown_type(self):
        with pytest.raises(ValueError, match="Unknown alert type"):
            build_provider("carrier-pigeon", {})

    def test_unregistered_type(self):
        with pytest.raises(ValueError, match="No provider registered"):
            build_provider(AlertType.SLACK, {})

    def test_register_provider(self, make_provider):
        register_provider("slack", make_provider)
        p = build_provider(AlertType.SLACK, {"fail": True})
        assert isinstance(p, make_provider)
        assert p.fail is True
        assert AlertType.SLACK in registered_types()

    def test_rejected_settings_wrapped(self, make_provider):
        with pytest.raises(InvalidProviderSettingsError, match="'custom'") as exc_info:
            build_provider("custom", {"url": "https://hooks.example.com", "timeout": "soon"})
        assert exc_info.value.alert_type == "custom"
        assert isinstance(exc_info.value.__cause__, ValueError)

        register_provider("slack", make_provider)
        with pytest.raises(InvalidProviderSettingsError):
            build_provider(AlertType.SLACK, {"webhook_url": "https://x.example.com"})
