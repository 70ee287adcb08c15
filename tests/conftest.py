"""Shared fixtures: a controllable fake provider and reset observability state."""

from __future__ import annotations

from typing import Any

import pytest

from vigil.alerting.config import AlertingConfig
from vigil.alerting.providers.base import AlertProviderError
from vigil.alerting.types import Alert, AlertType, Endpoint


class FakeProvider:
    """Records every send(); fails on demand.

    fail: every send raises.
    fail_on_resolved: only resolution sends raise.
    """

    def __init__(self, fail: bool = False, fail_on_resolved: bool = False, valid: bool = True):
        self.fail = fail
        self.fail_on_resolved = fail_on_resolved
        self.valid = valid
        self.calls: list[dict[str, Any]] = []

    @classmethod
    def from_settings(cls, settings: dict[str, Any]) -> FakeProvider:
        return cls(**settings)

    def is_valid(self) -> bool:
        return self.valid

    def send(self, endpoint, alert, result, resolved) -> None:
        self.calls.append(
            {
                "endpoint": endpoint.key,
                "alert_type": alert.type,
                "success": result.success,
                "resolved": resolved,
            }
        )
        if self.fail or (resolved and self.fail_on_resolved):
            raise AlertProviderError("mock provider error")

    @property
    def resolved_calls(self) -> list[dict[str, Any]]:
        return [c for c in self.calls if c["resolved"]]

    @property
    def triggered_calls(self) -> list[dict[str, Any]]:
        return [c for c in self.calls if not c["resolved"]]


@pytest.fixture(autouse=True)
def _reset_observability():
    """Reset emitter state before and after each test."""
    from vigil.observability.emitter import reset

    reset()
    yield
    reset()


@pytest.fixture()
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture()
def alerting_config(provider) -> AlertingConfig:
    return AlertingConfig({AlertType.CUSTOM: provider})


def _make_endpoint(**alert_kwargs: Any) -> Endpoint:
    """Endpoint with one custom alert; kwargs override the alert's fields."""
    alert_kwargs.setdefault("type", AlertType.CUSTOM)
    alert_kwargs.setdefault("send_on_resolved", True)
    return Endpoint(
        name="health",
        group="core",
        url="https://example.com",
        alerts=[Alert(**alert_kwargs)],
    )


@pytest.fixture()
def make_endpoint():
    return _make_endpoint


@pytest.fixture()
def make_provider():
    return FakeProvider
