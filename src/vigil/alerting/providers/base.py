"""Notification capability: the AlertProvider protocol and its errors."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from vigil.alerting.types import Alert, Endpoint, Result


class AlertProviderError(Exception):
    """A provider could not deliver a notification."""


class ProviderNotConfiguredError(AlertProviderError):
    """No usable provider is configured for an alert's type."""

    def __init__(self, alert_type: str) -> None:
        super().__init__(f"alert provider not configured for type {alert_type!r}")
        self.alert_type = alert_type


class InvalidProviderSettingsError(AlertProviderError):
    """Provider settings could not be turned into a provider."""

    def __init__(self, alert_type: str, reason: str) -> None:
        super().__init__(f"invalid settings for alert provider {alert_type!r}: {reason}")
        self.alert_type = alert_type


@runtime_checkable
class AlertProvider(Protocol):
    """Delivers alert notifications to one backend.

    send() raises on failure; returning normally means the backend accepted
    the notification. Timeouts are the provider's responsibility. No retries
    happen here.

    is_valid() is a pass/fail check of the provider's own settings.
    """

    def send(
        self, endpoint: Endpoint, alert: Alert, result: Result, resolved: bool
    ) -> None: ...

    def is_valid(self) -> bool: ...

    @classmethod
    def from_settings(cls, settings: dict[str, Any]) -> AlertProvider: ...
