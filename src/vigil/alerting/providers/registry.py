"""Provider registry: alert type -> provider class.

Only the log and custom webhook providers ship with vigil. Other backends
in the AlertType enum are plugged in with register_provider() before the
alerting configuration is loaded.
"""

from __future__ import annotations

from typing import Any

from vigil.alerting.providers.base import AlertProvider, InvalidProviderSettingsError
from vigil.alerting.providers.custom import CustomAlertProvider
from vigil.alerting.providers.log import LogAlertProvider
from vigil.alerting.types import AlertType

_PROVIDERS: dict[AlertType, type] = {
    AlertType.CUSTOM: CustomAlertProvider,
    AlertType.LOG: LogAlertProvider,
}


def register_provider(alert_type: AlertType | str, cls: type) -> None:
    """Register a provider class for an alert type. Replaces any existing one."""
    _PROVIDERS[AlertType(alert_type)] = cls


def registered_types() -> list[AlertType]:
    return sorted(_PROVIDERS, key=lambda t: t.value)


def build_provider(alert_type: AlertType | str, settings: dict[str, Any]) -> AlertProvider:
    """Instantiate the registered provider for ``alert_type`` from its settings.

    Raises:
        ValueError: ``alert_type`` is not an AlertType, or no provider class
            is registered for it.
        InvalidProviderSettingsError: the provider class rejected ``settings``.
    """
    try:
        key = AlertType(alert_type)
    except ValueError:
        raise ValueError(
            f"Unknown alert type: {alert_type!r}. "
            f"Available: {[t.value for t in AlertType]}."
        ) from None

    cls = _PROVIDERS.get(key)
    if cls is None:
        raise ValueError(
            f"No provider registered for alert type {key.value!r}. "
            f"Registered: {[t.value for t in registered_types()]}. "
            f"Register one with register_provider()."
        )
    try:
        return cls.from_settings(settings or {})
    except (TypeError, ValueError) as e:
        raise InvalidProviderSettingsError(key.value, str(e)) from e
