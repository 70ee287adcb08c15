"""Notification providers: one uniform send() contract per backend."""

from vigil.alerting.providers.base import (
    AlertProvider,
    AlertProviderError,
    InvalidProviderSettingsError,
    ProviderNotConfiguredError,
)
from vigil.alerting.providers.custom import CustomAlertProvider
from vigil.alerting.providers.log import LogAlertProvider
from vigil.alerting.providers.registry import (
    build_provider,
    register_provider,
    registered_types,
)

__all__ = [
    "AlertProvider",
    "AlertProviderError",
    "InvalidProviderSettingsError",
    "ProviderNotConfiguredError",
    "CustomAlertProvider",
    "LogAlertProvider",
    "build_provider",
    "register_provider",
    "registered_types",
]
