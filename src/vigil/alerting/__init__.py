"""vigil alerting: per-endpoint trigger/resolve/remind decisions."""

from vigil.alerting.types import (
    Alert,
    AlertType,
    ConditionResult,
    Endpoint,
    Result,
)
from vigil.alerting.counter import record_outcome
from vigil.alerting.pacing import reminder_due
from vigil.alerting.providers import (
    AlertProvider,
    AlertProviderError,
    CustomAlertProvider,
    InvalidProviderSettingsError,
    LogAlertProvider,
    ProviderNotConfiguredError,
    register_provider,
)
from vigil.alerting.config import AlertingConfig
from vigil.alerting.dispatch import send_alert
from vigil.alerting.engine import handle_alerting
from vigil.alerting.status import AlertStatus, EndpointStatus, snapshot

__all__ = [
    # Data model
    "Alert",
    "AlertType",
    "ConditionResult",
    "Endpoint",
    "Result",
    # Engine
    "handle_alerting",
    "record_outcome",
    "reminder_due",
    "send_alert",
    # Providers
    "AlertingConfig",
    "AlertProvider",
    "AlertProviderError",
    "InvalidProviderSettingsError",
    "ProviderNotConfiguredError",
    "CustomAlertProvider",
    "LogAlertProvider",
    "register_provider",
    # Status
    "AlertStatus",
    "EndpointStatus",
    "snapshot",
]
