"""Dispatch: resolve the provider for an alert and normalize failures.

send_alert() never raises. It returns None when the provider accepted the
notification and the exception otherwise, including a synthesized
ProviderNotConfiguredError when no provider exists for the alert's type.
"""

from __future__ import annotations

import time

from vigil.alerting.config import AlertingConfig
from vigil.alerting.providers.base import ProviderNotConfiguredError
from vigil.alerting.types import Alert, Endpoint, Result
from vigil.observability import emit
from vigil.observability.events import AlertDeliveryFailed, AlertDispatched
from vigil.observability.logging import alert_context, get_logger

logger = get_logger(__name__)


def send_alert(
    alerting_config: AlertingConfig,
    endpoint: Endpoint,
    alert: Alert,
    result: Result,
    resolved: bool,
    reminder: bool = False,
) -> Exception | None:
    """Attempt one notification. Returns the failure, or None on success."""
    error: Exception | None
    start = time.perf_counter()

    provider = alerting_config.get_provider(alert.type)
    if provider is None:
        error = ProviderNotConfiguredError(alert.type.value)
    else:
        try:
            # Provider log lines carry the notification they belong to
            with alert_context(
                endpoint=endpoint.key, alert_type=alert.type.value, resolved=resolved
            ):
                provider.send(endpoint, alert, result, resolved)
            error = None
        except Exception as e:
            logger.debug(
                "alert.provider.raised",
                endpoint=endpoint.key,
                alert_type=alert.type.value,
                exc_info=True,
            )
            error = e

    if error is None:
        emit(AlertDispatched(
            endpoint=endpoint.key,
            alert_type=alert.type.value,
            resolved=resolved,
            reminder=reminder,
            latency_ms=(time.perf_counter() - start) * 1000,
        ))
    else:
        emit(AlertDeliveryFailed(
            endpoint=endpoint.key,
            alert_type=alert.type.value,
            resolved=resolved,
            reminder=reminder,
            error=str(error),
            error_type=type(error).__name__,
        ))
    return error
