"""Alerting decision engine: trigger, resolve and remind per alert.

Called once per completed check by the scheduler:

    handle_alerting(endpoint, result, alerting_config)

Per alert the state machine is {idle, triggered}:

    idle -> triggered       failures >= failure_threshold AND the trigger
                            notification was accepted by the provider
    triggered -> idle       successes >= success_threshold, whatever happens
                            to the resolution notification
    triggered -> triggered  still failing; reminder sent if pacing allows
    idle -> idle            nothing to do

A trigger that fails to send leaves the alert idle with its threshold still
met, so the next failing check attempts it again. Resolution never waits on
delivery: once the endpoint is healthy the alert stops firing.

Calls for the same endpoint must not overlap; state is mutated without locks.
"""

from __future__ import annotations

from datetime import UTC, datetime

from vigil.alerting.config import AlertingConfig
from vigil.alerting.counter import record_outcome
from vigil.alerting.dispatch import send_alert
from vigil.alerting.pacing import mark_notified, reminder_due
from vigil.alerting.types import Alert, Endpoint, Result
from vigil.observability import emit
from vigil.observability.events import AlertResolved, AlertTriggered
from vigil.observability.logging import get_logger

logger = get_logger(__name__)


def handle_alerting(
    endpoint: Endpoint | None,
    result: Result | None,
    alerting_config: AlertingConfig | None,
    *,
    now: datetime | None = None,
) -> None:
    """Process one check result for ``endpoint``. Never raises on delivery failure.

    Args:
        endpoint: The checked endpoint; its counters and alerts are updated in place.
        result: Outcome of the check.
        alerting_config: Provider lookup table. An empty config is valid and
            makes every dispatch fail as "not configured".
        now: Current time, for reminder pacing. Defaults to UTC now.
    """
    if endpoint is None or result is None or alerting_config is None:
        return

    record_outcome(endpoint, result.success)
    now = now or datetime.now(UTC)

    if result.success:
        _handle_alerts_to_resolve(endpoint, result, alerting_config, now)
    else:
        _handle_alerts_to_trigger(endpoint, result, alerting_config, now)


def _handle_alerts_to_trigger(
    endpoint: Endpoint, result: Result, alerting_config: AlertingConfig, now: datetime
) -> None:
    for alert in endpoint.alerts:
        if not alert.enabled:
            continue

        if alert.triggered:
            if reminder_due(alert, now):
                logger.debug(
                    "alert.reminder",
                    endpoint=endpoint.key,
                    alert_type=alert.type.value,
                    consecutive_failures=endpoint.consecutive_failures,
                )
                send_alert(alerting_config, endpoint, alert, result, resolved=False, reminder=True)
                # Advances on attempt, not only on success
                mark_notified(alert, now)
            continue

        if endpoint.consecutive_failures < alert.failure_threshold:
            continue

        error = send_alert(alerting_config, endpoint, alert, result, resolved=False)
        if error is not None:
            # Stays idle; threshold still met, so the next failing check retries
            continue

        alert.triggered = True
        mark_notified(alert, now)
        emit(AlertTriggered(
            endpoint=endpoint.key,
            alert_type=alert.type.value,
            description=alert.get_description(),
            consecutive_failures=endpoint.consecutive_failures,
            failure_threshold=alert.failure_threshold,
            timestamp=now.isoformat(),
        ))


def _handle_alerts_to_resolve(
    endpoint: Endpoint, result: Result, alerting_config: AlertingConfig, now: datetime
) -> None:
    for alert in endpoint.alerts:
        if not alert.enabled or not alert.triggered:
            continue
        if endpoint.consecutive_successes < alert.success_threshold:
            continue

        notified = False
        if alert.send_on_resolved:
            notified = send_alert(alerting_config, endpoint, alert, result, resolved=True) is None
        _resolve(endpoint, alert, notified, now)


def _resolve(endpoint: Endpoint, alert: Alert, notified: bool, now: datetime) -> None:
    # Unconditional on the resolution dispatch outcome
    alert.triggered = False
    emit(AlertResolved(
        endpoint=endpoint.key,
        alert_type=alert.type.value,
        description=alert.get_description(),
        consecutive_successes=endpoint.consecutive_successes,
        success_threshold=alert.success_threshold,
        notified=notified,
        timestamp=now.isoformat(),
    ))
