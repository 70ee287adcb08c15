"""Prometheus subscriber: alert transition and delivery counters from events.

Requires vigil[metrics] (prometheus-client).
Starts an HTTP server on the configured port for /metrics scraping.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prometheus_client import CollectorRegistry

    from vigil.observability.config import ObservabilityConfig


def register_prometheus_subscriber(
    config: ObservabilityConfig,
    registry: CollectorRegistry | None = None,
) -> None:
    """Register Prometheus metric subscribers and start /metrics server.

    Passing a registry skips the HTTP server and keeps instruments off the
    process-global default registry.
    """
    from prometheus_client import REGISTRY, Counter, Histogram, start_http_server

    from vigil.observability.events import (
        AlertDeliveryFailed,
        AlertDispatched,
        AlertResolved,
        AlertTriggered,
        VigilEventLinker,
    )

    if registry is None:
        registry = REGISTRY
        start_http_server(config.prometheus_port)

    triggered_total = Counter(
        "vigil_alerts_triggered_total",
        "Alerts that transitioned to triggered",
        ["alert_type"],
        registry=registry,
    )
    resolved_total = Counter(
        "vigil_alerts_resolved_total",
        "Alerts that transitioned back to idle",
        ["alert_type", "notified"],
        registry=registry,
    )
    dispatched_total = Counter(
        "vigil_alert_dispatches_total",
        "Accepted notification dispatches",
        ["alert_type", "kind"],
        registry=registry,
    )
    failed_total = Counter(
        "vigil_alert_delivery_failures_total",
        "Rejected notification dispatches",
        ["alert_type", "kind", "error_type"],
        registry=registry,
    )
    dispatch_latency = Histogram(
        "vigil_alert_dispatch_duration_seconds",
        "Notification provider latency",
        buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
        registry=registry,
    )

    def _kind(resolved: bool, reminder: bool) -> str:
        if resolved:
            return "resolved"
        return "reminder" if reminder else "triggered"

    @VigilEventLinker.on(AlertTriggered)
    def _prom_triggered(event: AlertTriggered) -> None:
        triggered_total.labels(alert_type=event.alert_type).inc()

    @VigilEventLinker.on(AlertResolved)
    def _prom_resolved(event: AlertResolved) -> None:
        resolved_total.labels(
            alert_type=event.alert_type, notified=str(event.notified).lower()
        ).inc()

    @VigilEventLinker.on(AlertDispatched)
    def _prom_dispatched(event: AlertDispatched) -> None:
        dispatched_total.labels(
            alert_type=event.alert_type, kind=_kind(event.resolved, event.reminder)
        ).inc()
        dispatch_latency.observe(event.latency_ms / 1000)

    @VigilEventLinker.on(AlertDeliveryFailed)
    def _prom_failed(event: AlertDeliveryFailed) -> None:
        failed_total.labels(
            alert_type=event.alert_type,
            kind=_kind(event.resolved, event.reminder),
            error_type=event.error_type,
        ).inc()
