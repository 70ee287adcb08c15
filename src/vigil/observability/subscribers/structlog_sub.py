"""Routes alerting events to structured log lines via get_logger().

Always-on subscriber. Called by emitter.configure() on every startup.
"""

from __future__ import annotations

from dataclasses import asdict

from vigil.observability.events import (
    AlertDeliveryFailed,
    AlertDispatched,
    AlertResolved,
    AlertTriggered,
)
from vigil.observability.events import VigilEventLinker
from vigil.observability.logging import get_logger


def _get_logger():
    """Lazy logger -- always reflects the active formatter, not stale import-time state."""
    return get_logger("vigil.events")


def _to_dict(event: object) -> dict:
    return asdict(event)  # type: ignore[arg-type]


def register_structlog_subscriber() -> None:
    """Register log handlers for all alerting events on VigilEventLinker."""

    @VigilEventLinker.on(AlertTriggered)
    def _log_triggered(event: AlertTriggered) -> None:
        _get_logger().warning("alert.triggered", **_to_dict(event))

    @VigilEventLinker.on(AlertResolved)
    def _log_resolved(event: AlertResolved) -> None:
        _get_logger().info("alert.resolved", **_to_dict(event))

    @VigilEventLinker.on(AlertDispatched)
    def _log_dispatched(event: AlertDispatched) -> None:
        _get_logger().debug("alert.dispatched", **_to_dict(event))

    @VigilEventLinker.on(AlertDeliveryFailed)
    def _log_delivery_failed(event: AlertDeliveryFailed) -> None:
        # A failed resolution still resolves the alert; the operator only sees this line.
        _get_logger().error("alert.delivery_failed", **_to_dict(event))
