"""vigil observability: event-driven logs and metrics for the alerting core.

Public API:
    emit(event)    : Fire-and-forget event emission (no-op if not configured)
    configure(cfg) : Initialize emitter + subscribers (call once at startup)
    reset()        : Reset for testing

Logging (swappable formatter x destination):
    get_logger(name)                : Get a structured logger
    alert_context(**fields)         : Bind fields to every log line in a block
    register_formatter(n, factory)  : Add a VIGIL_LOG_FORMATTER choice
    register_destination(n, factory): Add a VIGIL_LOG_DESTINATION choice

The alerting modules import `emit` and fire typed events. They don't know
about metrics or log files. Subscribers handle routing.
"""

from vigil.observability.config import ObservabilityConfig
from vigil.observability.emitter import configure, emit, is_configured, reset
from vigil.observability.events import (
    AlertDeliveryFailed,
    AlertDispatched,
    AlertResolved,
    AlertTriggered,
)
from vigil.observability.logging import (
    DestinationFactory,
    FormatterFactory,
    alert_context,
    get_logger,
    register_destination,
    register_formatter,
)

__all__ = [
    # Core API
    "emit",
    "configure",
    "is_configured",
    "reset",
    "ObservabilityConfig",
    # Logging (swappable)
    "get_logger",
    "alert_context",
    "FormatterFactory",
    "DestinationFactory",
    "register_formatter",
    "register_destination",
    # Alert transitions
    "AlertTriggered",
    "AlertResolved",
    # Delivery
    "AlertDispatched",
    "AlertDeliveryFailed",
]
