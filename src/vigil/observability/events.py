"""Typed event dataclasses for vigil observability.

All events are frozen (immutable) dataclasses. The alerting engine emits
these; it doesn't know about metrics or logs. Subscribers handle routing.

Grouped by concern: alert state transitions, notification delivery.
Subscribers attach to VigilEventLinker, never to pyventus' global linker,
so vigil events stay separate from any other pyventus user in the process.
"""

from __future__ import annotations

from dataclasses import dataclass

from pyventus.events import EventLinker


class VigilEventLinker(EventLinker):
    """Subscriber registry for the events below."""


# ---------------------------------------------------------------------------
# Alert state transitions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AlertTriggered:
    endpoint: str  # endpoint key
    alert_type: str
    description: str
    consecutive_failures: int
    failure_threshold: int
    timestamp: str  # ISO


@dataclass(frozen=True)
class AlertResolved:
    endpoint: str
    alert_type: str
    description: str
    consecutive_successes: int
    success_threshold: int
    notified: bool  # False if no resolution dispatch was attempted or it failed
    timestamp: str


# ---------------------------------------------------------------------------
# Notification delivery
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AlertDispatched:
    endpoint: str
    alert_type: str
    resolved: bool
    reminder: bool  # "still failing" resend while already triggered
    latency_ms: float


@dataclass(frozen=True)
class AlertDeliveryFailed:
    endpoint: str
    alert_type: str
    resolved: bool
    reminder: bool
    error: str
    error_type: str  # exception class name, e.g. "ProviderNotConfiguredError"


ALL_EVENTS = (
    AlertTriggered,
    AlertResolved,
    AlertDispatched,
    AlertDeliveryFailed,
)
