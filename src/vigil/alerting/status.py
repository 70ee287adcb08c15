"""Read-only status snapshots for status pages and APIs.

Snapshots are copies: reading them never touches engine-owned state, and
they may lag the live endpoint by one check.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from vigil.alerting.types import Endpoint


@dataclass(frozen=True)
class AlertStatus:
    index: int  # position in the endpoint's alert list
    alert_type: str
    enabled: bool
    triggered: bool
    last_notified_at: datetime | None


@dataclass(frozen=True)
class EndpointStatus:
    key: str
    name: str
    group: str
    consecutive_failures: int
    consecutive_successes: int
    alerts: tuple[AlertStatus, ...]

    @property
    def healthy(self) -> bool:
        return self.consecutive_failures == 0

    @property
    def firing(self) -> tuple[AlertStatus, ...]:
        return tuple(a for a in self.alerts if a.triggered)


def snapshot(endpoint: Endpoint) -> EndpointStatus:
    return EndpointStatus(
        key=endpoint.key,
        name=endpoint.name,
        group=endpoint.group,
        consecutive_failures=endpoint.consecutive_failures,
        consecutive_successes=endpoint.consecutive_successes,
        alerts=tuple(
            AlertStatus(
                index=i,
                alert_type=alert.type.value,
                enabled=alert.enabled,
                triggered=alert.triggered,
                last_notified_at=alert.last_notified_at,
            )
            for i, alert in enumerate(endpoint.alerts)
        ),
    )
