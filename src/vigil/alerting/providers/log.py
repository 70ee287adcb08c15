"""Log alert provider: notifications become structured log lines."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from vigil.observability.logging import get_logger

if TYPE_CHECKING:
    from vigil.alerting.types import Alert, Endpoint, Result

_LEVELS = ("debug", "info", "warning", "error", "critical")


class LogAlertProvider:
    """Log alerts via the configured logging backend. Never fails to deliver."""

    def __init__(self, level: str = "warning", logger_name: str = "vigil.alerts") -> None:
        self.level = level
        self.logger_name = logger_name

    @classmethod
    def from_settings(cls, settings: dict[str, Any]) -> LogAlertProvider:
        return cls(
            level=str(settings.get("level", "warning")).lower(),
            logger_name=str(settings.get("logger") or "vigil.alerts"),
        )

    def is_valid(self) -> bool:
        return self.level in _LEVELS

    def send(
        self, endpoint: Endpoint, alert: Alert, result: Result, resolved: bool
    ) -> None:
        log = getattr(get_logger(self.logger_name), self.level)
        log(
            "alert.resolved" if resolved else "alert.firing",
            endpoint=endpoint.key,
            name=endpoint.display_name,
            url=endpoint.url,
            alert_type=alert.type.value,
            description=alert.get_description(),
            success=result.success,
            errors=list(result.errors),
        )
