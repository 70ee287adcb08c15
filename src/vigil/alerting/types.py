"""Core types for vigil alerting.

Endpoint = a monitored target; owns the consecutive-outcome counters and an
    ordered list of alerts.
Alert = a rule attached to one endpoint: which provider to notify, the
    thresholds, resend pacing, plus its runtime firing state.
Result = the outcome of one check, produced by the scheduler.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from enum import Enum

_KEY_REPLACE = re.compile(r"[ /_,.#+&]")

DEFAULT_FAILURE_THRESHOLD = 3
DEFAULT_SUCCESS_THRESHOLD = 2


class AlertType(str, Enum):
    """Notification backends an alert can target. Closed set."""

    CUSTOM = "custom"
    DISCORD = "discord"
    EMAIL = "email"
    JETBRAINS_SPACE = "jetbrainsspace"
    LOG = "log"
    MATRIX = "matrix"
    MATTERMOST = "mattermost"
    MESSAGEBIRD = "messagebird"
    PAGERDUTY = "pagerduty"
    PUSHOVER = "pushover"
    SLACK = "slack"
    TEAMS = "teams"
    TELEGRAM = "telegram"
    TWILIO = "twilio"


@dataclass
class Alert:
    """An alert rule and its runtime state.

    The configuration fields are set once when the endpoint is loaded.
    ``triggered`` and ``last_notified_at`` are owned by the decision engine
    and persist across check cycles for the lifetime of the endpoint.
    """

    type: AlertType
    enabled: bool = True
    failure_threshold: int = DEFAULT_FAILURE_THRESHOLD
    success_threshold: int = DEFAULT_SUCCESS_THRESHOLD
    send_on_resolved: bool = False
    minimum_reminder_interval: timedelta | None = None  # None/zero: never resend
    description: str = ""

    # Runtime state
    triggered: bool = False
    last_notified_at: datetime | None = None

    def __post_init__(self) -> None:
        self.type = AlertType(self.type)
        if self.failure_threshold < 1:
            raise ValueError(
                f"failure_threshold must be >= 1, got {self.failure_threshold}"
            )
        if self.success_threshold < 1:
            raise ValueError(
                f"success_threshold must be >= 1, got {self.success_threshold}"
            )

    def get_description(self) -> str:
        return self.description or ""


@dataclass
class ConditionResult:
    """Outcome of a single condition evaluated during a check."""

    condition: str  # e.g. "[STATUS] == 200"
    success: bool


@dataclass
class Result:
    """Outcome of one health check. Diagnostics are passed through to providers."""

    success: bool
    status: int = 0
    hostname: str = ""
    duration: timedelta = timedelta(0)
    errors: list[str] = field(default_factory=list)
    condition_results: list[ConditionResult] = field(default_factory=list)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass
class Endpoint:
    """A monitored target. Mutated only by the alerting engine during a cycle."""

    name: str
    url: str = ""
    group: str = ""
    alerts: list[Alert] = field(default_factory=list)
    consecutive_failures: int = 0
    consecutive_successes: int = 0

    @property
    def key(self) -> str:
        """Stable identifier combining group and name, e.g. ``core_api-health``."""
        return f"{_sanitize(self.group)}_{_sanitize(self.name)}"

    @property
    def display_name(self) -> str:
        if self.group:
            return f"{self.group}/{self.name}"
        return self.name


def _sanitize(s: str) -> str:
    return _KEY_REPLACE.sub("-", s.strip().lower())
