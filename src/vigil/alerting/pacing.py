"""Reminder pacing: when a still-failing alert may be notified again.

While an alert stays triggered, a reminder goes out at most once per
``minimum_reminder_interval``. ``last_notified_at`` advances on every
attempt, so a provider that keeps failing is not hammered faster than the
configured interval.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from vigil.alerting.types import Alert


def reminders_enabled(alert: Alert) -> bool:
    interval = alert.minimum_reminder_interval
    return interval is not None and interval > timedelta(0)


def reminder_due(alert: Alert, now: datetime) -> bool:
    """True if a "still failing" reminder should be attempted at ``now``.

    An alert with no recorded notification (e.g. restored as triggered) is
    due immediately.
    """
    interval = alert.minimum_reminder_interval
    if interval is None or interval <= timedelta(0):
        return False
    if alert.last_notified_at is None:
        return True
    return now - alert.last_notified_at >= interval


def mark_notified(alert: Alert, now: datetime) -> None:
    alert.last_notified_at = now
