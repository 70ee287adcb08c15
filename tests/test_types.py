"""Tests for the alerting data model, outcome counter, pacing and status snapshots."""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from datetime import UTC, datetime, timedelta

import pytest

from vigil.alerting.counter import record_outcome
from vigil.alerting.pacing import mark_notified, reminder_due, reminders_enabled
from vigil.alerting.status import snapshot
from vigil.alerting.types import Alert, AlertType, Endpoint

T0 = datetime(2026, 1, 1, tzinfo=UTC)


class TestAlert:
    def test_defaults(self):
        alert = Alert(type=AlertType.SLACK)
        assert alert.enabled is True
        assert alert.failure_threshold == 3
        assert alert.success_threshold == 2
        assert alert.send_on_resolved is False
        assert alert.minimum_reminder_interval is None
        assert alert.triggered is False
        assert alert.last_notified_at is None

    def test_type_coerced_from_string(self):
        assert Alert(type="pagerduty").type is AlertType.PAGERDUTY

    def test_unknown_type_rejected(self):
        with pytest.raises(ValueError):
            Alert(type="carrier-pigeon")

    @pytest.mark.parametrize("field", ["failure_threshold", "success_threshold"])
    @pytest.mark.parametrize("value", [0, -1])
    def test_non_positive_threshold_rejected(self, field, value):
        with pytest.raises(ValueError, match=field):
            Alert(type=AlertType.CUSTOM, **{field: value})

    def test_description(self):
        assert Alert(type=AlertType.EMAIL).get_description() == ""
        assert Alert(type=AlertType.EMAIL, description="db down").get_description() == "db down"


class TestEndpoint:
    def test_key_normalizes_group_and_name(self):
        ep = Endpoint(name="Front End/Health", group="Core.Services")
        assert ep.key == "core-services_front-end-health"

    def test_key_without_group(self):
        assert Endpoint(name="api").key == "_api"

    def test_display_name(self):
        assert Endpoint(name="api", group="core").display_name == "core/api"
        assert Endpoint(name="api").display_name == "api"


class TestOutcomeCounter:
    def test_success_resets_failures(self):
        ep = Endpoint(name="e", consecutive_failures=4)
        record_outcome(ep, True)
        assert (ep.consecutive_failures, ep.consecutive_successes) == (0, 1)

    def test_failure_resets_successes(self):
        ep = Endpoint(name="e", consecutive_successes=7)
        record_outcome(ep, False)
        assert (ep.consecutive_failures, ep.consecutive_successes) == (1, 0)

    def test_runs_accumulate(self):
        ep = Endpoint(name="e")
        for _ in range(3):
            record_outcome(ep, False)
        assert ep.consecutive_failures == 3


class TestPacing:
    def test_disabled_without_interval(self):
        alert = Alert(type=AlertType.CUSTOM)
        assert not reminders_enabled(alert)
        assert not reminder_due(alert, T0)

    def test_disabled_with_zero_interval(self):
        alert = Alert(type=AlertType.CUSTOM, minimum_reminder_interval=timedelta(0))
        assert not reminders_enabled(alert)
        assert not reminder_due(alert, T0)

    def test_negative_interval_never_due(self):
        alert = Alert(type=AlertType.CUSTOM, minimum_reminder_interval=timedelta(minutes=-1))
        mark_notified(alert, T0)
        assert not reminder_due(alert, T0 + timedelta(days=1))

    def test_due_when_never_notified(self):
        alert = Alert(type=AlertType.CUSTOM, minimum_reminder_interval=timedelta(minutes=1))
        assert reminder_due(alert, T0)

    def test_due_exactly_at_interval(self):
        alert = Alert(type=AlertType.CUSTOM, minimum_reminder_interval=timedelta(minutes=1))
        mark_notified(alert, T0)
        assert not reminder_due(alert, T0 + timedelta(seconds=59))
        assert reminder_due(alert, T0 + timedelta(minutes=1))
        assert reminder_due(alert, T0 + timedelta(hours=1))


class TestStatusSnapshot:
    def test_snapshot_copies_state(self):
        ep = Endpoint(
            name="api",
            group="core",
            alerts=[
                Alert(type=AlertType.CUSTOM, triggered=True, last_notified_at=T0),
                Alert(type=AlertType.LOG, enabled=False),
            ],
            consecutive_failures=5,
        )
        status = snapshot(ep)

        assert status.key == "core_api"
        assert status.consecutive_failures == 5
        assert status.consecutive_successes == 0
        assert not status.healthy
        assert [a.alert_type for a in status.alerts] == ["custom", "log"]
        assert [a.index for a in status.alerts] == [0, 1]
        assert status.firing == (status.alerts[0],)
        assert status.alerts[0].last_notified_at == T0
        assert status.alerts[1].enabled is False

    def test_snapshot_is_detached(self):
        ep = Endpoint(name="api", alerts=[Alert(type=AlertType.CUSTOM)])
        status = snapshot(ep)

        ep.alerts[0].triggered = True
        ep.consecutive_failures = 3

        assert status.alerts[0].triggered is False
        assert status.consecutive_failures == 0
        with pytest.raises(FrozenInstanceError):
            status.consecutive_failures = 1  # type: ignore[misc]
