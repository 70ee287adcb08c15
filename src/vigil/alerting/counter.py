"""Outcome counter: consecutive successes/failures per endpoint."""

from __future__ import annotations

from vigil.alerting.types import Endpoint


def record_outcome(endpoint: Endpoint, success: bool) -> None:
    """Count one check outcome. Exactly one counter is nonzero afterwards."""
    if success:
        endpoint.consecutive_successes += 1
        endpoint.consecutive_failures = 0
    else:
        endpoint.consecutive_failures += 1
        endpoint.consecutive_successes = 0
