"""vigil: the alerting core of a health-monitoring service.

Feed each check result to handle_alerting(); it keeps per-endpoint counters,
decides when alerts trigger, resolve or remind, and calls the configured
notification providers.
"""

from vigil.alerting import (
    Alert,
    AlertingConfig,
    AlertType,
    Endpoint,
    Result,
    handle_alerting,
    snapshot,
)

__version__ = "0.1.0"

__all__ = [
    "Alert",
    "AlertingConfig",
    "AlertType",
    "Endpoint",
    "Result",
    "handle_alerting",
    "snapshot",
]
