"""Observability configuration, env-driven.

All settings have safe defaults. Zero config required for basic
structured logging to stderr.

Logging architecture:
    formatter (how records are structured) × destination (where they go)

    Formatter: VIGIL_LOG_FORMATTER=structlog (default) | stdlib
    Destination: VIGIL_LOG_DESTINATION=stderr (default) | jsonl
    Renderer: VIGIL_LOG_FORMAT=json (default) | console
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

_TRUTHY = ("1", "true", "on", "yes")


@dataclass
class ObservabilityConfig:
    """Observability configuration, env-driven."""

    # --- Logging: formatter × destination ---
    log_formatter: str = field(
        default_factory=lambda: os.environ.get("VIGIL_LOG_FORMATTER", "structlog")
    )  # "structlog" | "stdlib"

    log_destination: str = field(
        default_factory=lambda: os.environ.get("VIGIL_LOG_DESTINATION", "stderr")
    )  # "stderr" | "jsonl"

    log_level: str = field(
        default_factory=lambda: os.environ.get("VIGIL_LOG_LEVEL", "INFO")
    )

    log_format: str = field(
        default_factory=lambda: os.environ.get("VIGIL_LOG_FORMAT", "json")
    )  # "json" | "console"

    # JSONL log destination
    log_path: str | None = field(
        default_factory=lambda: os.environ.get("VIGIL_LOG_PATH")
    )

    # JSONL event sink: every alerting event as one line
    events_path: str | None = field(
        default_factory=lambda: os.environ.get("VIGIL_EVENTS_PATH")
    )

    # --- Prometheus ---
    prometheus_enabled: bool = field(
        default_factory=lambda: os.environ.get("VIGIL_PROMETHEUS_ENABLED", "").lower()
        in _TRUTHY
    )
    prometheus_port: int = field(
        default_factory=lambda: int(os.environ.get("VIGIL_PROMETHEUS_PORT", "9090"))
    )
