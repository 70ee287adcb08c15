"""JSONL file subscriber: every alerting event as one line.

    {"event": "AlertDeliveryFailed", "endpoint": "core_api", "alert_type": "custom", ...}

The event class name goes under "event" so a file can be filtered per event
kind or per endpoint key with plain grep/jq.
"""

from __future__ import annotations

import json
import threading
from dataclasses import asdict
from pathlib import Path

from vigil.observability.events import ALL_EVENTS, VigilEventLinker

_write_lock = threading.Lock()


def event_record(event: object) -> dict:
    return {"event": type(event).__name__, **asdict(event)}  # type: ignore[call-overload]


def register_jsonl_subscriber(path: str | Path) -> None:
    """Append every alerting event to ``path``, creating parent directories."""
    events_file = Path(path)
    events_file.parent.mkdir(parents=True, exist_ok=True)

    @VigilEventLinker.on(*ALL_EVENTS)
    def _write_jsonl(event: object) -> None:
        line = json.dumps(event_record(event), default=str) + "\n"
        with _write_lock, events_file.open("a", encoding="utf-8") as f:
            f.write(line)
