"""Structured logging for vigil.

Two registries, both keyed by name from ObservabilityConfig:

    formatter  (VIGIL_LOG_FORMATTER)    structlog | stdlib
    destination (VIGIL_LOG_DESTINATION) stderr | jsonl  (jsonl appends to VIGIL_LOG_PATH)

A formatter is a factory ``config -> logging.Formatter`` and a destination is
a factory ``config -> logging.Handler``. setup_logging() builds one of each
and hangs the handler on the root logger next to any foreign handlers.

Loggers take structlog-style fields, ``logger.warning("alert.x", endpoint=key)``,
whichever formatter is active. Fields bound with alert_context() are added to
every line written inside the block, so a provider's own log lines carry the
endpoint key and alert type of the notification being sent.
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from vigil.observability.config import ObservabilityConfig

FormatterFactory = Callable[["ObservabilityConfig"], logging.Formatter]
DestinationFactory = Callable[["ObservabilityConfig"], logging.Handler]

_MANAGED = "_vigil_managed"
_FIELDS = "vigil_fields"
_LOGGER_KWARGS = ("exc_info", "stack_info", "stacklevel")

_active_formatter: str | None = None


@contextmanager
def alert_context(**fields: Any) -> Iterator[None]:
    """Attach ``fields`` to every log line emitted in this block (and this context)."""
    with structlog.contextvars.bound_contextvars(**fields):
        yield


class _FieldsLogger(logging.LoggerAdapter):
    """stdlib logger accepting key=value fields; they ride on the record."""

    def __init__(self, logger: logging.Logger) -> None:
        super().__init__(logger, {})

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        passthrough = {k: kwargs.pop(k) for k in _LOGGER_KWARGS if k in kwargs}
        return msg, {**passthrough, "extra": {_FIELDS: kwargs}}


def _record_fields(_logger: Any, _method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    # Records from _FieldsLogger reach structlog as foreign records
    record = event_dict.get("_record")
    if record is not None:
        event_dict.update(getattr(record, _FIELDS, {}))
    return event_dict


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------


def structlog_formatter(config: ObservabilityConfig) -> logging.Formatter:
    shared: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if config.log_format == "console":
        renderer: Any = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[*shared, _record_fields, structlog.processors.format_exc_info],
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    )


class _JsonLineFormatter(logging.Formatter):
    """One JSON object per record: bound context, then the record's own fields."""

    def format(self, record: logging.LogRecord) -> str:
        line: dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname.lower(),
            "logger": record.name,
            "event": record.getMessage(),
            **structlog.contextvars.get_contextvars(),
            **getattr(record, _FIELDS, {}),
        }
        if record.exc_info:
            line["exception"] = self.formatException(record.exc_info)
        return json.dumps(line, default=str)


def stdlib_formatter(config: ObservabilityConfig) -> logging.Formatter:
    if config.log_format == "console":
        return logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s")
    return _JsonLineFormatter()


# ---------------------------------------------------------------------------
# Destinations
# ---------------------------------------------------------------------------


def stderr_destination(config: ObservabilityConfig) -> logging.Handler:
    return logging.StreamHandler(sys.stderr)


def jsonl_destination(config: ObservabilityConfig) -> logging.Handler:
    path = Path(config.log_path or "vigil.jsonl")
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, mode="a", encoding="utf-8")


_FORMATTERS: dict[str, FormatterFactory] = {
    "structlog": structlog_formatter,
    "stdlib": stdlib_formatter,
}

_DESTINATIONS: dict[str, DestinationFactory] = {
    "stderr": stderr_destination,
    "jsonl": jsonl_destination,
}


def register_formatter(name: str, factory: FormatterFactory) -> None:
    """Make ``VIGIL_LOG_FORMATTER=<name>`` available. Call before configure()."""
    _FORMATTERS[name] = factory


def register_destination(name: str, factory: DestinationFactory) -> None:
    """Make ``VIGIL_LOG_DESTINATION=<name>`` available. Call before configure()."""
    _DESTINATIONS[name] = factory


def _lookup(registry: dict[str, Any], name: str, kind: str) -> Any:
    try:
        return registry[name]
    except KeyError:
        raise ValueError(
            f"Unknown log {kind}: {name!r}. Available: {sorted(registry)}. "
            f"Add one with register_{kind}()."
        ) from None


def _detach_managed(root: logging.Logger) -> None:
    for handler in [h for h in root.handlers if getattr(h, _MANAGED, False)]:
        root.removeHandler(handler)
        handler.close()


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


def setup_logging(config: ObservabilityConfig) -> None:
    """Attach the configured handler to the root logger, replacing only our own."""
    global _active_formatter

    make_formatter = _lookup(_FORMATTERS, config.log_formatter, "formatter")
    make_handler = _lookup(_DESTINATIONS, config.log_destination, "destination")

    handler = make_handler(config)
    handler.setFormatter(make_formatter(config))
    setattr(handler, _MANAGED, True)

    root = logging.getLogger()
    _detach_managed(root)
    root.addHandler(handler)
    root.setLevel(getattr(logging, config.log_level.upper(), logging.INFO))
    _active_formatter = config.log_formatter


def get_logger(name: str = "") -> Any:
    """structlog logger when structlog formats output, a field-aware stdlib one otherwise.

    Module-level loggers created before setup_logging() keep working: their
    fields are picked up by whichever formatter is installed later.
    """
    if _active_formatter == "structlog":
        return structlog.get_logger(name)
    return _FieldsLogger(logging.getLogger(name))


def shutdown_logging() -> None:
    """Close and detach the handler installed by setup_logging()."""
    global _active_formatter

    _detach_managed(logging.getLogger())
    _active_formatter = None
