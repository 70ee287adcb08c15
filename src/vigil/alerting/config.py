"""Alerting configuration: the alert type -> provider lookup table.

Built once at startup, read-only afterwards. YAML layout:

    custom:
      url: https://hooks.example.com/alert
      method: POST
      body: '{"text": "[ENDPOINT_NAME] is [ALERT_TRIGGERED_OR_RESOLVED]"}'
    log:
      level: warning

Providers whose settings fail is_valid() are dropped here, so the engine
sees them as "not configured".
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from vigil.alerting.providers.base import AlertProvider, InvalidProviderSettingsError
from vigil.alerting.providers.registry import build_provider
from vigil.alerting.types import AlertType
from vigil.observability.logging import get_logger

logger = get_logger(__name__)


class AlertingConfig:
    """Mapping from alert type to a configured, valid provider."""

    def __init__(self, providers: Mapping[AlertType | str, AlertProvider] | None = None) -> None:
        self._providers: dict[AlertType, AlertProvider] = {}
        for alert_type, provider in (providers or {}).items():
            key = AlertType(_type_name(alert_type))
            if not provider.is_valid():
                logger.warning("alerting.provider.invalid", alert_type=key.value)
                continue
            self._providers[key] = provider

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any] | None) -> AlertingConfig:
        """Build providers from ``{alert_type: settings}``.

        Settings a provider cannot be built from are logged and skipped, so
        the type reads as not configured.

        Raises:
            ValueError: unknown alert type, or no provider registered for it.
        """
        providers: dict[AlertType, AlertProvider] = {}
        for name, settings in (raw or {}).items():
            if settings is not None and not isinstance(settings, Mapping):
                raise ValueError(
                    f"Settings for alert type {name!r} must be a mapping, "
                    f"got {type(settings).__name__}"
                )
            key = AlertType(_type_name(name))
            try:
                providers[key] = build_provider(key, dict(settings or {}))
            except InvalidProviderSettingsError as e:
                logger.warning(
                    "alerting.provider.invalid", alert_type=key.value, error=str(e)
                )
        return cls(providers)

    @classmethod
    def load(cls, path: Path | str) -> AlertingConfig:
        """Load from a YAML file. A missing or empty file yields no providers."""
        file_path = Path(path)
        if not file_path.exists():
            logger.info("alerting.config.missing", path=str(file_path))
            return cls()
        raw = yaml.safe_load(file_path.read_text()) or {}
        if not isinstance(raw, Mapping):
            raise ValueError(f"Alerting config {file_path} must be a mapping at top level")
        # Accept both a bare mapping and one nested under "alerting:"
        if "alerting" in raw and isinstance(raw["alerting"], Mapping):
            raw = raw["alerting"]
        return cls.from_dict(raw)

    def get_provider(self, alert_type: AlertType | str) -> AlertProvider | None:
        """Return the provider for ``alert_type``, or None if not configured."""
        try:
            return self._providers.get(AlertType(_type_name(alert_type)))
        except ValueError:
            return None

    def configured_types(self) -> list[AlertType]:
        return sorted(self._providers, key=lambda t: t.value)

    def __contains__(self, alert_type: object) -> bool:
        return self.get_provider(alert_type) is not None  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(self._providers)

    def __repr__(self) -> str:
        return f"AlertingConfig({[t.value for t in self.configured_types()]})"


def _type_name(name: Any) -> str:
    # Enum values are lowercase; tolerate "Slack" / "PAGERDUTY" in YAML
    if isinstance(name, AlertType):
        return name.value
    try:
        return AlertType(str(name).lower()).value
    except ValueError:
        raise ValueError(
            f"Unknown alert type: {name!r}. "
            f"Available: {[t.value for t in AlertType]}."
        ) from None
