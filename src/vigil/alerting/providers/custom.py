"""Custom HTTP alert provider: call any webhook with a templated request.

Placeholders substituted in the URL, body and header values:
    [ENDPOINT_NAME], [ENDPOINT_GROUP], [ENDPOINT_URL]
    [ALERT_DESCRIPTION]
    [ALERT_TRIGGERED_OR_RESOLVED]  -> "TRIGGERED" | "RESOLVED"
    [RESULT_ERRORS]                -> errors joined with ", "
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import httpx

from vigil.alerting.providers.base import AlertProviderError

if TYPE_CHECKING:
    from vigil.alerting.types import Alert, Endpoint, Result

_DEFAULT_TIMEOUT = 10.0


@dataclass
class CustomAlertProvider:
    """Send alerts as an arbitrary HTTP request."""

    url: str
    method: str = "GET"
    body: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    timeout: float = _DEFAULT_TIMEOUT
    # Overrides the text used for [ALERT_TRIGGERED_OR_RESOLVED]
    placeholders: dict[str, str] = field(default_factory=dict)
    client: httpx.Client | None = field(default=None, repr=False)

    @classmethod
    def from_settings(cls, settings: dict[str, Any]) -> CustomAlertProvider:
        return cls(
            url=str(settings.get("url") or ""),
            method=str(settings.get("method", "GET")).upper(),
            body=str(settings.get("body") or ""),
            headers=dict(settings.get("headers") or {}),
            timeout=float(settings.get("timeout", _DEFAULT_TIMEOUT)),
            placeholders=dict(settings.get("placeholders") or {}),
        )

    def is_valid(self) -> bool:
        return self.url.startswith(("http://", "https://")) and self.timeout > 0

    def build_request(
        self, endpoint: Endpoint, alert: Alert, result: Result, resolved: bool
    ) -> httpx.Request:
        substitutions = {
            "[ENDPOINT_NAME]": endpoint.name,
            "[ENDPOINT_GROUP]": endpoint.group,
            "[ENDPOINT_URL]": endpoint.url,
            "[ALERT_DESCRIPTION]": alert.get_description(),
            "[ALERT_TRIGGERED_OR_RESOLVED]": self._status_text(resolved),
            "[RESULT_ERRORS]": ", ".join(result.errors),
        }

        def fill(text: str) -> str:
            for placeholder, value in substitutions.items():
                text = text.replace(placeholder, value)
            return text

        return httpx.Request(
            self.method,
            fill(self.url),
            content=fill(self.body).encode() if self.body else None,
            headers={k: fill(v) for k, v in self.headers.items()},
        )

    def send(
        self, endpoint: Endpoint, alert: Alert, result: Result, resolved: bool
    ) -> None:
        request = self.build_request(endpoint, alert, result, resolved)
        try:
            if self.client is not None:
                response = self.client.send(request)
            else:
                with httpx.Client(timeout=self.timeout) as client:
                    response = client.send(request)
        except httpx.HTTPError as e:
            raise AlertProviderError(f"custom alert request failed: {e}") from e
        if response.status_code >= 400:
            raise AlertProviderError(
                f"custom alert endpoint returned HTTP {response.status_code}: "
                f"{response.text[:200]}"
            )

    def _status_text(self, resolved: bool) -> str:
        if resolved:
            return self.placeholders.get("resolved", "RESOLVED")
        return self.placeholders.get("triggered", "TRIGGERED")
