"""Slack incoming-webhook alert channel."""

import httpx

from indexsync.config import SlackConfig
from indexsync.domain.index.port.reporter import AlertChannel
from indexsync.domain.shared.error import AlertDeliveryError


class SlackWebhook(AlertChannel):
    """Posts messages to a Slack incoming webhook."""

    def __init__(self, config: SlackConfig, client: httpx.Client | None = None) -> None:
        if not config.webhook:
            raise ValueError("Slack webhook URL is required")
        self._config = config
        self._client = client or httpx.Client(timeout=config.timeout)

    @property
    def name(self) -> str:
        return "slack"

    def send(self, message: str) -> None:
        payload: dict[str, str] = {
            "text": message,
            "username": self._config.username,
            "icon_emoji": self._config.icon_emoji,
        }
        if self._config.channel:
            payload["channel"] = self._config.channel

        try:
            response = self._client.post(self._config.webhook, json=payload)  # type: ignore[arg-type]
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise AlertDeliveryError(f"Slack webhook rejected alert: {e}") from e

    def close(self) -> None:
        self._client.close()
