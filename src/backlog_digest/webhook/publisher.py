"""WebhookPublisher - One-shot JSON POSTs to a Discord webhook."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from backlog_digest.logging import truncate_output

logger = logging.getLogger(__name__)


class WebhookPublisher:
    """Posts payloads to a fixed webhook URL.

    Failures are reported, not raised: a rejected message is logged and the
    caller carries on with the next one. Nothing is retried.
    """

    def __init__(self, webhook_url: str) -> None:
        """Initialize the publisher.

        Args:
            webhook_url: Discord webhook URL (contains its own token).
        """
        self.webhook_url = webhook_url
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client for the webhook."""
        if self._client is None:
            self._client = httpx.Client(
                headers={"Content-Type": "application/json"},
                timeout=30.0,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def publish(self, payload: dict[str, Any]) -> bool:
        """Send one message.

        Args:
            payload: Webhook body, e.g. {"content": ..., "embeds": [...]}.

        Returns:
            True if the webhook accepted the message, False otherwise.
        """
        logger.debug(
            "Posting webhook message with %d embed(s)", len(payload.get("embeds") or [])
        )
        response = self.client.post(self.webhook_url, json=payload)

        if not response.is_success:
            logger.error(
                "Discord webhook error (%s): %s",
                response.status_code,
                truncate_output(response.text),
            )
            return False

        return True
