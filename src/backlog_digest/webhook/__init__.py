"""Webhook Publisher - Posts messages to a Discord webhook."""

from backlog_digest.webhook.publisher import WebhookPublisher

__all__ = ["WebhookPublisher"]
