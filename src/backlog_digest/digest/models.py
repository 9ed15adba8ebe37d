"""Data models for the Message Formatter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Embed:
    """One titled, coloured block of a Discord webhook message."""

    title: str
    description: str
    color: int

    def to_dict(self) -> dict[str, Any]:
        return {"title": self.title, "description": self.description, "color": self.color}


@dataclass
class ReportBatch:
    """Embeds sent together in a single webhook call.

    Attributes:
        embeds: Up to 10 embeds, in report order.
        content: Lead text shown above the embeds, or None for embeds only.
    """

    embeds: list[Embed] = field(default_factory=list)
    content: str | None = None

    def to_payload(self) -> dict[str, Any]:
        """Build the webhook JSON body; `content` is omitted when unset."""
        payload: dict[str, Any] = {}
        if self.content is not None:
            payload["content"] = self.content
        payload["embeds"] = [embed.to_dict() for embed in self.embeds]
        return payload
