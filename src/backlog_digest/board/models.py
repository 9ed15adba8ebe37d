"""Data models for the Board Client."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

BACKLOG_KEYWORD = "backlog"


@dataclass
class BoardList:
    """An open list on a Trello board."""

    id: str
    name: str

    @property
    def is_backlog(self) -> bool:
        """Whether the list name contains "backlog", ignoring case."""
        return BACKLOG_KEYWORD in self.name.lower()


@dataclass
class Card:
    """An open card in a Trello list.

    Attributes:
        id: Trello card ID.
        name: Card title as shown on the board.
        url: Short URL of the card.
        due: Due instant, timezone-aware, or None when the card has no due date.
    """

    id: str
    name: str
    url: str
    due: datetime | None = None
