"""Board Client - Reads lists and cards from a Trello board."""

from backlog_digest.board.client import BoardClient
from backlog_digest.board.models import BoardList, Card

__all__ = [
    "BoardClient",
    "BoardList",
    "Card",
]
