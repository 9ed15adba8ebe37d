"""BoardClient - Read-only access to the Trello REST API."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

import httpx

from backlog_digest.board.models import BoardList, Card
from backlog_digest.config import DEFAULT_TRELLO_BASE_URL
from backlog_digest.logging import truncate_output

logger = logging.getLogger(__name__)

_MALFORMED = object()


def _parse_due(value: Any, card_id: str) -> datetime | None:
    """Parse a Trello due string; a naive timestamp is taken as UTC."""
    if not value:
        return None
    try:
        due = datetime.fromisoformat(str(value))
    except ValueError:
        logger.warning("Ignoring unparseable due date %r on card %s", value, card_id)
        return None
    if due.tzinfo is None:
        due = due.replace(tzinfo=UTC)
    return due


class BoardClient:
    """Client for the two Trello reads the report needs.

    Every request carries the key/token pair as query parameters. Malformed
    responses are logged and read as empty; transport errors propagate.
    """

    def __init__(
        self,
        key: str,
        token: str,
        base_url: str = DEFAULT_TRELLO_BASE_URL,
    ) -> None:
        """Initialize the Board Client.

        Args:
            key: Trello API key.
            token: Trello API token.
            base_url: Trello REST API root (for testing).
        """
        self.key = key
        self.token = token
        self.base_url = base_url.rstrip("/")
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client for the Trello API."""
        if self._client is None:
            self._client = httpx.Client(
                headers={"Accept": "application/json"},
                timeout=30.0,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def _get(self, path: str, params: dict[str, str]) -> Any:
        """GET a Trello resource and decode its JSON body.

        Returns:
            The decoded body, or _MALFORMED when the body is not JSON.
        """
        query = {"key": self.key, "token": self.token, **params}
        response = self.client.get(f"{self.base_url}{path}", params=query)
        try:
            return response.json()
        except ValueError:
            logger.error(
                "Trello returned a non-JSON body for %s (status %s): %s",
                path,
                response.status_code,
                truncate_output(response.text),
            )
            return _MALFORMED

    def fetch_lists(self, board_id: str) -> list[BoardList]:
        """Get all open lists on a board.

        Args:
            board_id: Trello board ID or short link.

        Returns:
            Lists in board order, or an empty list if Trello answered with an error.
        """
        logger.debug("Fetching lists for board %s", board_id)
        data = self._get(f"/boards/{board_id}/lists", {"filter": "open", "fields": "name"})
        if not isinstance(data, list):
            if data is not _MALFORMED:
                logger.error("Trello lists error: %s", data)
            return []

        lists = []
        for item in data:
            if not isinstance(item, dict) or not item.get("id"):
                logger.warning("Skipping malformed list record: %r", item)
                continue
            lists.append(BoardList(id=str(item["id"]), name=str(item.get("name") or "")))

        logger.info("Found %d open list(s) on board %s", len(lists), board_id)
        return lists

    def fetch_cards(self, list_id: str) -> list[Card]:
        """Get all open cards in a list.

        Args:
            list_id: Trello list ID.

        Returns:
            Cards in list order, or an empty list if Trello answered with an error.
        """
        logger.debug("Fetching cards for list %s", list_id)
        data = self._get(
            f"/lists/{list_id}/cards",
            {"filter": "open", "fields": "name,shortUrl,due"},
        )
        if not isinstance(data, list):
            if data is not _MALFORMED:
                logger.error("Trello cards error for list %s: %s", list_id, data)
            return []

        cards = []
        for item in data:
            if not isinstance(item, dict) or not item.get("id"):
                logger.warning("Skipping malformed card record in list %s: %r", list_id, item)
                continue
            card_id = str(item["id"])
            cards.append(
                Card(
                    id=card_id,
                    name=str(item.get("name") or ""),
                    url=str(item.get("shortUrl") or item.get("url") or ""),
                    due=_parse_due(item.get("due"), card_id),
                )
            )

        logger.info("Found %d open card(s) in list %s", len(cards), list_id)
        return cards
