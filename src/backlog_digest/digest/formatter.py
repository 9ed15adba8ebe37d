"""Formatting and chunking of backlog cards into webhook embeds."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import UTC

from backlog_digest.board.models import Card
from backlog_digest.digest.models import Embed, ReportBatch

# Discord caps embed descriptions at 4096 chars; stay below it with headroom.
DESCRIPTION_BUDGET = 3800
MAX_EMBEDS_PER_MESSAGE = 10
EMBED_COLOR = 3447003
EMPTY_PLACEHOLDER = "_No cards_"
TITLE_TEMPLATE = "Backlog — {list_name}"

_BRACKET_ESCAPES = str.maketrans({"[": "［", "]": "］"})


def escape_card_name(name: str) -> str:
    """Swap square brackets for full-width ones so markdown links stay intact."""
    return name.translate(_BRACKET_ESCAPES)


def render_card_line(card: Card, budget: int = DESCRIPTION_BUDGET) -> str:
    """Render a card as `- [Name](url)` with an optional `(Due: YYYY-MM-DD)` suffix.

    A name too long for the line to fit in `budget - 1` chars is shortened with
    an ellipsis; the URL and due date are kept whole.
    """
    name = escape_card_name(card.name)
    suffix = ""
    if card.due is not None:
        suffix = f" (Due: {card.due.astimezone(UTC).date().isoformat()})"

    room = budget - 1 - len(f"- []({card.url}){suffix}")
    if len(name) > room > 0:
        name = name[: room - 1] + "…"
    return f"- [{name}]({card.url}){suffix}"


def chunk_lines(lines: Iterable[str], budget: int = DESCRIPTION_BUDGET) -> list[str]:
    """Greedily pack lines into newline-joined chunks of at most `budget` chars.

    A line that could never fit on its own is cut down and ends with an ellipsis.
    """
    chunks: list[str] = []
    current: list[str] = []
    current_len = 0  # length of "\n".join(current)

    for line in lines:
        if len(line) > budget - 1:
            line = line[: budget - 2] + "…"
        if current and current_len + len(line) + 1 > budget:
            chunks.append("\n".join(current))
            current = [line]
            current_len = len(line)
        elif current:
            current.append(line)
            current_len += len(line) + 1
        else:
            current = [line]
            current_len = len(line)

    if current:
        chunks.append("\n".join(current))
    return chunks


def build_embeds_for_list(list_name: str, cards: Sequence[Card]) -> list[Embed]:
    """Build the embeds for one backlog list, splitting long lists across several.

    Args:
        list_name: Name of the Trello list, used in every embed title.
        cards: Cards of the list, in board order.

    Returns:
        One embed per chunk; empty when there are no cards.
    """
    lines = [render_card_line(card) for card in cards]
    title = TITLE_TEMPLATE.format(list_name=list_name)
    return [
        Embed(title=title, description=chunk or EMPTY_PLACEHOLDER, color=EMBED_COLOR)
        for chunk in chunk_lines(lines)
    ]


def batch_embeds(
    embeds: Sequence[Embed],
    size: int = MAX_EMBEDS_PER_MESSAGE,
    lead: str | None = None,
) -> list[ReportBatch]:
    """Split embeds into ordered webhook messages; only the first carries `lead`."""
    return [
        ReportBatch(embeds=list(embeds[i : i + size]), content=lead if i == 0 else None)
        for i in range(0, len(embeds), size)
    ]
