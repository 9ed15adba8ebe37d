"""Message Formatter - Turns board cards into Discord embeds."""

from backlog_digest.digest.formatter import (
    DESCRIPTION_BUDGET,
    EMBED_COLOR,
    MAX_EMBEDS_PER_MESSAGE,
    batch_embeds,
    build_embeds_for_list,
    chunk_lines,
    escape_card_name,
    render_card_line,
)
from backlog_digest.digest.models import Embed, ReportBatch

__all__ = [
    "DESCRIPTION_BUDGET",
    "EMBED_COLOR",
    "MAX_EMBEDS_PER_MESSAGE",
    "Embed",
    "ReportBatch",
    "batch_embeds",
    "build_embeds_for_list",
    "chunk_lines",
    "escape_card_name",
    "render_card_line",
]
