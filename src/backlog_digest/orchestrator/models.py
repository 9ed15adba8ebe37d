"""Data models for the Orchestrator module."""

from dataclasses import dataclass
from enum import Enum


class ReportOutcome(str, Enum):
    """How a report run ended."""

    NO_BACKLOG = "no_backlog"
    NOTHING_TO_DO = "nothing_to_do"
    SENT = "sent"
    FAILED = "failed"


@dataclass
class ReportResult:
    """Result of one report run.

    Attributes:
        outcome: Which branch of the report the run ended in.
        embeds_sent: Number of card embeds handed to the webhook.
        batches_sent: Number of webhook calls made for those embeds.
        error: Sanitized error text when the run failed.
    """

    outcome: ReportOutcome
    embeds_sent: int = 0
    batches_sent: int = 0
    error: str | None = None
