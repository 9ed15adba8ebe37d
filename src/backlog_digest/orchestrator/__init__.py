"""Orchestrator package - The daily backlog report job."""

from backlog_digest.orchestrator.models import ReportOutcome, ReportResult
from backlog_digest.orchestrator.orchestrator import (
    LEAD_MESSAGE,
    NO_BACKLOG_MESSAGE,
    NOTHING_TO_DO_MESSAGE,
    ReportOrchestrator,
)

__all__ = [
    "LEAD_MESSAGE",
    "NOTHING_TO_DO_MESSAGE",
    "NO_BACKLOG_MESSAGE",
    "ReportOrchestrator",
    "ReportOutcome",
    "ReportResult",
]
