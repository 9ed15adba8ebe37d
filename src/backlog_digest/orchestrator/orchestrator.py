"""ReportOrchestrator - Fetches backlog cards and posts the daily digest."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from backlog_digest.digest import batch_embeds, build_embeds_for_list
from backlog_digest.logging import sanitize_for_log
from backlog_digest.orchestrator.models import ReportOutcome, ReportResult

if TYPE_CHECKING:
    from backlog_digest.board import BoardClient
    from backlog_digest.digest import Embed
    from backlog_digest.webhook import WebhookPublisher

logger = logging.getLogger(__name__)

NO_BACKLOG_MESSAGE = "📋 **Daily Backlog Report**\n_There's no backlog in Trello, my dear._"
NOTHING_TO_DO_MESSAGE = (
    "📋 **Daily Backlog Report**\n"
    "_No work today, feel free to found something. More research._"
)
LEAD_MESSAGE = "📋 **Back to work, my little guinea pig.**"


class ReportOrchestrator:
    """Runs the backlog report from board read to webhook post.

    A run is strictly sequential: lists, then cards per backlog list, then
    one webhook call per batch. It holds no state between runs.
    """

    def __init__(
        self,
        board: BoardClient,
        publisher: WebhookPublisher,
        board_id: str,
    ) -> None:
        """Initialize the Orchestrator.

        Args:
            board: Client used to read lists and cards.
            publisher: Publisher that posts the report messages.
            board_id: Trello board scanned for backlog lists.
        """
        self.board = board
        self.publisher = publisher
        self.board_id = board_id

    def run(self) -> ReportResult:
        """Run the report once.

        Never raises: any error is logged and reported as a FAILED result so
        the scheduler keeps running.
        """
        try:
            return self._run()
        except Exception as e:
            message = sanitize_for_log(f"{type(e).__name__}: {e}")
            logger.error("Error in daily backlog report: %s", message)
            return ReportResult(outcome=ReportOutcome.FAILED, error=message)

    def _run(self) -> ReportResult:
        lists = self.board.fetch_lists(self.board_id)
        backlog_lists = [board_list for board_list in lists if board_list.is_backlog]

        if not backlog_lists:
            self.publisher.publish({"content": NO_BACKLOG_MESSAGE})
            logger.info("No backlog lists.")
            return ReportResult(outcome=ReportOutcome.NO_BACKLOG)

        all_embeds: list[Embed] = []
        for board_list in backlog_lists:
            cards = self.board.fetch_cards(board_list.id)
            if not cards:
                logger.debug("Skipping empty backlog list %s", board_list.name)
                continue
            all_embeds.extend(build_embeds_for_list(board_list.name, cards))

        if not all_embeds:
            self.publisher.publish({"content": NOTHING_TO_DO_MESSAGE})
            logger.info("Backlog lists empty.")
            return ReportResult(outcome=ReportOutcome.NOTHING_TO_DO)

        batches = batch_embeds(all_embeds, lead=LEAD_MESSAGE)
        for batch in batches:
            self.publisher.publish(batch.to_payload())

        logger.info("Sent %d embeds in %d message(s).", len(all_embeds), len(batches))
        return ReportResult(
            outcome=ReportOutcome.SENT,
            embeds_sent=len(all_embeds),
            batches_sent=len(batches),
        )
