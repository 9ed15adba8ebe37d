"""ReportScheduler - Invokes a job at a cron pattern in a fixed timezone."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING, Any
from zoneinfo import ZoneInfo

from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.cron import CronTrigger

from backlog_digest.config import DEFAULT_CRON, DEFAULT_TIMEZONE

if TYPE_CHECKING:
    from apscheduler.job import Job
    from apscheduler.schedulers.base import BaseScheduler

logger = logging.getLogger(__name__)

JOB_ID = "daily-backlog-report"


class ReportScheduler:
    """Runs a job every time a crontab pattern matches in a given timezone.

    The job itself knows nothing about scheduling, so it can equally be
    called directly for a one-off run.
    """

    def __init__(
        self,
        job: Callable[[], Any],
        cron: str = DEFAULT_CRON,
        timezone: str = DEFAULT_TIMEZONE,
        scheduler: BaseScheduler | None = None,
    ) -> None:
        """Initialize the ReportScheduler.

        Args:
            job: Callable run on every firing.
            cron: Five-field crontab expression.
            timezone: IANA timezone the expression is evaluated in.
            scheduler: APScheduler instance; a BlockingScheduler by default.
        """
        self.job = job
        self.cron = cron
        self.tz = ZoneInfo(timezone)
        self.trigger = CronTrigger.from_crontab(cron, timezone=self.tz)
        self._scheduler = scheduler or BlockingScheduler(timezone=self.tz)
        self._scheduled = False

    def _fire(self) -> None:
        logger.info("Running daily backlog report at %s", datetime.now(self.tz).isoformat())
        self.job()

    def next_fire_time(self, now: datetime | None = None) -> datetime | None:
        """Return when the job fires next after `now` (defaults to the current time)."""
        return self.trigger.get_next_fire_time(None, now or datetime.now(self.tz))

    def schedule(self) -> Job:
        """Register the job with the scheduler, replacing any earlier registration."""
        job = self._scheduler.add_job(
            self._fire,
            self.trigger,
            id=JOB_ID,
            name="Daily backlog report",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        self._scheduled = True
        logger.info("Scheduled backlog report with cron '%s' (%s)", self.cron, self.tz.key)
        return job

    def start(self) -> None:
        """Start the scheduler. Blocks when using the default BlockingScheduler."""
        if not self._scheduled:
            self.schedule()
        logger.info("Next backlog report at %s", self.next_fire_time())
        self._scheduler.start()

    def shutdown(self) -> None:
        """Stop the scheduler without waiting for a running job."""
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")
