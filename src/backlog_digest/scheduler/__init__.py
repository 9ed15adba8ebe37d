"""Scheduler - Fires the report on a daily cron pattern."""

from backlog_digest.scheduler.scheduler import JOB_ID, ReportScheduler

__all__ = [
    "JOB_ID",
    "ReportScheduler",
]
