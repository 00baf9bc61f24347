"""Scheduled jobs: the daily sweep and delivery of due reminders."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from .reminders import ReminderBackend, ReminderRecord
from .sweep import ReminderSweeper

logger = logging.getLogger(__name__)


def log_notification(record: ReminderRecord) -> None:
    logger.info("🔔 %s: %s", record.title, record.body)


class PantryScheduler:
    """Runs the reminder sweep every day and fires due reminders.

    Uses APScheduler for cron-based scheduling.
    """

    def __init__(
        self,
        config,
        sweeper: ReminderSweeper,
        backend: ReminderBackend,
        notify: Callable[[ReminderRecord], None] = log_notification,
    ) -> None:
        """Initialize scheduler with a PantryConfig.

        Args:
            config: PantryConfig instance.
            sweeper: Sweep driver run by the daily job.
            backend: Backend polled for due reminders.
            notify: Called once for every delivered reminder.

        Raises:
            ImportError: If apscheduler is not installed.
        """
        try:
            from apscheduler.schedulers.asyncio import AsyncIOScheduler
            from apscheduler.triggers.cron import CronTrigger
            from apscheduler.triggers.interval import IntervalTrigger
        except ImportError:
            raise ImportError(
                "apscheduler is required: pip install apscheduler"
            )

        self._config = config
        self._sweeper = sweeper
        self._backend = backend
        self._notify = notify
        self._scheduler = AsyncIOScheduler()
        self._CronTrigger = CronTrigger
        self._IntervalTrigger = IntervalTrigger
        self._running = False

    def setup_jobs(self) -> None:
        """Register scheduled jobs based on config."""
        rem = self._config.reminders

        # Job 1: Daily reminder sweep
        trigger = self._parse_cron(rem.sweep_schedule)
        self._scheduler.add_job(
            self._job_sweep,
            trigger=trigger,
            id="daily_sweep",
            name="Expiration reminder sweep",
            replace_existing=True,
        )
        logger.info("Registered sweep job: %s", rem.sweep_schedule)

        # Job 2: Fire reminders that have come due
        self._scheduler.add_job(
            self._job_deliver,
            trigger=self._IntervalTrigger(seconds=rem.delivery_interval),
            id="deliver_reminders",
            name="Reminder delivery",
            replace_existing=True,
        )
        logger.info("Registered delivery job: every %ds", rem.delivery_interval)

    def start(self) -> None:
        """Start the scheduler."""
        self.setup_jobs()
        self._scheduler.start()
        self._running = True
        logger.info("Scheduler started")

    def stop(self) -> None:
        """Stop the scheduler."""
        if self._running:
            self._scheduler.shutdown(wait=False)
            self._running = False
            logger.info("Scheduler stopped")

    @property
    def running(self) -> bool:
        return self._running

    def get_jobs(self) -> list[dict]:
        """Return info about scheduled jobs."""
        jobs = []
        for job in self._scheduler.get_jobs():
            next_run = getattr(job, "next_run_time", None)
            jobs.append({
                "id": job.id,
                "name": job.name,
                "next_run": str(next_run) if next_run else None,
            })
        return jobs

    def _parse_cron(self, expr: str):
        """Parse a cron expression into a CronTrigger."""
        parts = expr.split()
        if len(parts) == 5:
            return self._CronTrigger(
                minute=parts[0],
                hour=parts[1],
                day=parts[2],
                month=parts[3],
                day_of_week=parts[4],
            )
        raise ValueError(f"Invalid cron expression: {expr}")

    async def _job_sweep(self) -> None:
        logger.info("Running daily sweep...")
        try:
            report = await self._sweeper.run_sweep()
            if report.failures:
                logger.warning(
                    "Sweep finished with %d failure(s)", len(report.failures)
                )
        except Exception:
            logger.exception("Daily sweep failed")

    async def _job_deliver(self) -> None:
        try:
            delivered = await self._backend.deliver_due(datetime.now())
        except Exception:
            logger.exception("Reminder delivery failed")
            return

        for record in delivered:
            try:
                self._notify(record)
            except Exception:
                logger.exception("Notifier failed for %s", record.reminder_id)
