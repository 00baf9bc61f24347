"""Daily sweep: recompute expiration reminders from the current inventory."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import TYPE_CHECKING

from .errors import BackendError
from .expiry import InventorySummary, summarize
from .planner import (
    DAILY_CHECK_BODY,
    DAILY_CHECK_ID,
    DAILY_CHECK_TITLE,
    PlannedReminder,
    ReconciliationPlan,
    plan_reminders,
    reminder_id,
)
from .reminders import ReminderBackend, ReminderRecord

if TYPE_CHECKING:
    from .config import PantryConfig
    from .db import InventoryDB

logger = logging.getLogger(__name__)


@dataclass
class SweepReport:
    """What one sweep saw and did."""

    today: date
    summary: InventorySummary
    permitted: bool = False
    plan: ReconciliationPlan | None = None
    scheduled: list[str] = field(default_factory=list)
    cancelled: list[str] = field(default_factory=list)
    failures: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures


class ReminderSweeper:
    """Reconciles pending reminders with the inventory store.

    Keeps no state between runs: every sweep reads the store and the
    backend fresh, so running it twice (or concurrently) is harmless.
    """

    def __init__(
        self,
        store: InventoryDB,
        backend: ReminderBackend,
        *,
        lead_days: int = 3,
        hour: int = 9,
        minute: int = 0,
        summary_options: dict | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._store = store
        self._backend = backend
        self._lead_days = lead_days
        self._hour = hour
        self._minute = minute
        self._summary_options = summary_options or {}
        self._clock = clock

    @classmethod
    def from_config(
        cls, config: PantryConfig, store: InventoryDB, backend: ReminderBackend
    ) -> ReminderSweeper:
        exp = config.expiry
        return cls(
            store,
            backend,
            lead_days=config.reminders.lead_days,
            hour=config.reminders.hour,
            minute=config.reminders.minute,
            summary_options={
                "critical_days": exp.critical_days,
                "warning_days": exp.warning_days,
                "caution_days": exp.caution_days,
                "soon_days": exp.soon_days,
            },
        )

    async def run_sweep(self, today: date | None = None) -> SweepReport:
        """Classify the inventory and bring pending reminders in line with it.

        Raises:
            StorageError: If the inventory cannot be read.
            BackendError: If the backend cannot report its pending reminders.
        """
        today = today or self._clock().date()
        items = self._store.list_items()
        report = SweepReport(
            today=today,
            summary=summarize(items, today, **self._summary_options),
        )

        if not await self._backend.request_permission():
            logger.info("Reminders not permitted; sweep only classified %d items", len(items))
            return report
        report.permitted = True

        existing = await self._backend.list_pending()
        await self._ensure_daily_check(existing, report)
        # Only reminders firing today can match an item at its lead-day mark
        delivered = await self._backend.list_delivered(
            since=datetime.combine(today, time.min)
        )

        plan = plan_reminders(
            items,
            existing,
            today,
            lead_days=self._lead_days,
            hour=self._hour,
            minute=self._minute,
            delivered=delivered,
        )
        report.plan = plan

        # Items are independent of each other; one failure must not stop the rest
        await asyncio.gather(
            *(self._cancel(rid, report) for rid in plan.to_cancel),
            *(self._schedule(p, report) for p in plan.to_schedule),
        )

        logger.info(
            "Sweep %s: %d items, %d scheduled, %d cancelled, %d unchanged, %d failed",
            today.isoformat(),
            len(items),
            len(report.scheduled),
            len(report.cancelled),
            len(plan.unchanged),
            len(report.failures),
        )
        return report

    async def cancel_for_item(self, item_id: str) -> bool:
        """Cancel an item's expiration reminder regardless of its dates.

        Returns:
            False if the backend call failed (the failure is logged).
        """
        rid = reminder_id(item_id)
        try:
            await self._backend.cancel(rid)
        except BackendError as e:
            logger.warning("Could not cancel reminder %s: %s", rid, e.message)
            return False
        logger.info("Cancelled reminder %s", rid)
        return True

    async def _ensure_daily_check(
        self, existing: list[ReminderRecord], report: SweepReport
    ) -> None:
        if any(r.reminder_id == DAILY_CHECK_ID for r in existing):
            return

        now = self._clock()
        fire_at = datetime.combine(now.date(), time(self._hour, self._minute))
        if fire_at <= now:
            fire_at += timedelta(days=1)
        try:
            await self._backend.schedule(
                DAILY_CHECK_ID,
                fire_at,
                DAILY_CHECK_TITLE,
                DAILY_CHECK_BODY,
                repeats_daily=True,
            )
        except BackendError as e:
            logger.warning("Could not schedule daily check: %s", e.message)
            report.failures[DAILY_CHECK_ID] = e.message
            return
        logger.info("Daily check scheduled for %s", fire_at.strftime("%H:%M"))

    async def _cancel(self, rid: str, report: SweepReport) -> None:
        try:
            await self._backend.cancel(rid)
        except BackendError as e:
            logger.warning("Could not cancel reminder %s: %s", rid, e.message)
            report.failures[rid] = e.message
            return
        report.cancelled.append(rid)

    async def _schedule(self, planned: PlannedReminder, report: SweepReport) -> None:
        try:
            await self._backend.schedule(
                planned.reminder_id,
                planned.fire_at,
                planned.title,
                planned.body,
            )
        except BackendError as e:
            logger.warning(
                "Could not schedule reminder %s: %s", planned.reminder_id, e.message
            )
            report.failures[planned.reminder_id] = e.message
            return
        report.scheduled.append(planned.reminder_id)
