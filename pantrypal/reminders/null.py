"""Reminder backend for targets that cannot fire alerts."""

from __future__ import annotations

from datetime import datetime

from . import ReminderBackend, ReminderRecord, ReminderStatus


class NullReminderBackend(ReminderBackend):
    """Never grants permission; every call is a no-op."""

    async def request_permission(self) -> bool:
        return False

    async def schedule(
        self,
        reminder_id: str,
        fire_at: datetime,
        title: str,
        body: str,
        *,
        repeats_daily: bool = False,
    ) -> ReminderRecord:
        return ReminderRecord(
            reminder_id=reminder_id,
            fire_at=fire_at,
            title=title,
            body=body,
            repeats_daily=repeats_daily,
            status=ReminderStatus.CANCELLED,
        )

    async def cancel(self, reminder_id: str) -> None:
        return None

    async def list_pending(self) -> list[ReminderRecord]:
        return []
