"""Reminder backend persisted in the pantry SQLite database."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timedelta
from pathlib import Path

from ..db.reminders import ReminderDB
from ..errors import BackendError, StorageError
from . import ReminderBackend, ReminderRecord, ReminderStatus

logger = logging.getLogger(__name__)


class SQLiteReminderBackend(ReminderBackend):
    """Stores reminders in the ``reminders`` table.

    Nothing fires by itself: ``deliver_due`` is polled by the scheduler.
    """

    def __init__(
        self,
        db_path: str | Path = "~/.config/pantrypal/pantry.db",
        *,
        enabled: bool = True,
        db: ReminderDB | None = None,
    ) -> None:
        self._db = db if db is not None else ReminderDB(db_path)
        self._enabled = enabled

    def close(self) -> None:
        self._db.close()

    async def request_permission(self) -> bool:
        return self._enabled

    async def schedule(
        self,
        reminder_id: str,
        fire_at: datetime,
        title: str,
        body: str,
        *,
        repeats_daily: bool = False,
    ) -> ReminderRecord:
        record = ReminderRecord(
            reminder_id=reminder_id,
            fire_at=fire_at.replace(microsecond=0),
            title=title,
            body=body,
            repeats_daily=repeats_daily,
        )
        try:
            self._db.upsert(record)
        except StorageError as e:
            raise BackendError(f"Could not schedule {reminder_id}: {e.message}") from e
        return record

    async def cancel(self, reminder_id: str) -> None:
        try:
            self._db.cancel(reminder_id)
        except StorageError as e:
            raise BackendError(f"Could not cancel {reminder_id}: {e.message}") from e

    async def cancel_all(self) -> int:
        try:
            return self._db.cancel_all()
        except StorageError as e:
            raise BackendError(f"Could not clear reminders: {e.message}") from e

    async def list_pending(self) -> list[ReminderRecord]:
        try:
            return self._db.list_by_status(ReminderStatus.PENDING)
        except StorageError as e:
            raise BackendError(f"Could not list reminders: {e.message}") from e

    async def list_delivered(
        self, since: datetime | None = None
    ) -> list[ReminderRecord]:
        try:
            return self._db.list_by_status(ReminderStatus.DELIVERED, since)
        except StorageError as e:
            raise BackendError(f"Could not list reminders: {e.message}") from e

    async def deliver_due(self, now: datetime) -> list[ReminderRecord]:
        """Deliver every pending reminder that is due.

        One-shot reminders become delivered. Repeating reminders stay
        pending and move to their next occurrence after ``now``.
        A record whose state cannot be updated is skipped and stays
        pending, so it is retried on the next call.

        Raises:
            BackendError: If the due reminders cannot be read.
        """
        try:
            due = self._db.due(now)
        except StorageError as e:
            raise BackendError(f"Could not deliver reminders: {e.message}") from e

        delivered: list[ReminderRecord] = []
        for record in due:
            try:
                if record.repeats_daily:
                    next_fire = record.fire_at
                    while next_fire <= now:
                        next_fire += timedelta(days=1)
                    self._db.reschedule(record.reminder_id, next_fire)
                    delivered.append(record)
                else:
                    self._db.mark_delivered(record.reminder_id)
                    delivered.append(
                        replace(record, status=ReminderStatus.DELIVERED)
                    )
            except StorageError as e:
                logger.warning(
                    "Could not deliver reminder %s: %s", record.reminder_id, e.message
                )

        if delivered:
            logger.debug("Delivered %d reminder(s)", len(delivered))
        return delivered
