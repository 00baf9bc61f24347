"""Storage for scheduled reminders and their delivery state."""

from __future__ import annotations

import sqlite3
from datetime import datetime
from pathlib import Path

from ..errors import StorageError
from ..reminders import ReminderRecord, ReminderStatus
from .schema import ensure_schema


def _ts(value: datetime) -> str:
    return value.isoformat(timespec="seconds")


class ReminderDB:
    """Manages the reminders table."""

    def __init__(self, db_path: str | Path = "~/.config/pantrypal/pantry.db") -> None:
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None

    def _get_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = ensure_schema(self._db_path)
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def _write(self, sql: str, params: tuple) -> int:
        conn = self._get_conn()
        try:
            cur = conn.execute(sql, params)
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StorageError(f"Could not update reminders: {e}") from e
        return cur.rowcount

    def _read(self, sql: str, params: tuple = ()) -> list[ReminderRecord]:
        conn = self._get_conn()
        try:
            rows = conn.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise StorageError(f"Could not read reminders: {e}") from e
        return [_row_to_record(r) for r in rows]

    def upsert(self, record: ReminderRecord) -> None:
        """Write a pending reminder, overwriting any record with the same id."""
        self._write(
            """INSERT INTO reminders
               (reminder_id, fire_at, title, body, repeats_daily, status)
               VALUES (?, ?, ?, ?, ?, 'pending')
               ON CONFLICT(reminder_id) DO UPDATE SET
                   fire_at = excluded.fire_at,
                   title = excluded.title,
                   body = excluded.body,
                   repeats_daily = excluded.repeats_daily,
                   status = 'pending',
                   updated_at = datetime('now', 'localtime')""",
            (
                record.reminder_id,
                _ts(record.fire_at),
                record.title,
                record.body,
                int(record.repeats_daily),
            ),
        )

    def get(self, reminder_id: str) -> ReminderRecord | None:
        rows = self._read(
            "SELECT * FROM reminders WHERE reminder_id = ?", (reminder_id,)
        )
        return rows[0] if rows else None

    def cancel(self, reminder_id: str) -> bool:
        """Move a pending reminder to cancelled.

        Returns:
            True if a pending reminder was cancelled.
        """
        count = self._write(
            """UPDATE reminders
               SET status = 'cancelled',
                   updated_at = datetime('now', 'localtime')
               WHERE reminder_id = ? AND status = 'pending'""",
            (reminder_id,),
        )
        return count > 0

    def cancel_all(self) -> int:
        return self._write(
            """UPDATE reminders
               SET status = 'cancelled',
                   updated_at = datetime('now', 'localtime')
               WHERE status = 'pending'""",
            (),
        )

    def list_by_status(
        self, status: ReminderStatus, since: datetime | None = None
    ) -> list[ReminderRecord]:
        """Records in ``status``, optionally only those firing at or after ``since``."""
        if since is None:
            return self._read(
                "SELECT * FROM reminders WHERE status = ? ORDER BY fire_at, reminder_id",
                (status.value,),
            )
        return self._read(
            """SELECT * FROM reminders
               WHERE status = ? AND fire_at >= ?
               ORDER BY fire_at, reminder_id""",
            (status.value, _ts(since)),
        )

    def due(self, now: datetime) -> list[ReminderRecord]:
        """Pending reminders whose fire_at is at or before ``now``."""
        return self._read(
            """SELECT * FROM reminders
               WHERE status = 'pending' AND fire_at <= ?
               ORDER BY fire_at, reminder_id""",
            (_ts(now),),
        )

    def mark_delivered(self, reminder_id: str) -> None:
        self._write(
            """UPDATE reminders
               SET status = 'delivered',
                   updated_at = datetime('now', 'localtime')
               WHERE reminder_id = ? AND status = 'pending'""",
            (reminder_id,),
        )

    def reschedule(self, reminder_id: str, fire_at: datetime) -> None:
        """Move a pending reminder's fire time (used for repeating reminders)."""
        self._write(
            """UPDATE reminders
               SET fire_at = ?,
                   updated_at = datetime('now', 'localtime')
               WHERE reminder_id = ? AND status = 'pending'""",
            (_ts(fire_at), reminder_id),
        )


def _row_to_record(row: sqlite3.Row) -> ReminderRecord:
    return ReminderRecord(
        reminder_id=row["reminder_id"],
        fire_at=datetime.fromisoformat(row["fire_at"]),
        title=row["title"],
        body=row["body"],
        repeats_daily=bool(row["repeats_daily"]),
        status=ReminderStatus(row["status"]),
    )
