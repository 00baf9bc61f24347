"""Reminder backend base class, data types, and factory."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..config import PantryConfig


class ReminderStatus(Enum):
    PENDING = "pending"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


@dataclass
class ReminderRecord:
    reminder_id: str
    fire_at: datetime
    title: str
    body: str
    repeats_daily: bool = False
    status: ReminderStatus = ReminderStatus.PENDING


class ReminderBackend(ABC):
    """Abstract base for whatever actually fires timed alerts.

    Implementations must treat ``schedule`` on an existing id as an
    overwrite, so there is never more than one live record per id.
    """

    @abstractmethod
    async def request_permission(self) -> bool:
        """Return True if reminders may be scheduled."""
        ...

    @abstractmethod
    async def schedule(
        self,
        reminder_id: str,
        fire_at: datetime,
        title: str,
        body: str,
        *,
        repeats_daily: bool = False,
    ) -> ReminderRecord:
        ...

    @abstractmethod
    async def cancel(self, reminder_id: str) -> None:
        """Cancel a pending reminder. Unknown ids are ignored."""
        ...

    @abstractmethod
    async def list_pending(self) -> list[ReminderRecord]:
        ...

    async def cancel_all(self) -> int:
        """Cancel every pending reminder and return how many were cancelled."""
        pending = await self.list_pending()
        for record in pending:
            await self.cancel(record.reminder_id)
        return len(pending)

    async def list_delivered(
        self, since: datetime | None = None
    ) -> list[ReminderRecord]:
        """One-shot reminders that already fired, at or after ``since``.

        Backends that cannot tell keep this default.
        """
        return []

    async def deliver_due(self, now: datetime) -> list[ReminderRecord]:
        """Fire reminders whose time has come.

        Backends backed by an OS facility deliver on their own and keep
        this default.
        """
        return []


def create_backend(config: PantryConfig) -> ReminderBackend:
    """Create a reminder backend based on configuration."""
    backend_name = config.reminders.backend

    match backend_name:
        case "sqlite":
            from .sqlite import SQLiteReminderBackend

            return SQLiteReminderBackend(
                db_path=config.database.path,
                enabled=config.reminders.enabled,
            )
        case "null" | "none":
            from .null import NullReminderBackend

            return NullReminderBackend()
        case _:
            raise ValueError(
                f"Unknown reminder backend: {backend_name!r}  "
                f"(choose from sqlite / null)"
            )
