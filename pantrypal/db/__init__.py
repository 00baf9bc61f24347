"""SQLite database module for the food inventory and pending reminders."""

from .inventory import InventoryDB
from .reminders import ReminderDB
from .schema import ensure_schema

__all__ = [
    "InventoryDB",
    "ReminderDB",
    "ensure_schema",
]
