"""Food inventory CRUD operations."""

from __future__ import annotations

import sqlite3
from datetime import date, datetime
from pathlib import Path

from ..errors import StorageError
from ..models import FoodItem, StorageLocation
from .schema import ensure_schema


class InventoryDB:
    """Manages the food_items table."""

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

    def list_items(self, location: StorageLocation | None = None) -> list[FoodItem]:
        """Return all items, soonest expiration first."""
        conn = self._get_conn()
        try:
            if location is None:
                rows = conn.execute(
                    "SELECT * FROM food_items ORDER BY expiration_date, name"
                ).fetchall()
            else:
                rows = conn.execute(
                    """SELECT * FROM food_items
                       WHERE storage_location = ?
                       ORDER BY expiration_date, name""",
                    (location.value,),
                ).fetchall()
        except sqlite3.Error as e:
            raise StorageError(f"Could not read inventory: {e}") from e
        return [_row_to_item(r) for r in rows]

    def get_item(self, item_id: str) -> FoodItem | None:
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT * FROM food_items WHERE id = ?", (item_id,)
            ).fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"Could not read item {item_id}: {e}") from e
        return _row_to_item(row) if row else None

    def upsert(self, item: FoodItem) -> None:
        """Insert the item, or replace every field of an existing one."""
        conn = self._get_conn()
        try:
            conn.execute(
                """INSERT INTO food_items
                   (id, name, quantity, expiration_date, storage_location, date_added)
                   VALUES (?, ?, ?, ?, ?, ?)
                   ON CONFLICT(id) DO UPDATE SET
                       name = excluded.name,
                       quantity = excluded.quantity,
                       expiration_date = excluded.expiration_date,
                       storage_location = excluded.storage_location""",
                (
                    item.id,
                    item.name,
                    item.quantity,
                    item.expiration_date.isoformat(),
                    item.storage_location.value,
                    item.date_added.isoformat(timespec="seconds"),
                ),
            )
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StorageError(f"Could not save {item.name}: {e}") from e

    def delete(self, item_id: str) -> bool:
        """Delete an inventory item by ID.

        Returns:
            True if a row was removed.
        """
        conn = self._get_conn()
        try:
            cur = conn.execute("DELETE FROM food_items WHERE id = ?", (item_id,))
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StorageError(f"Could not delete item {item_id}: {e}") from e
        return cur.rowcount > 0


def _row_to_item(row: sqlite3.Row) -> FoodItem:
    return FoodItem(
        id=row["id"],
        name=row["name"],
        quantity=row["quantity"],
        expiration_date=date.fromisoformat(row["expiration_date"]),
        storage_location=StorageLocation(row["storage_location"]),
        date_added=datetime.fromisoformat(row["date_added"]),
    )
