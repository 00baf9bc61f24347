"""Inventory mutations that keep reminders in sync."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING

from .errors import ValidationError
from .models import FoodItem, StorageLocation, clean_item_fields, new_food_item
from .sweep import ReminderSweeper, SweepReport

if TYPE_CHECKING:
    from .db import InventoryDB

logger = logging.getLogger(__name__)


class PantryService:
    """Create, update and delete items, re-running the sweep after each."""

    def __init__(self, store: InventoryDB, sweeper: ReminderSweeper) -> None:
        self._store = store
        self._sweeper = sweeper

    async def add_item(
        self,
        name: str,
        quantity: str,
        expiration_date: date,
        storage_location: StorageLocation = StorageLocation.PANTRY,
        *,
        today: date | None = None,
    ) -> tuple[FoodItem, SweepReport]:
        """Validate and store a new item.

        Raises:
            ValidationError: Before anything is written, on bad input.
            StorageError: If the item cannot be saved.
        """
        item = new_food_item(
            name, quantity, expiration_date, storage_location, today=today
        )
        self._store.upsert(item)
        logger.info("Added %s (%s) expiring %s", item.name, item.id, item.expiration_date)
        report = await self._sweeper.run_sweep(today)
        return item, report

    async def update_item(
        self, item: FoodItem, *, today: date | None = None
    ) -> SweepReport:
        """Replace a stored item with ``item`` (matched by id).

        Raises:
            ValidationError: If the item does not exist or has empty fields.
        """
        if self._store.get_item(item.id) is None:
            raise ValidationError(f"No item with id {item.id}")
        item.name, item.quantity = clean_item_fields(item.name, item.quantity)

        self._store.upsert(item)
        logger.info("Updated %s (%s)", item.name, item.id)
        return await self._sweeper.run_sweep(today)

    async def delete_item(
        self, item_id: str, *, today: date | None = None
    ) -> SweepReport:
        """Delete an item and cancel its reminder straight away."""
        removed = self._store.delete(item_id)
        if removed:
            logger.info("Deleted item %s", item_id)
        await self._sweeper.cancel_for_item(item_id)
        return await self._sweeper.run_sweep(today)
