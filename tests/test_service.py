"""Tests for inventory mutations keeping reminders in sync."""

from datetime import date, datetime, timedelta

import pytest

from pantrypal.db import InventoryDB
from pantrypal.errors import ValidationError
from pantrypal.models import StorageLocation
from pantrypal.planner import DAILY_CHECK_ID
from pantrypal.reminders.sqlite import SQLiteReminderBackend
from pantrypal.service import PantryService
from pantrypal.sweep import ReminderSweeper

TODAY = date(2024, 1, 1)


@pytest.fixture
def env(tmp_path):
    store = InventoryDB(tmp_path / "pantry.db")
    backend = SQLiteReminderBackend(tmp_path / "pantry.db")
    sweeper = ReminderSweeper(store, backend, clock=lambda: datetime(2024, 1, 1, 8, 0))
    yield store, backend, PantryService(store, sweeper)
    store.close()
    backend.close()


async def _item_reminders(backend):
    return sorted(
        r.reminder_id for r in await backend.list_pending()
        if r.reminder_id != DAILY_CHECK_ID
    )


@pytest.mark.asyncio
async def test_add_item_schedules_reminder(env):
    store, backend, service = env
    item, report = await service.add_item(
        "Milk", "1L", TODAY + timedelta(days=3), StorageLocation.FRIDGE, today=TODAY
    )

    assert store.get_item(item.id).name == "Milk"
    assert report.scheduled == [f"expiration_{item.id}"]
    assert await _item_reminders(backend) == [f"expiration_{item.id}"]


@pytest.mark.asyncio
async def test_add_item_validation_writes_nothing(env):
    store, backend, service = env
    with pytest.raises(ValidationError, match="item name"):
        await service.add_item("", "1L", TODAY, today=TODAY)
    with pytest.raises(ValidationError, match="past"):
        await service.add_item("Milk", "1L", TODAY - timedelta(days=1), today=TODAY)

    assert store.list_items() == []
    assert await backend.list_pending() == []


@pytest.mark.asyncio
async def test_update_item_moves_reminder(env):
    store, backend, service = env
    item, _ = await service.add_item("Milk", "1L", TODAY + timedelta(days=3), today=TODAY)

    item.expiration_date = TODAY + timedelta(days=12)
    report = await service.update_item(item, today=TODAY)

    assert report.cancelled == [f"expiration_{item.id}"]
    assert await _item_reminders(backend) == []


@pytest.mark.asyncio
async def test_update_unknown_item_rejected(env):
    _, _, service = env
    from pantrypal.models import FoodItem

    ghost = FoodItem(name="Ghost", quantity="1", expiration_date=TODAY)
    with pytest.raises(ValidationError, match="No item"):
        await service.update_item(ghost, today=TODAY)


@pytest.mark.asyncio
async def test_delete_item_cancels_reminder(env):
    store, backend, service = env
    item, _ = await service.add_item("Milk", "1L", TODAY + timedelta(days=3), today=TODAY)

    await service.delete_item(item.id, today=TODAY)

    assert store.get_item(item.id) is None
    assert await _item_reminders(backend) == []


@pytest.mark.asyncio
async def test_delete_far_future_item_still_cancels(env):
    """A reminder keyed to the item is cancelled whatever its dates."""
    store, backend, service = env
    item, _ = await service.add_item("Rice", "2kg", TODAY + timedelta(days=90), today=TODAY)
    await backend.schedule(
        f"expiration_{item.id}", datetime(2024, 3, 28, 9, 0), "t", "b"
    )

    await service.delete_item(item.id, today=TODAY)
    assert await _item_reminders(backend) == []


@pytest.mark.asyncio
async def test_update_item_trims_and_validates_like_add(env):
    store, _, service = env
    item, _ = await service.add_item("Milk", "1L", TODAY + timedelta(days=9), today=TODAY)

    item.name = "  Oat milk  "
    await service.update_item(item, today=TODAY)
    assert store.get_item(item.id).name == "Oat milk"

    item.quantity = "   "
    with pytest.raises(ValidationError, match="Please enter a quantity"):
        await service.update_item(item, today=TODAY)
    assert store.get_item(item.id).quantity == "1L"
