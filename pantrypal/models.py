"""Data models for pantry items."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from .errors import ValidationError


class StorageLocation(Enum):
    PANTRY = "Pantry"
    FRIDGE = "Fridge"
    FREEZER = "Freezer"

    @classmethod
    def parse(cls, value: str) -> StorageLocation:
        """Accept either the display value or the member name, any case."""
        for loc in cls:
            if value.strip().lower() in (loc.value.lower(), loc.name.lower()):
                return loc
        raise ValidationError(
            f"Unknown storage location: {value!r} "
            f"(choose from {', '.join(loc.value for loc in cls)})"
        )


@dataclass
class FoodItem:
    """A single item in the kitchen inventory."""

    name: str
    quantity: str          # Free text: "250g", "1 carton", "3"
    expiration_date: date
    storage_location: StorageLocation = StorageLocation.PANTRY
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    date_added: datetime = field(default_factory=datetime.now)


def clean_item_fields(name: str, quantity: str) -> tuple[str, str]:
    """Trim an item's name and quantity, rejecting empty values.

    Raises:
        ValidationError: If either is empty after trimming.
    """
    trimmed_name = name.strip()
    trimmed_quantity = quantity.strip()

    if not trimmed_name:
        raise ValidationError("Please enter an item name")
    if not trimmed_quantity:
        raise ValidationError("Please enter a quantity")
    return trimmed_name, trimmed_quantity


def new_food_item(
    name: str,
    quantity: str,
    expiration_date: date,
    storage_location: StorageLocation = StorageLocation.PANTRY,
    *,
    today: date | None = None,
) -> FoodItem:
    """Validate user input and build a new FoodItem.

    Name and quantity are trimmed. Nothing is persisted here.

    Raises:
        ValidationError: If the name or quantity is empty, or the
            expiration date is already in the past.
    """
    today = today or date.today()
    trimmed_name, trimmed_quantity = clean_item_fields(name, quantity)
    if expiration_date < today:
        raise ValidationError("Expiration date must not be in the past")

    return FoodItem(
        name=trimmed_name,
        quantity=trimmed_quantity,
        expiration_date=expiration_date,
        storage_location=storage_location,
    )
