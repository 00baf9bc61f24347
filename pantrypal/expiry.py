"""Expiration classification and inventory summaries."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from .models import FoodItem, StorageLocation


class Urgency(Enum):
    EXPIRED = "expired"
    CRITICAL = "critical"
    WARNING = "warning"
    CAUTION = "caution"
    SAFE = "safe"


def start_of_day(value: date | datetime) -> date:
    """Drop the time of day, if any."""
    if isinstance(value, datetime):
        return value.date()
    return value


def days_until(expiration: date | datetime, today: date | datetime) -> int:
    """Whole calendar days from ``today`` to ``expiration`` (negative if past)."""
    return (start_of_day(expiration) - start_of_day(today)).days


def classify(
    expiration: date | datetime,
    today: date | datetime,
    *,
    critical_days: int = 3,
    warning_days: int = 7,
    caution_days: int | None = None,
) -> Urgency:
    """Bucket an expiration date relative to today.

    < 0 days is EXPIRED, 0..critical_days CRITICAL, up to warning_days
    WARNING, up to caution_days CAUTION, anything later SAFE.
    """
    if caution_days is None:
        caution_days = warning_days

    days = days_until(expiration, today)
    if days < 0:
        return Urgency.EXPIRED
    if days <= critical_days:
        return Urgency.CRITICAL
    if days <= warning_days:
        return Urgency.WARNING
    if days <= caution_days:
        return Urgency.CAUTION
    return Urgency.SAFE


def is_expiring_soon(
    expiration: date | datetime, today: date | datetime, soon_days: int = 7
) -> bool:
    """True for 1..soon_days days out. Expired items and items due today are excluded."""
    return 0 < days_until(expiration, today) <= soon_days


def days_until_text(expiration: date | datetime, today: date | datetime) -> str:
    days = days_until(expiration, today)
    if days < 0:
        return "Expired"
    if days == 0:
        return "Today"
    if days == 1:
        return "Tomorrow"
    return f"{days} days"


@dataclass
class InventorySummary:
    """Counts shown on the home screen."""

    total: int = 0
    expiring_soon: int = 0
    by_urgency: dict[Urgency, int] = field(default_factory=dict)
    by_location: dict[StorageLocation, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "expiring_soon": self.expiring_soon,
            "by_urgency": {u.value: n for u, n in self.by_urgency.items()},
            "by_location": {loc.value: n for loc, n in self.by_location.items()},
        }


def summarize(
    items: list[FoodItem],
    today: date | datetime,
    *,
    critical_days: int = 3,
    warning_days: int = 7,
    caution_days: int | None = None,
    soon_days: int = 7,
) -> InventorySummary:
    """Count items by urgency and location, plus the expiring-soon figure."""
    urgencies = Counter(
        classify(
            item.expiration_date,
            today,
            critical_days=critical_days,
            warning_days=warning_days,
            caution_days=caution_days,
        )
        for item in items
    )
    locations = Counter(item.storage_location for item in items)

    return InventorySummary(
        total=len(items),
        expiring_soon=sum(
            1
            for item in items
            if is_expiring_soon(item.expiration_date, today, soon_days)
        ),
        by_urgency={u: urgencies.get(u, 0) for u in Urgency},
        by_location={loc: locations.get(loc, 0) for loc in StorageLocation},
    )


def group_by_location(
    items: list[FoodItem],
) -> dict[StorageLocation, list[FoodItem]]:
    """Group items per storage location, soonest expiration first."""
    groups: dict[StorageLocation, list[FoodItem]] = {
        loc: [] for loc in StorageLocation
    }
    for item in items:
        groups[item.storage_location].append(item)
    for group in groups.values():
        group.sort(key=lambda i: i.expiration_date)
    return groups


def recent_items(items: list[FoodItem], limit: int = 5) -> list[FoodItem]:
    """Most recently added items first."""
    return sorted(items, key=lambda i: i.date_added, reverse=True)[:limit]
