"""Reminder planning: which expiration reminders should exist right now."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta

from .expiry import days_until, start_of_day
from .models import FoodItem
from .reminders import ReminderRecord

EXPIRATION_KIND = "expiration"

# Repeating reminder owned by the sweep, never by the planner
DAILY_CHECK_ID = "dailyExpirationCheck"
DAILY_CHECK_TITLE = "PantryPal Daily Check"
DAILY_CHECK_BODY = "Checking for items expiring soon..."

EXPIRATION_TITLE = "Item Expiring Soon!"


def reminder_id(item_id: str, kind: str = EXPIRATION_KIND) -> str:
    """Deterministic reminder id for an item.

    Both the schedule and the cancel paths must go through this.
    """
    return f"{kind}_{item_id}"


def item_id_from_reminder(rid: str, kind: str = EXPIRATION_KIND) -> str | None:
    prefix = f"{kind}_"
    if rid.startswith(prefix):
        return rid[len(prefix):]
    return None


def reminder_fire_at(
    expiration: date | datetime, lead_days: int = 3, hour: int = 9, minute: int = 0
) -> datetime:
    """Local wall-clock time ``lead_days`` before expiration."""
    fire_day = start_of_day(expiration) - timedelta(days=lead_days)
    return datetime.combine(fire_day, time(hour, minute))


def expiration_body(item: FoodItem, lead_days: int = 3) -> str:
    return f"Heads up! Your {item.name} is expiring in {lead_days} days."


@dataclass
class PlannedReminder:
    reminder_id: str
    item_id: str
    fire_at: datetime
    title: str
    body: str


@dataclass
class ReconciliationPlan:
    """Difference between the reminders we want and the ones that exist.

    ``to_schedule`` overwrites any existing record with the same id.
    """

    to_schedule: list[PlannedReminder] = field(default_factory=list)
    to_cancel: list[str] = field(default_factory=list)
    unchanged: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.to_schedule and not self.to_cancel


def plan_reminders(
    items: list[FoodItem],
    existing: list[ReminderRecord],
    today: date | datetime,
    *,
    lead_days: int = 3,
    hour: int = 9,
    minute: int = 0,
    delivered: list[ReminderRecord] | None = None,
) -> ReconciliationPlan:
    """Build the reconciliation plan for one sweep.

    An item qualifies only when it is exactly ``lead_days`` days from
    expiring today. Items past that mark are not caught up.
    Existing records that are not expiration reminders are ignored.
    A ``delivered`` record with the wanted fire time already did its job
    and is never scheduled again; delivered records are never cancelled.
    """
    fired: dict[str, datetime] = {
        r.reminder_id: r.fire_at for r in delivered or ()
    }
    live: dict[str, ReminderRecord] = {
        r.reminder_id: r
        for r in existing
        if item_id_from_reminder(r.reminder_id) is not None
    }

    plan = ReconciliationPlan()
    wanted: set[str] = set()

    for item in items:
        if days_until(item.expiration_date, today) != lead_days:
            continue

        rid = reminder_id(item.id)
        wanted.add(rid)
        fire_at = reminder_fire_at(item.expiration_date, lead_days, hour, minute)
        if rid not in live and fired.get(rid) == fire_at:
            plan.unchanged.append(rid)
            continue

        body = expiration_body(item, lead_days)

        current = live.get(rid)
        if current is not None and current.fire_at == fire_at and current.body == body:
            plan.unchanged.append(rid)
            continue

        plan.to_schedule.append(
            PlannedReminder(
                reminder_id=rid,
                item_id=item.id,
                fire_at=fire_at,
                title=EXPIRATION_TITLE,
                body=body,
            )
        )

    plan.to_cancel = sorted(rid for rid in live if rid not in wanted)
    return plan
