"""Kitchen inventory tracker with expiration reminders."""

from .config import (
    DatabaseConfig,
    ExpiryConfig,
    PantryConfig,
    ProductLookupConfig,
    RecipeConfig,
    ReminderConfig,
    load_config,
)
from .errors import (
    BackendError,
    ConfigError,
    LookupFailed,
    NetworkError,
    NotFoundError,
    PantryError,
    ParseError,
    StorageError,
    ValidationError,
)
from .expiry import (
    InventorySummary,
    Urgency,
    classify,
    days_until,
    group_by_location,
    is_expiring_soon,
    summarize,
)
from .models import FoodItem, StorageLocation, clean_item_fields, new_food_item
from .planner import ReconciliationPlan, plan_reminders, reminder_id
from .reminders import ReminderBackend, ReminderRecord, ReminderStatus, create_backend
from .service import PantryService
from .sweep import ReminderSweeper, SweepReport

__all__ = [
    "FoodItem",
    "StorageLocation",
    "new_food_item",
    "clean_item_fields",
    "Urgency",
    "InventorySummary",
    "classify",
    "days_until",
    "is_expiring_soon",
    "summarize",
    "group_by_location",
    "ReconciliationPlan",
    "plan_reminders",
    "reminder_id",
    "ReminderBackend",
    "ReminderRecord",
    "ReminderStatus",
    "create_backend",
    "ReminderSweeper",
    "SweepReport",
    "PantryService",
    "PantryError",
    "StorageError",
    "BackendError",
    "ConfigError",
    "ValidationError",
    "LookupFailed",
    "NotFoundError",
    "NetworkError",
    "ParseError",
    "PantryConfig",
    "DatabaseConfig",
    "ExpiryConfig",
    "ReminderConfig",
    "ProductLookupConfig",
    "RecipeConfig",
    "load_config",
]
