"""TOML configuration loader for the pantry tracker."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]


@dataclass
class DatabaseConfig:
    path: str = "~/.config/pantrypal/pantry.db"


@dataclass
class ExpiryConfig:
    critical_days: int = 3
    warning_days: int = 7
    # Equal to warning_days means no Caution band
    caution_days: int = 7
    soon_days: int = 7


@dataclass
class ReminderConfig:
    enabled: bool = True
    backend: str = "sqlite"
    lead_days: int = 3
    hour: int = 9
    minute: int = 0
    sweep_schedule: str = "0 9 * * *"
    delivery_interval: int = 60


@dataclass
class ProductLookupConfig:
    base_url: str = "https://world.openfoodfacts.org/api/v0/product"
    timeout: float = 10


@dataclass
class RecipeConfig:
    api_key: str = ""
    base_url: str = "https://api.spoonacular.com/recipes/findByIngredients"
    number: int = 10
    ranking: int = 2
    ignore_pantry: bool = True
    timeout: float = 12


@dataclass
class PantryConfig:
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    expiry: ExpiryConfig = field(default_factory=ExpiryConfig)
    reminders: ReminderConfig = field(default_factory=ReminderConfig)
    products: ProductLookupConfig = field(default_factory=ProductLookupConfig)
    recipes: RecipeConfig = field(default_factory=RecipeConfig)


def load_config(path: str | Path | None = None) -> PantryConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    The recipe API key and database path can be set via environment variables.
    """
    raw: dict = {}

    if path is not None:
        p = Path(path)
        if p.exists():
            if tomllib is None:
                raise ImportError(
                    "tomli is required on Python < 3.11: pip install tomli"
                )
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    dbs = raw.get("database", {})
    exp = raw.get("expiry", {})
    rem = raw.get("reminders", {})
    prd = raw.get("products", {})
    rcp = raw.get("recipes", {})

    # Resolve secrets: config file → environment variable
    recipe_api_key = rcp.get("api_key", "") or os.environ.get(
        "SPOONACULAR_API_KEY", ""
    )
    db_path = dbs.get("path", "") or os.environ.get(
        "PANTRYPAL_DB", DatabaseConfig.path
    )

    warning_days = exp.get("warning_days", 7)

    return PantryConfig(
        database=DatabaseConfig(path=db_path),
        expiry=ExpiryConfig(
            critical_days=exp.get("critical_days", 3),
            warning_days=warning_days,
            caution_days=exp.get("caution_days", warning_days),
            soon_days=exp.get("soon_days", 7),
        ),
        reminders=ReminderConfig(
            enabled=rem.get("enabled", True),
            backend=rem.get("backend", "sqlite"),
            lead_days=rem.get("lead_days", 3),
            hour=rem.get("hour", 9),
            minute=rem.get("minute", 0),
            sweep_schedule=rem.get("sweep_schedule", "0 9 * * *"),
            delivery_interval=rem.get("delivery_interval", 60),
        ),
        products=ProductLookupConfig(
            base_url=prd.get(
                "base_url", "https://world.openfoodfacts.org/api/v0/product"
            ),
            timeout=prd.get("timeout", 10),
        ),
        recipes=RecipeConfig(
            api_key=recipe_api_key,
            base_url=rcp.get(
                "base_url",
                "https://api.spoonacular.com/recipes/findByIngredients",
            ),
            number=rcp.get("number", 10),
            ranking=rcp.get("ranking", 2),
            ignore_pantry=rcp.get("ignore_pantry", True),
            timeout=rcp.get("timeout", 12),
        ),
    )
