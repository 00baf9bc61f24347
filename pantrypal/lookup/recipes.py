"""Recipe search by on-hand ingredients (Spoonacular findByIngredients)."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

import requests

from ..errors import ConfigError, NetworkError, ParseError, ValidationError

logger = logging.getLogger(__name__)


@dataclass
class RecipeIngredient:
    id: int
    name: str
    amount: float = 0.0
    unit: str = ""


@dataclass
class Recipe:
    id: int
    title: str
    image: str | None = None
    used_ingredients: list[RecipeIngredient] = field(default_factory=list)
    missed_ingredients: list[RecipeIngredient] = field(default_factory=list)

    @property
    def used_count(self) -> int:
        return len(self.used_ingredients)

    @property
    def missed_count(self) -> int:
        return len(self.missed_ingredients)


class RecipeCatalog:
    """Finds recipes that use the given ingredients. One request, no retries."""

    def __init__(
        self,
        api_key: str = "",
        base_url: str = "https://api.spoonacular.com/recipes/findByIngredients",
        *,
        number: int = 10,
        ranking: int = 2,
        ignore_pantry: bool = True,
        timeout: float = 12,
        session: requests.Session | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._number = number
        self._ranking = ranking  # 2 = minimize missing ingredients
        self._ignore_pantry = ignore_pantry
        self._timeout = timeout
        self._session = session or requests.Session()

    async def find_by_ingredients(self, names: list[str]) -> list[Recipe]:
        """Search for recipes using the given ingredient names.

        Raises:
            ConfigError: If no API key is configured.
            ValidationError: If no ingredient names were given.
            NetworkError: If the request failed or returned a non-200 status.
            ParseError: If the response body is not the expected JSON.
        """
        if not self._api_key:
            raise ConfigError(
                "Spoonacular API key is not set. "
                "Check the config file or the SPOONACULAR_API_KEY environment variable."
            )

        cleaned = [n.strip() for n in names if n.strip()]
        if not cleaned:
            raise ValidationError("Select at least one ingredient")

        params = {
            "apiKey": self._api_key,
            "ingredients": ",".join(cleaned),
            "number": self._number,
            "ranking": self._ranking,
            "ignorePantry": str(self._ignore_pantry).lower(),
        }
        try:
            response = await asyncio.to_thread(
                self._session.get,
                self._base_url,
                params=params,
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.warning("Recipe search failed: %s", e)
            raise NetworkError("Network error: could not reach the recipe catalog") from e

        if response.status_code != 200:
            raise NetworkError(f"HTTP Error: {response.status_code}")

        try:
            return _parse_recipes(response.json())
        except (ValueError, KeyError, TypeError) as e:
            raise ParseError("Failed to parse recipe data") from e


def _parse_ingredient(raw: dict) -> RecipeIngredient:
    return RecipeIngredient(
        id=int(raw["id"]),
        name=raw["name"],
        amount=float(raw.get("amount", 0.0)),
        unit=raw.get("unit", ""),
    )


def _parse_recipes(data) -> list[Recipe]:
    if not isinstance(data, list):
        raise TypeError("expected a JSON array")
    return [
        Recipe(
            id=int(raw["id"]),
            title=raw["title"],
            image=raw.get("image") or None,
            used_ingredients=[
                _parse_ingredient(i) for i in raw.get("usedIngredients", [])
            ],
            missed_ingredients=[
                _parse_ingredient(i) for i in raw.get("missedIngredients", [])
            ],
        )
        for raw in data
    ]
