"""Tests for the recipe catalog client (mocked HTTP)."""

import json
from unittest.mock import MagicMock

import pytest
import requests

from pantrypal.errors import ConfigError, NetworkError, ParseError, PantryError, ValidationError
from pantrypal.lookup.recipes import RecipeCatalog

SAMPLE = [
    {
        "id": 641803,
        "title": "Easy Omelette",
        "image": "https://img.example/641803.jpg",
        "usedIngredientCount": 2,
        "missedIngredientCount": 1,
        "usedIngredients": [
            {"id": 1123, "amount": 2.0, "unit": "", "name": "eggs"},
            {"id": 1077, "amount": 0.25, "unit": "cup", "name": "milk"},
        ],
        "missedIngredients": [
            {"id": 1001, "amount": 1.0, "unit": "tbsp", "name": "butter"},
        ],
    }
]


def _session(status_code=200, payload=None, json_error=None, raises=None):
    response = MagicMock()
    response.status_code = status_code
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    session = MagicMock()
    if raises is not None:
        session.get.side_effect = raises
    else:
        session.get.return_value = response
    return session


@pytest.mark.asyncio
async def test_requires_api_key():
    catalog = RecipeCatalog(api_key="")
    with pytest.raises(ConfigError, match="API key") as exc:
        await catalog.find_by_ingredients(["eggs"])
    assert isinstance(exc.value, PantryError)


@pytest.mark.asyncio
async def test_requires_ingredients():
    catalog = RecipeCatalog(api_key="k", session=_session(payload=[]))
    with pytest.raises(ValidationError, match="at least one ingredient"):
        await catalog.find_by_ingredients(["  ", ""])


@pytest.mark.asyncio
async def test_find_by_ingredients():
    session = _session(payload=json.loads(json.dumps(SAMPLE)))
    catalog = RecipeCatalog(api_key="k", session=session)

    recipes = await catalog.find_by_ingredients(["eggs", " milk "])

    assert len(recipes) == 1
    recipe = recipes[0]
    assert recipe.title == "Easy Omelette"
    assert recipe.used_count == 2
    assert recipe.missed_count == 1
    assert recipe.missed_ingredients[0].name == "butter"
    assert recipe.used_ingredients[1].unit == "cup"

    params = session.get.call_args.kwargs["params"]
    assert params["ingredients"] == "eggs,milk"
    assert params["apiKey"] == "k"
    assert params["number"] == 10
    assert params["ranking"] == 2
    assert params["ignorePantry"] == "true"


@pytest.mark.asyncio
async def test_http_error():
    catalog = RecipeCatalog(api_key="k", session=_session(status_code=402))
    with pytest.raises(NetworkError, match="HTTP Error: 402"):
        await catalog.find_by_ingredients(["eggs"])


@pytest.mark.asyncio
async def test_network_error():
    catalog = RecipeCatalog(api_key="k", session=_session(raises=requests.Timeout("read timed out")))
    with pytest.raises(NetworkError, match="recipe catalog"):
        await catalog.find_by_ingredients(["eggs"])


@pytest.mark.asyncio
async def test_parse_error_on_wrong_shape():
    catalog = RecipeCatalog(api_key="k", session=_session(payload={"message": "oops"}))
    with pytest.raises(ParseError, match="Failed to parse recipe data"):
        await catalog.find_by_ingredients(["eggs"])


@pytest.mark.asyncio
async def test_parse_error_on_missing_fields():
    catalog = RecipeCatalog(api_key="k", session=_session(payload=[{"title": "No id"}]))
    with pytest.raises(ParseError):
        await catalog.find_by_ingredients(["eggs"])
