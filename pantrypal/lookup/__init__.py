"""Clients for the external product database and recipe catalog."""

from .products import ProductInfo, ProductLookup
from .recipes import Recipe, RecipeCatalog, RecipeIngredient

__all__ = [
    "ProductInfo",
    "ProductLookup",
    "Recipe",
    "RecipeCatalog",
    "RecipeIngredient",
]
