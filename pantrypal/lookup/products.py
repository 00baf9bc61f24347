"""Barcode lookup against Open Food Facts."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

import requests

from ..errors import NetworkError, NotFoundError, ParseError, ValidationError

logger = logging.getLogger(__name__)


@dataclass
class ProductInfo:
    name: str | None = None
    brands: str | None = None
    quantity: str | None = None
    image_url: str | None = None

    @property
    def display_name(self) -> str | None:
        """Product name, falling back to the brand."""
        if self.name:
            return self.name
        if self.brands:
            return self.brands
        return None


class ProductLookup:
    """Single request/response client, no retries."""

    def __init__(
        self,
        base_url: str = "https://world.openfoodfacts.org/api/v0/product",
        timeout: float = 10,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    async def lookup(self, barcode: str) -> ProductInfo:
        """Fetch product details for a barcode.

        Raises:
            ValidationError: If the barcode is not numeric.
            NotFoundError: If the database has no such product.
            NetworkError: If the request failed or returned a non-200 status.
            ParseError: If the response body is not the expected JSON.
        """
        barcode = barcode.strip()
        if not barcode.isdigit():
            raise ValidationError(f"Invalid barcode: {barcode!r}")

        url = f"{self._base_url}/{barcode}.json"
        try:
            response = await asyncio.to_thread(
                self._session.get, url, timeout=self._timeout
            )
        except requests.RequestException as e:
            logger.warning("Product lookup for %s failed: %s", barcode, e)
            raise NetworkError("Network error: could not reach the product database") from e

        if response.status_code != 200:
            raise NetworkError(f"HTTP Error: {response.status_code}")

        try:
            data = response.json()
            status = int(data["status"])
            product = data.get("product")
        except (ValueError, KeyError, TypeError) as e:
            raise ParseError("Failed to parse product data") from e

        if status == 0 or not product:
            raise NotFoundError("Product not found")
        if not isinstance(product, dict):
            raise ParseError("Failed to parse product data")

        return ProductInfo(
            name=product.get("product_name") or None,
            brands=product.get("brands") or None,
            quantity=product.get("quantity") or None,
            image_url=product.get("image_url") or None,
        )
