"""Keto recipe catalog API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from health_lover.domain.diets import RecipeFilters


class RecipeNotFoundError(LookupError):
    """Raised when the catalog has no record with the requested id."""


class RecipeCatalogClient(Protocol):
    """Interface for the external recipe catalog."""

    async def list_recipes(
        self, filters: RecipeFilters | None = None
    ) -> list[dict[str, object]]:
        """Return raw catalog records, optionally bounded by macros."""

    async def get_recipe(self, recipe_id: int) -> dict[str, object]:
        """Return one raw catalog record by numeric id."""


@dataclass
class HttpxRecipeCatalogClient(RecipeCatalogClient):
    """HTTPX-backed client for the RapidAPI keto catalog."""

    api_key: str
    base_url: str
    host: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, api_key: str, base_url: str, host: str) -> "HttpxRecipeCatalogClient":
        """Create a catalog client with a managed httpx session."""
        return cls(
            api_key=api_key,
            base_url=base_url,
            host=host,
            http_client=httpx.AsyncClient(),
        )

    def _headers(self) -> dict[str, str]:
        return {"x-rapidapi-key": self.api_key, "x-rapidapi-host": self.host}

    async def list_recipes(
        self, filters: RecipeFilters | None = None
    ) -> list[dict[str, object]]:
        """List catalog records."""
        params = filters.to_params() if filters else {}
        response = await self.http_client.get(
            f"{self.base_url}/",
            params=params,
            headers=self._headers(),
            timeout=15,
        )
        response.raise_for_status()
        payload = response.json()
        if not isinstance(payload, list):
            raise ValueError("Recipe catalog returned a non-list payload")
        return payload

    async def get_recipe(self, recipe_id: int) -> dict[str, object]:
        """Find a catalog record by id.

        The catalog has no per-record endpoint, so this scans the full listing.
        """
        for record in await self.list_recipes():
            if record.get("id") == recipe_id:
                return record
        raise RecipeNotFoundError(f"Recipe {recipe_id} not found")

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
