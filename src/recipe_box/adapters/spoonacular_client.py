"""Spoonacular recipe API client."""

from dataclasses import dataclass
from typing import Any, Protocol

import httpx


class RecipeProviderClient(Protocol):
    """Interface for external recipe provider interactions."""

    async def search_recipes(self, params: dict[str, object]) -> dict[str, object]:
        """Search recipes and return raw API data."""

    async def get_recipe(self, recipe_id: int) -> dict[str, object]:
        """Fetch full recipe information and return raw API data."""

    async def autocomplete(self, query: str, number: int) -> list[dict[str, object]]:
        """Return raw autocomplete suggestions for a query."""

    async def random_recipes(self, number: int) -> dict[str, object]:
        """Return raw random recipe data."""


@dataclass
class HttpxSpoonacularClient(RecipeProviderClient):
    """HTTPX-backed Spoonacular client."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, api_key: str, base_url: str) -> "HttpxSpoonacularClient":
        """Create a Spoonacular client with a managed httpx session."""
        return cls(api_key=api_key, base_url=base_url, http_client=httpx.AsyncClient())

    async def search_recipes(self, params: dict[str, object]) -> dict[str, object]:
        """Search recipes with recipe information included."""
        return await self._get(
            "/recipes/complexSearch",
            {**params, "addRecipeInformation": "true"},
        )

    async def get_recipe(self, recipe_id: int) -> dict[str, object]:
        """Fetch recipe information by id."""
        return await self._get(f"/recipes/{recipe_id}/information", {})

    async def autocomplete(self, query: str, number: int) -> list[dict[str, object]]:
        """Fetch title suggestions for a partial query."""
        return await self._get(
            "/recipes/autocomplete", {"query": query, "number": number}
        )

    async def random_recipes(self, number: int) -> dict[str, object]:
        """Fetch random recipes."""
        return await self._get("/recipes/random", {"number": number})

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _get(self, path: str, params: dict[str, object]) -> Any:
        response = await self.http_client.get(
            f"{self.base_url}{path}",
            params={"apiKey": self.api_key, **params},
            timeout=15,
        )
        response.raise_for_status()
        return response.json()
