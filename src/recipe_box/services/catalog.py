"""Recipe catalog service backed by the external provider."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

import httpx

from recipe_box.adapters.spoonacular_client import RecipeProviderClient
from recipe_box.domain.errors import NotFoundError, ProviderError, ValidationError
from recipe_box.domain.recipes import (
    Ingredient,
    RecipeDetail,
    RecipeSearchPage,
    RecipeSuggestion,
    RecipeSummary,
)

_MAX_PAGE_SIZE = 100

_logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class CatalogService:
    """Search, detail, autocomplete and featured lookups."""

    client: RecipeProviderClient

    async def search(  # noqa: PLR0913
        self,
        query: str | None,
        offset: int = 0,
        number: int = 10,
        cuisine: str | None = None,
        diet: str | None = None,
        meal_type: str | None = None,
        max_ready_time: int | None = None,
    ) -> RecipeSearchPage:
        """Search recipes with optional filters."""
        if offset < 0:
            raise ValidationError("offset must not be negative")
        if not 1 <= number <= _MAX_PAGE_SIZE:
            raise ValidationError(f"number must be between 1 and {_MAX_PAGE_SIZE}")
        params: dict[str, object] = {
            "query": query,
            "offset": offset,
            "number": number,
            "cuisine": cuisine,
            "diet": diet,
            "type": meal_type,
            "maxReadyTime": max_ready_time,
        }
        payload = await self._call(
            lambda: self.client.search_recipes(
                {key: value for key, value in params.items() if value is not None}
            ),
            action="search",
        )
        return RecipeSearchPage(
            results=[_parse_summary(row) for row in payload.get("results", [])],
            offset=int(payload.get("offset", offset)),
            number=int(payload.get("number", number)),
            total_results=int(payload.get("totalResults", 0)),
        )

    async def get_recipe(self, recipe_id: int) -> RecipeDetail:
        """Return full information for one recipe."""
        payload = await self._call(
            lambda: self.client.get_recipe(recipe_id),
            action=f"get_recipe:{recipe_id}",
        )
        return RecipeDetail(
            id=int(payload["id"]),
            title=str(payload.get("title", "")),
            image=payload.get("image"),
            ready_in_minutes=payload.get("readyInMinutes"),
            servings=payload.get("servings"),
            summary=payload.get("summary"),
            instructions=payload.get("instructions"),
            source_url=payload.get("sourceUrl"),
            ingredients=[
                Ingredient(
                    name=str(row.get("name", "")),
                    amount=row.get("amount"),
                    unit=row.get("unit") or None,
                    original=row.get("original"),
                )
                for row in payload.get("extendedIngredients") or []
            ],
        )

    async def autocomplete(self, query: str, number: int = 5) -> list[RecipeSuggestion]:
        """Return title suggestions for a partial query."""
        if not query.strip():
            return []
        rows = await self._call(
            lambda: self.client.autocomplete(query.strip(), number),
            action="autocomplete",
        )
        return [
            RecipeSuggestion(id=int(row["id"]), title=str(row.get("title", "")))
            for row in rows
        ]

    async def featured(self, number: int = 6) -> list[RecipeSummary]:
        """Return a handful of random recipes for the home page."""
        payload = await self._call(
            lambda: self.client.random_recipes(number),
            action="featured",
        )
        return [_parse_summary(row) for row in payload.get("recipes", [])]

    async def _call(self, func: Callable[[], Awaitable[T]], action: str) -> T:
        try:
            return await func()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            if status == httpx.codes.NOT_FOUND:
                raise NotFoundError("Recipe not found") from exc
            _logger.warning(
                "Recipe provider returned an error",
                extra={"action": action, "status": status},
            )
            raise ProviderError(f"Recipe provider error ({status})") from exc
        except httpx.HTTPError as exc:
            _logger.warning(
                "Recipe provider request failed",
                extra={"action": action, "error": type(exc).__name__},
            )
            raise ProviderError("Recipe provider unavailable") from exc


def _parse_summary(row: dict[str, object]) -> RecipeSummary:
    """Parse a provider recipe row into a summary."""
    return RecipeSummary(
        id=int(row["id"]),
        title=str(row.get("title", "")),
        image=row.get("image"),
        ready_in_minutes=row.get("readyInMinutes"),
        servings=row.get("servings"),
    )
