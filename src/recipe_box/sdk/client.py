"""Async HTTP client for the recipe box API."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from urllib.parse import quote

import httpx

from recipe_box.api.schemas import (
    GeneratedRecipeOut,
    RecipeDetailOut,
    RecipeSearchPageOut,
    SavedRecipeOut,
)
from recipe_box.domain.errors import (
    ConflictError,
    NotFoundError,
    PersistenceError,
    ProviderError,
    RecipeBoxError,
    UnauthorizedError,
    ValidationError,
    VersionConflictError,
)
from recipe_box.sdk.session import Session

_ERRORS_BY_KIND: dict[str, type[RecipeBoxError]] = {
    error.kind: error
    for error in (
        NotFoundError,
        ConflictError,
        VersionConflictError,
        ValidationError,
        UnauthorizedError,
        PersistenceError,
        ProviderError,
    )
}

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SavedRecipes:
    """Saved recipes as last returned by the server."""

    entries: list[SavedRecipeOut]
    version: int | None


@dataclass
class RecipeBoxClient:
    """Client bound to an explicit Session.

    ``saved`` always holds the last collection the server returned. After a
    failed reorder it is refreshed from the server before the error is
    re-raised, so callers can drop their optimistic local order.
    """

    base_url: str
    session: Session
    http_client: httpx.AsyncClient
    saved: SavedRecipes | None = None

    @classmethod
    def create(cls, base_url: str, session: Session) -> "RecipeBoxClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            session=session,
            http_client=httpx.AsyncClient(),
        )

    async def register(self, email: str, password: str) -> None:
        """Create an account and sign the session in."""
        data = await self._request(
            "POST",
            "/api/auth/register",
            auth=False,
            json={"email": email, "password": password},
        )
        self.session.sign_in(data["token"], email=email)

    async def login(self, email: str, password: str) -> None:
        """Log in and sign the session in."""
        data = await self._request(
            "POST",
            "/api/auth/login",
            auth=False,
            json={"email": email, "password": password},
        )
        self.session.sign_in(data["token"], email=email)

    def logout(self) -> None:
        """Sign the session out and forget cached state."""
        self.saved = None
        self.session.sign_out()

    async def list_saved(self) -> SavedRecipes:
        """Fetch the authoritative saved-recipe list."""
        return await self._collection_request("GET", "/api/recipes/saved/all")

    async def save(  # noqa: PLR0913
        self,
        recipe_id: str,
        title: str,
        image: str | None = None,
        ready_in_minutes: int | None = None,
        servings: int | None = None,
    ) -> SavedRecipes:
        """Save a recipe at the end of the collection."""
        return await self._collection_request(
            "POST",
            "/api/recipes/save",
            json={
                "recipeId": recipe_id,
                "title": title,
                "image": image,
                "readyInMinutes": ready_in_minutes,
                "servings": servings,
            },
        )

    async def reorder(self, recipe_ids: Sequence[str]) -> SavedRecipes:
        """Submit a new order; refresh from the server if it is rejected."""
        try:
            return await self._collection_request(
                "PUT",
                "/api/recipes/saved/reorder",
                json={"recipes": [{"recipeId": rid} for rid in recipe_ids]},
            )
        except (RecipeBoxError, httpx.HTTPError):
            _logger.warning("Reorder rejected; refreshing saved recipes")
            if self.session.is_authenticated:
                try:
                    await self.list_saved()
                except (RecipeBoxError, httpx.HTTPError):
                    _logger.exception("Failed to refresh saved recipes")
            raise

    async def remove(self, recipe_id: str) -> SavedRecipes:
        """Remove a recipe from the collection."""
        return await self._collection_request(
            "DELETE", f"/api/recipes/saved/{quote(recipe_id, safe='')}"
        )

    async def search(self, query: str, **filters: object) -> RecipeSearchPageOut:
        """Search recipes through the backend proxy."""
        params = {"query": query, **filters}
        data = await self._request(
            "GET",
            "/api/recipes/search",
            auth=False,
            params={key: value for key, value in params.items() if value is not None},
        )
        return RecipeSearchPageOut.model_validate(data)

    async def get_recipe(self, recipe_id: int) -> RecipeDetailOut:
        """Fetch full recipe information."""
        data = await self._request("GET", f"/api/recipes/{recipe_id}")
        return RecipeDetailOut.model_validate(data)

    async def generate(self, prompt: str) -> GeneratedRecipeOut:
        """Generate a recipe from a meal description."""
        data = await self._request(
            "POST", "/api/recipes/generate", json={"prompt": prompt}
        )
        return GeneratedRecipeOut.model_validate(data)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _collection_request(
        self, method: str, path: str, **kwargs: object
    ) -> SavedRecipes:
        response = await self._send(method, path, auth=True, **kwargs)
        etag = response.headers.get("ETag", "").strip('"')
        self.saved = SavedRecipes(
            entries=[SavedRecipeOut.model_validate(row) for row in response.json()],
            version=int(etag) if etag.isdigit() else None,
        )
        return self.saved

    async def _request(  # type: ignore[no-untyped-def]
        self, method: str, path: str, auth: bool = True, **kwargs: object
    ):
        response = await self._send(method, path, auth=auth, **kwargs)
        return response.json()

    async def _send(
        self, method: str, path: str, auth: bool, **kwargs: object
    ) -> httpx.Response:
        headers = self.session.authorization_header() if auth else {}
        response = await self.http_client.request(
            method, f"{self.base_url}{path}", headers=headers, timeout=15, **kwargs
        )
        if response.is_success:
            return response
        error = _error_from_response(response)
        if isinstance(error, UnauthorizedError) and auth:
            self.logout()
        raise error


def _error_from_response(response: httpx.Response) -> RecipeBoxError:
    """Rebuild a structured API error from a failed response."""
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}
    message = str(body.get("message") or body.get("detail") or response.reason_phrase)
    error_type = _ERRORS_BY_KIND.get(str(body.get("kind")), RecipeBoxError)
    unauthorized = response.status_code == httpx.codes.UNAUTHORIZED
    if error_type is RecipeBoxError and unauthorized:
        error_type = UnauthorizedError
    return error_type(message)
