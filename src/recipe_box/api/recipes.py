"""Recipe catalog, generation and saved-recipe endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Path, Query, Request, Response

from recipe_box.api.schemas import (
    GeneratedRecipeOut,
    GenerateRequest,
    RecipeDetailOut,
    RecipeSearchPageOut,
    RecipeSuggestionOut,
    RecipeSummaryOut,
    ReorderRequest,
    SavedRecipeOut,
    SaveRecipeRequest,
)
from recipe_box.api.security import current_user_id, expected_version

if TYPE_CHECKING:
    from recipe_box.containers import AppContainer
    from recipe_box.services.saved_recipes import SavedCollection

router = APIRouter(prefix="/api/recipes", tags=["recipes"])


@router.get("/search")
async def search_recipes(  # noqa: PLR0913
    request: Request,
    query: str | None = None,
    offset: int = Query(default=0, ge=0),
    number: int = Query(default=10, ge=1, le=100),
    cuisine: str | None = None,
    diet: str | None = None,
    meal_type: str | None = Query(default=None, alias="type"),
    max_ready_time: int | None = Query(default=None, alias="maxReadyTime", ge=1),
) -> RecipeSearchPageOut:
    """Search the external recipe provider."""
    container: AppContainer = request.app.state.container
    page = await container.catalog_service.search(
        query,
        offset=offset,
        number=number,
        cuisine=cuisine,
        diet=diet,
        meal_type=meal_type,
        max_ready_time=max_ready_time,
    )
    return RecipeSearchPageOut.model_validate(page)


@router.get("/autocomplete")
async def autocomplete_recipes(
    request: Request,
    query: str,
    number: int = Query(default=5, ge=1, le=25),
) -> list[RecipeSuggestionOut]:
    """Return title suggestions for a partial query."""
    container: AppContainer = request.app.state.container
    suggestions = await container.catalog_service.autocomplete(query, number)
    return [RecipeSuggestionOut.model_validate(item) for item in suggestions]


@router.get("/featured")
async def featured_recipes(
    request: Request,
    number: int = Query(default=6, ge=1, le=25),
) -> list[RecipeSummaryOut]:
    """Return random recipes for the home page."""
    container: AppContainer = request.app.state.container
    recipes = await container.catalog_service.featured(number)
    return [RecipeSummaryOut.model_validate(item) for item in recipes]


@router.post("/generate", dependencies=[Depends(current_user_id)])
async def generate_recipe(
    payload: GenerateRequest, request: Request
) -> GeneratedRecipeOut:
    """Generate a recipe and grocery list from a meal description."""
    container: AppContainer = request.app.state.container
    generated = await container.generator_service.generate(payload.prompt)
    return GeneratedRecipeOut.model_validate(generated.model_dump())


@router.post("/save")
def save_recipe(
    payload: SaveRecipeRequest,
    request: Request,
    response: Response,
    user_id: UUID = Depends(current_user_id),
    version: int | None = Depends(expected_version),
) -> list[SavedRecipeOut]:
    """Append a recipe to the caller's saved collection."""
    container: AppContainer = request.app.state.container
    collection = container.saved_recipe_service.save(
        user_id,
        recipe_id=payload.recipe_id,
        title=payload.title,
        image=payload.image,
        ready_in_minutes=payload.ready_in_minutes,
        servings=payload.servings,
        expected_version=version,
    )
    return _collection_response(collection, response)


@router.get("/saved/all")
def list_saved_recipes(
    request: Request,
    response: Response,
    user_id: UUID = Depends(current_user_id),
) -> list[SavedRecipeOut]:
    """Return the caller's saved recipes in display order."""
    container: AppContainer = request.app.state.container
    collection = container.saved_recipe_service.list(user_id)
    return _collection_response(collection, response)


@router.put("/saved/reorder")
def reorder_saved_recipes(
    payload: ReorderRequest,
    request: Request,
    response: Response,
    user_id: UUID = Depends(current_user_id),
    version: int | None = Depends(expected_version),
) -> list[SavedRecipeOut]:
    """Replace the order of the caller's saved recipes."""
    container: AppContainer = request.app.state.container
    collection = container.saved_recipe_service.reorder(
        user_id,
        [item.recipe_id for item in payload.recipes],
        expected_version=version,
    )
    return _collection_response(collection, response)


@router.delete("/saved/{recipe_id}")
def delete_saved_recipe(
    request: Request,
    response: Response,
    recipe_id: str = Path(min_length=1),
    user_id: UUID = Depends(current_user_id),
    version: int | None = Depends(expected_version),
) -> list[SavedRecipeOut]:
    """Remove a recipe from the caller's saved collection."""
    container: AppContainer = request.app.state.container
    collection = container.saved_recipe_service.remove(
        user_id, recipe_id, expected_version=version
    )
    return _collection_response(collection, response)


@router.get("/{recipe_id}", dependencies=[Depends(current_user_id)])
async def get_recipe(request: Request, recipe_id: int) -> RecipeDetailOut:
    """Return full recipe information from the provider."""
    container: AppContainer = request.app.state.container
    detail = await container.catalog_service.get_recipe(recipe_id)
    return RecipeDetailOut.model_validate(detail)


def _collection_response(
    collection: SavedCollection, response: Response
) -> list[SavedRecipeOut]:
    """Serialize a collection and expose its version as an ETag."""
    response.headers["ETag"] = f'"{collection.version}"'
    return [SavedRecipeOut.model_validate(entry) for entry in collection.entries]
