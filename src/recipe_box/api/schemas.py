"""Pydantic request and response models for the HTTP API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model exposing camelCase field names on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class CredentialsRequest(BaseModel):
    """Email and password submitted to register or log in."""

    email: str = Field(min_length=3, max_length=320)
    password: str = Field(min_length=1)


class TokenResponse(BaseModel):
    """Access token issued after register or login."""

    message: str
    token: str


class SaveRecipeRequest(CamelModel):
    """Recipe snapshot to add to the caller's collection."""

    recipe_id: str
    title: str
    image: str | None = None
    ready_in_minutes: int | None = Field(default=None, ge=0)
    servings: int | None = Field(default=None, ge=0)


class SavedRecipeOut(CamelModel):
    """Saved recipe entry as returned to clients."""

    recipe_id: str
    title: str
    image: str | None
    ready_in_minutes: int | None
    servings: int | None
    order: int
    added_at: datetime


class ReorderItem(CamelModel):
    """One entry of a reorder payload; only the recipe id is used."""

    recipe_id: str


class ReorderRequest(BaseModel):
    """Full desired sequence of saved recipes."""

    recipes: list[ReorderItem]


class GenerateRequest(BaseModel):
    """Free-form meal description for recipe generation."""

    prompt: str


class GroceryItemOut(CamelModel):
    """Grocery list entry returned with a generated recipe."""

    id: str
    name: str
    category: str
    quantity: str
    icon: str


class GeneratedRecipeOut(CamelModel):
    """Generated recipe text and grocery list."""

    recipe: str
    grocery_items: list[GroceryItemOut]


class RecipeSummaryOut(CamelModel):
    """Recipe metadata shown in listings."""

    id: int
    title: str
    image: str | None
    ready_in_minutes: int | None
    servings: int | None


class RecipeSearchPageOut(CamelModel):
    """Page of recipe search results."""

    results: list[RecipeSummaryOut]
    offset: int
    number: int
    total_results: int


class IngredientOut(CamelModel):
    """Ingredient line of a recipe."""

    name: str
    amount: float | None
    unit: str | None
    original: str | None


class RecipeDetailOut(RecipeSummaryOut):
    """Full recipe information."""

    summary: str | None
    instructions: str | None
    source_url: str | None
    ingredients: list[IngredientOut]


class RecipeSuggestionOut(CamelModel):
    """Autocomplete suggestion."""

    id: int
    title: str
