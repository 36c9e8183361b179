"""Models for AI-generated recipes."""

from pydantic import BaseModel


class GroceryItem(BaseModel):
    """Single grocery list entry for a generated recipe."""

    id: str
    name: str
    category: str
    quantity: str
    icon: str


class GeneratedRecipe(BaseModel):
    """Structured output for recipe generation."""

    recipe: str
    grocery_items: list[GroceryItem]
