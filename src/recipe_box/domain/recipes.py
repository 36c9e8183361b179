"""Domain models for recipes served by the external provider."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RecipeSummary:
    """Recipe metadata shown in search results."""

    id: int
    title: str
    image: str | None
    ready_in_minutes: int | None = None
    servings: int | None = None


@dataclass(frozen=True)
class RecipeSearchPage:
    """One page of provider search results."""

    results: list[RecipeSummary]
    offset: int
    number: int
    total_results: int


@dataclass(frozen=True)
class Ingredient:
    """An ingredient line from a recipe."""

    name: str
    amount: float | None
    unit: str | None
    original: str | None


@dataclass(frozen=True)
class RecipeDetail:
    """Full recipe information."""

    id: int
    title: str
    image: str | None
    ready_in_minutes: int | None
    servings: int | None
    summary: str | None
    instructions: str | None
    source_url: str | None
    ingredients: list[Ingredient] = field(default_factory=list)


@dataclass(frozen=True)
class RecipeSuggestion:
    """Autocomplete suggestion for a search query."""

    id: int
    title: str
