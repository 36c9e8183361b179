"""AI-assisted recipe generation."""

import json
import logging
from dataclasses import dataclass
from typing import Protocol

import openai
import pydantic

from recipe_box.domain.errors import ProviderError, ValidationError
from recipe_box.domain.generation import GeneratedRecipe

GENERATED_RECIPE_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "recipe": {"type": "string"},
        "grocery_items": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "id": {"type": "string"},
                    "name": {"type": "string"},
                    "category": {"type": "string"},
                    "quantity": {"type": "string"},
                    "icon": {"type": "string"},
                },
                "required": ["id", "name", "category", "quantity", "icon"],
                "additionalProperties": False,
            },
        },
    },
    "required": ["recipe", "grocery_items"],
    "additionalProperties": False,
}

_MAX_PROMPT_LENGTH = 2000

_logger = logging.getLogger(__name__)


class RecipeTextClient(Protocol):
    """Interface for LLM recipe generation."""

    async def generate(
        self,
        *,
        model: str,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Return structured recipe data."""


@dataclass
class GeneratorService:
    """Builds generation prompts and validates model output."""

    client: RecipeTextClient
    model: str
    store: bool = False

    async def generate(self, meal_plan: str) -> GeneratedRecipe:
        """Generate a recipe and grocery list for a free-form meal plan."""
        cleaned = meal_plan.strip()
        if not cleaned:
            raise ValidationError("Describe the meal you want a recipe for")
        if len(cleaned) > _MAX_PROMPT_LENGTH:
            raise ValidationError(
                f"Prompt must be at most {_MAX_PROMPT_LENGTH} characters"
            )
        prompt = (
            "Generate a recipe and grocery list for the following meal plan: "
            f"{cleaned}. Put the full instructions in `recipe`, including all "
            "ingredients, steps, cooking time and servings. List every item to "
            "buy in `grocery_items` with a unique id, a name, a store category, "
            "the quantity needed and a single emoji icon."
        )
        try:
            raw = await self.client.generate(
                model=self.model,
                store=self.store,
                schema=GENERATED_RECIPE_SCHEMA,
                prompt=prompt,
            )
            return GeneratedRecipe.model_validate(raw)
        except (
            openai.OpenAIError,
            RuntimeError,
            json.JSONDecodeError,
            pydantic.ValidationError,
        ) as exc:
            _logger.exception("Recipe generation failed")
            raise ProviderError("Recipe generation failed") from exc
