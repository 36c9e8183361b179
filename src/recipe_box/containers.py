"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from recipe_box.adapters.openai_recipe_client import OpenAIRecipeClient
from recipe_box.adapters.spoonacular_client import HttpxSpoonacularClient
from recipe_box.adapters.supabase_user_repository import SupabaseUserRepository
from recipe_box.config import Settings
from recipe_box.services.auth import AuthService
from recipe_box.services.catalog import CatalogService
from recipe_box.services.generator import GeneratorService
from recipe_box.services.saved_recipes import SavedRecipeService
from recipe_box.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    auth_service: AuthService
    saved_recipe_service: SavedRecipeService
    catalog_service: CatalogService
    generator_service: GeneratorService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_repository = SupabaseUserRepository(
        supabase_client, table_name=resolved_settings.supabase_users_table
    )
    user_service = UserService(user_repository)
    auth_service = AuthService(
        user_service=user_service,
        secret=resolved_settings.jwt_secret,
        algorithm=resolved_settings.jwt_algorithm,
        expires_hours=resolved_settings.jwt_expires_hours,
    )
    saved_recipe_service = SavedRecipeService(user_repository)
    spoonacular_client = HttpxSpoonacularClient.create(
        api_key=resolved_settings.spoonacular_api_key,
        base_url=resolved_settings.spoonacular_base_url,
    )
    catalog_service = CatalogService(spoonacular_client)
    openai_client = OpenAIRecipeClient.create(resolved_settings.openai_api_key)
    generator_service = GeneratorService(
        client=openai_client,
        model=resolved_settings.openai_model,
        store=resolved_settings.openai_store,
    )

    async def close_resources() -> None:
        await spoonacular_client.close()
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        auth_service=auth_service,
        saved_recipe_service=saved_recipe_service,
        catalog_service=catalog_service,
        generator_service=generator_service,
        close_resources=close_resources,
    )
