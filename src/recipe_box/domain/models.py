"""Domain models for recipe box users."""

from dataclasses import dataclass, field
from uuid import UUID

from recipe_box.domain.saved_recipes import SavedRecipeEntry


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    email: str
    password_hash: str
    saved_recipes: tuple[SavedRecipeEntry, ...] = field(default_factory=tuple)
    version: int = 0


def normalize_email(email: str) -> str:
    """Return the canonical, case-insensitive form of an email address."""
    return email.strip().lower()
