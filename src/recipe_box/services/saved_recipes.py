"""Operations on a user's saved-recipe collection."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from recipe_box.domain.errors import (
    NotFoundError,
    ValidationError,
    VersionConflictError,
)
from recipe_box.domain.models import UserRecord
from recipe_box.domain.saved_recipes import (
    SavedRecipeEntry,
    append_entry,
    apply_sequence,
    find_entry,
    ordered,
    remove_entry,
)
from recipe_box.services.users import UserRepository

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SavedCollection:
    """A user's saved recipes in display order with the record version."""

    entries: tuple[SavedRecipeEntry, ...]
    version: int


@dataclass
class SavedRecipeService:
    """Application service for save, list, reorder and remove.

    Each mutation reads the user record once and writes it back once with a
    compare-and-set on the version it read. A caller may also pass the
    version it last saw; a mismatch fails before anything is written.
    """

    repository: UserRepository

    def save(  # noqa: PLR0913
        self,
        user_id: UUID,
        recipe_id: str,
        title: str,
        image: str | None,
        ready_in_minutes: int | None = None,
        servings: int | None = None,
        expected_version: int | None = None,
    ) -> SavedCollection:
        """Append a recipe to the end of the user's collection."""
        recipe_id = recipe_id.strip()
        if not recipe_id:
            raise ValidationError("recipeId is required")
        user = self._load(user_id, expected_version)
        entries = append_entry(
            user.saved_recipes,
            recipe_id=recipe_id,
            title=title,
            image=image,
            added_at=datetime.now(tz=UTC),
            ready_in_minutes=ready_in_minutes,
            servings=servings,
        )
        updated = self.repository.replace_saved_recipes(
            user.id, entries, expected_version=user.version
        )
        _logger.info(
            "Recipe saved",
            extra={"user_id": str(user_id), "recipe_id": recipe_id},
        )
        return _collection(updated)

    def list(self, user_id: UUID) -> SavedCollection:
        """Return the user's saved recipes sorted by order."""
        return _collection(self._load(user_id))

    def reorder(
        self,
        user_id: UUID,
        recipe_ids: Sequence[str],
        expected_version: int | None = None,
    ) -> SavedCollection:
        """Replace the collection order with the submitted sequence."""
        user = self._load(user_id, expected_version)
        entries = apply_sequence(user.saved_recipes, recipe_ids)
        updated = self.repository.replace_saved_recipes(
            user.id, entries, expected_version=user.version
        )
        _logger.info(
            "Saved recipes reordered",
            extra={"user_id": str(user_id), "count": len(entries)},
        )
        return _collection(updated)

    def remove(
        self,
        user_id: UUID,
        recipe_id: str,
        expected_version: int | None = None,
    ) -> SavedCollection:
        """Remove a recipe; surviving entries keep their order values."""
        recipe_id = recipe_id.strip()
        user = self._load(user_id, expected_version)
        if find_entry(user.saved_recipes, recipe_id) is None:
            return _collection(user)
        entries = remove_entry(user.saved_recipes, recipe_id)
        updated = self.repository.replace_saved_recipes(
            user.id, entries, expected_version=user.version
        )
        _logger.info(
            "Recipe removed",
            extra={"user_id": str(user_id), "recipe_id": recipe_id},
        )
        return _collection(updated)

    def _load(self, user_id: UUID, expected_version: int | None = None) -> UserRecord:
        user = self.repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        if expected_version is not None and expected_version != user.version:
            _logger.warning(
                "Stale collection version",
                extra={
                    "user_id": str(user_id),
                    "expected_version": expected_version,
                    "current_version": user.version,
                },
            )
            raise VersionConflictError(
                "Saved recipes changed since they were last read",
                current_version=user.version,
            )
        return user


def _collection(user: UserRecord) -> SavedCollection:
    return SavedCollection(entries=ordered(user.saved_recipes), version=user.version)
