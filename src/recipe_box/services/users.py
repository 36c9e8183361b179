"""User-related business logic."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from recipe_box.domain.errors import ConflictError, NotFoundError
from recipe_box.domain.models import UserRecord, normalize_email
from recipe_box.domain.saved_recipes import SavedRecipeEntry

_logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for user records."""

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user with the given id, if present."""

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user for a normalized email, if present."""

    def create_user(self, email: str, password_hash: str) -> UserRecord:
        """Create and return a new user with an empty collection."""

    def replace_saved_recipes(
        self,
        user_id: UUID,
        entries: Sequence[SavedRecipeEntry],
        expected_version: int,
    ) -> UserRecord:
        """Overwrite the saved recipes if the stored version still matches.

        Raises VersionConflictError when the record changed since it was read.
        """


@dataclass
class UserService:
    """Application service for user lifecycle actions."""

    repository: UserRepository

    def get_user(self, user_id: UUID) -> UserRecord:
        """Return the user or raise NotFoundError."""
        user = self.repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def find_by_email(self, email: str) -> UserRecord | None:
        """Return the user registered under an email, if any."""
        return self.repository.get_by_email(normalize_email(email))

    def create_user(self, email: str, password_hash: str) -> UserRecord:
        """Create a user, rejecting an email that is already registered."""
        normalized = normalize_email(email)
        if self.repository.get_by_email(normalized) is not None:
            raise ConflictError("User already exists")
        created = self.repository.create_user(normalized, password_hash)
        _logger.info("User registered", extra={"user_id": str(created.id)})
        return created
