"""Supabase-backed user repository.

Each user is one row whose ``saved_recipes`` JSON column holds the whole
collection. Writes to that column are compare-and-set on ``version``.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from recipe_box.domain.errors import (
    ConflictError,
    PersistenceError,
    VersionConflictError,
)
from recipe_box.domain.models import UserRecord
from recipe_box.domain.saved_recipes import SavedRecipeEntry
from recipe_box.services.users import UserRepository

_COLUMNS = "id, email, password_hash, saved_recipes, version"
_UNIQUE_VIOLATION = "23505"

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client
    table_name: str = "users"

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user with the given id, if present."""
        response = self._execute(
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .eq("id", str(user_id))
            .limit(1),
            action="get_by_id",
        )
        if not response.data:
            return None
        return _parse_user(response.data[0])

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user for a normalized email, if present."""
        response = self._execute(
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .eq("email", email)
            .limit(1),
            action="get_by_email",
        )
        if not response.data:
            return None
        return _parse_user(response.data[0])

    def create_user(self, email: str, password_hash: str) -> UserRecord:
        """Insert a new user row and return it."""
        query = self.client.table(self.table_name).insert(
            {
                "email": email,
                "password_hash": password_hash,
                "saved_recipes": [],
                "version": 0,
            }
        )
        try:
            response = query.execute()
        except APIError as exc:
            if exc.code == _UNIQUE_VIOLATION:
                raise ConflictError("User already exists") from exc
            _logger.exception("Supabase request failed", extra={"action": "create"})
            raise PersistenceError("User store is unavailable") from exc
        except httpx.HTTPError as exc:
            _logger.exception("Supabase request failed", extra={"action": "create"})
            raise PersistenceError("User store is unavailable") from exc
        if not response.data:
            raise PersistenceError("Failed to create user")
        return _parse_user(response.data[0])

    def replace_saved_recipes(
        self,
        user_id: UUID,
        entries: Sequence[SavedRecipeEntry],
        expected_version: int,
    ) -> UserRecord:
        """Write the collection only if the row is still at ``expected_version``."""
        response = self._execute(
            self.client.table(self.table_name)
            .update(
                {
                    "saved_recipes": [_dump_entry(entry) for entry in entries],
                    "version": expected_version + 1,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("id", str(user_id))
            .eq("version", expected_version),
            action="replace_saved_recipes",
        )
        if not response.data:
            raise VersionConflictError(
                "Saved recipes changed since they were last read"
            )
        return _parse_user(response.data[0])

    @staticmethod
    def _execute(query, action: str):  # type: ignore[no-untyped-def]
        try:
            return query.execute()
        except (APIError, httpx.HTTPError) as exc:
            _logger.exception("Supabase request failed", extra={"action": action})
            raise PersistenceError("User store is unavailable") from exc


def _parse_user(row: dict[str, object]) -> UserRecord:
    """Parse a users row into a domain model."""
    return UserRecord(
        id=UUID(str(row["id"])),
        email=str(row["email"]),
        password_hash=str(row.get("password_hash", "")),
        saved_recipes=tuple(
            _parse_entry(item) for item in row.get("saved_recipes") or []
        ),
        version=int(row.get("version", 0)),
    )


def _parse_entry(item: dict[str, object]) -> SavedRecipeEntry:
    """Parse one element of the saved_recipes JSON array."""
    return SavedRecipeEntry(
        recipe_id=str(item["recipeId"]),
        title=str(item.get("title", "")),
        image=item.get("image"),
        order=int(item["order"]),
        added_at=datetime.fromisoformat(str(item["addedAt"])),
        ready_in_minutes=item.get("readyInMinutes"),
        servings=item.get("servings"),
    )


def _dump_entry(entry: SavedRecipeEntry) -> dict[str, object]:
    """Serialize an entry into its JSON document shape."""
    return {
        "recipeId": entry.recipe_id,
        "title": entry.title,
        "image": entry.image,
        "readyInMinutes": entry.ready_in_minutes,
        "servings": entry.servings,
        "order": entry.order,
        "addedAt": entry.added_at.isoformat(),
    }
