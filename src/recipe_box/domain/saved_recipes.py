"""Saved-recipe collection model and its ordering rules.

A collection is an immutable tuple of entries owned by one user. Every
helper here returns a new tuple; persistence is left to the caller.
``order`` values are unique within a collection, so sorting by ``order``
is always a total order. Appending and reordering also make the values
dense (``0..N-1``); removing an entry leaves a gap until the next append
or reorder.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from datetime import datetime

from recipe_box.domain.errors import ConflictError, ValidationError


@dataclass(frozen=True)
class SavedRecipeEntry:
    """A reference to an external recipe plus user-local metadata."""

    recipe_id: str
    title: str
    image: str | None
    order: int
    added_at: datetime
    ready_in_minutes: int | None = None
    servings: int | None = None


def ordered(entries: Iterable[SavedRecipeEntry]) -> tuple[SavedRecipeEntry, ...]:
    """Return entries sorted ascending by their order index."""
    return tuple(sorted(entries, key=lambda entry: entry.order))


def find_entry(
    entries: Iterable[SavedRecipeEntry], recipe_id: str
) -> SavedRecipeEntry | None:
    """Return the entry for a recipe id, if present."""
    for entry in entries:
        if entry.recipe_id == recipe_id:
            return entry
    return None


def append_entry(  # noqa: PLR0913
    entries: Sequence[SavedRecipeEntry],
    *,
    recipe_id: str,
    title: str,
    image: str | None,
    added_at: datetime,
    ready_in_minutes: int | None = None,
    servings: int | None = None,
) -> tuple[SavedRecipeEntry, ...]:
    """Append a new entry at the end of the collection."""
    if find_entry(entries, recipe_id) is not None:
        raise ConflictError("Recipe already saved")
    survivors = _renumber(ordered(entries))
    entry = SavedRecipeEntry(
        recipe_id=recipe_id,
        title=title,
        image=image,
        order=len(survivors),
        added_at=added_at,
        ready_in_minutes=ready_in_minutes,
        servings=servings,
    )
    return (*survivors, entry)


def apply_sequence(
    entries: Sequence[SavedRecipeEntry], recipe_ids: Sequence[str]
) -> tuple[SavedRecipeEntry, ...]:
    """Reorder entries to follow ``recipe_ids``.

    The submitted ids must name every stored entry exactly once. Display
    fields and ``added_at`` are kept from the stored entries.
    """
    stored = {entry.recipe_id: entry for entry in entries}
    if len(set(recipe_ids)) != len(recipe_ids):
        raise ValidationError("Reorder payload contains duplicate recipes")
    submitted = set(recipe_ids)
    missing = stored.keys() - submitted
    unknown = submitted - stored.keys()
    if missing or unknown:
        parts = []
        if missing:
            parts.append(f"missing {sorted(missing)}")
        if unknown:
            parts.append(f"unknown {sorted(unknown)}")
        raise ValidationError(
            "Reorder payload must contain exactly the saved recipes: "
            + ", ".join(parts)
        )
    return tuple(
        replace(stored[recipe_id], order=index)
        for index, recipe_id in enumerate(recipe_ids)
    )


def remove_entry(
    entries: Sequence[SavedRecipeEntry], recipe_id: str
) -> tuple[SavedRecipeEntry, ...]:
    """Drop the entry for ``recipe_id`` without renumbering survivors."""
    return tuple(entry for entry in entries if entry.recipe_id != recipe_id)


def _renumber(entries: Sequence[SavedRecipeEntry]) -> tuple[SavedRecipeEntry, ...]:
    return tuple(
        entry if entry.order == index else replace(entry, order=index)
        for index, entry in enumerate(entries)
    )
