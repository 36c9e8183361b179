"""Tests for saved-recipe collection rules."""

from datetime import UTC, datetime

import pytest

from recipe_box.domain.errors import ConflictError, ValidationError
from recipe_box.domain.saved_recipes import (
    SavedRecipeEntry,
    append_entry,
    apply_sequence,
    ordered,
    remove_entry,
)

_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


def _entry(recipe_id: str, order: int) -> SavedRecipeEntry:
    return SavedRecipeEntry(
        recipe_id=recipe_id,
        title=f"Recipe {recipe_id}",
        image=None,
        order=order,
        added_at=_NOW,
    )


def test_append_places_entry_at_collection_length() -> None:
    entries = (_entry("a", 0), _entry("b", 1))

    result = append_entry(
        entries, recipe_id="c", title="C", image="c.jpg", added_at=_NOW
    )

    assert [(e.recipe_id, e.order) for e in result] == [("a", 0), ("b", 1), ("c", 2)]
    assert result[-1].image == "c.jpg"


def test_append_rejects_duplicate_recipe_id() -> None:
    entries = (_entry("a", 0),)

    with pytest.raises(ConflictError):
        append_entry(entries, recipe_id="a", title="A", image=None, added_at=_NOW)


def test_append_heals_gaps_left_by_removal() -> None:
    entries = (_entry("a", 0), _entry("c", 2))

    result = append_entry(entries, recipe_id="d", title="D", image=None, added_at=_NOW)

    assert [(e.recipe_id, e.order) for e in result] == [("a", 0), ("c", 1), ("d", 2)]


def test_apply_sequence_assigns_positions_and_keeps_stored_fields() -> None:
    entries = (_entry("a", 0), _entry("b", 1), _entry("c", 2))

    result = apply_sequence(entries, ["c", "a", "b"])

    assert [(e.recipe_id, e.order) for e in result] == [("c", 0), ("a", 1), ("b", 2)]
    assert result[0].title == "Recipe c"
    assert result[0].added_at == _NOW


@pytest.mark.parametrize(
    "sequence",
    [
        ["a", "b"],
        ["a", "b", "c", "x"],
        ["a", "a", "b"],
        ["a", "b", "x"],
    ],
)
def test_apply_sequence_rejects_mismatched_ids(sequence: list[str]) -> None:
    entries = (_entry("a", 0), _entry("b", 1), _entry("c", 2))

    with pytest.raises(ValidationError):
        apply_sequence(entries, sequence)


def test_remove_keeps_order_values_of_survivors() -> None:
    entries = (_entry("a", 0), _entry("b", 1), _entry("c", 2))

    result = remove_entry(entries, "b")

    assert [(e.recipe_id, e.order) for e in ordered(result)] == [("a", 0), ("c", 2)]


def test_ordered_sorts_by_order_index() -> None:
    entries = (_entry("b", 3), _entry("a", 0), _entry("c", 1))

    assert [e.recipe_id for e in ordered(entries)] == ["a", "c", "b"]
