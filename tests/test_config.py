"""Tests for configuration helpers."""

from recipe_box.config import parse_cors_origins


def test_parse_cors_origins_defaults_to_wildcard() -> None:
    assert parse_cors_origins(None) == ["*"]
    assert parse_cors_origins("  ") == ["*"]
    assert parse_cors_origins("*") == ["*"]


def test_parse_cors_origins_splits_and_strips() -> None:
    raw = "http://localhost:5173/, https://recipes.example.com,,"

    assert parse_cors_origins(raw) == [
        "http://localhost:5173",
        "https://recipes.example.com",
    ]
