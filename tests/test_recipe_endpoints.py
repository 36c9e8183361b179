"""Tests for catalog and generation endpoints."""

import httpx
from fastapi.testclient import TestClient

from recipe_box.api.app import create_app
from recipe_box.containers import AppContainer
from tests.conftest import FakeRecipeProviderClient


def test_search_is_public_and_camel_cased(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get(
        "/api/recipes/search",
        params={"query": "pasta", "type": "main course", "maxReadyTime": 30},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["totalResults"] == 1
    assert body["results"][0]["readyInMinutes"] == 35
    provider = container.catalog_service.client
    assert provider.calls[-1][1]["type"] == "main course"
    assert provider.calls[-1][1]["maxReadyTime"] == 30


def test_autocomplete_and_featured(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    suggestions = client.get("/api/recipes/autocomplete", params={"query": "chi"})
    featured = client.get("/api/recipes/featured")

    assert suggestions.json() == [{"id": 1, "title": "chicken soup"}]
    assert featured.json()[0]["title"] == "Pancakes"


def test_recipe_detail_requires_auth(
    container: AppContainer, auth_headers: dict[str, str]
) -> None:
    client = TestClient(create_app(container))

    anonymous = client.get("/api/recipes/715538")
    authorized = client.get("/api/recipes/715538", headers=auth_headers)

    assert anonymous.status_code == 401
    assert authorized.status_code == 200
    assert authorized.json()["sourceUrl"] == "https://example.com/pork-pasta"
    assert authorized.json()["ingredients"][0]["name"] == "penne"


def test_provider_outage_returns_bad_gateway(
    container: AppContainer, provider_client: FakeRecipeProviderClient
) -> None:
    provider_client.error = httpx.ConnectError("refused")
    client = TestClient(create_app(container))

    response = client.get("/api/recipes/featured")

    assert response.status_code == 502
    assert response.json()["kind"] == "provider_error"


def test_generate_requires_auth_and_returns_grocery_items(
    container: AppContainer, auth_headers: dict[str, str]
) -> None:
    client = TestClient(create_app(container))

    anonymous = client.post("/api/recipes/generate", json={"prompt": "soup"})
    generated = client.post(
        "/api/recipes/generate", json={"prompt": "soup"}, headers=auth_headers
    )

    assert anonymous.status_code == 401
    assert generated.status_code == 200
    assert generated.json()["groceryItems"][0]["name"] == "Tomatoes"
