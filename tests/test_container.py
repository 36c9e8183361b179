"""Tests for container wiring."""

import asyncio

from recipe_box.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)
    assert container.saved_recipe_service is not None
    assert container.auth_service.secret == settings.jwt_secret
    asyncio.run(container.close_resources())
