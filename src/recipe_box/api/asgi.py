"""ASGI entrypoint for the recipe box API."""

from recipe_box.api.app import create_app
from recipe_box.containers import build_container

app = create_app(build_container())
