"""Bearer token dependencies for authenticated endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import Depends, Header, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from recipe_box.domain.errors import UnauthorizedError, ValidationError

if TYPE_CHECKING:
    from recipe_box.containers import AppContainer

_bearer = HTTPBearer(auto_error=False)

_logger = logging.getLogger(__name__)


def current_user_id(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> UUID:
    """Resolve the request's bearer token to a live user id."""
    if credentials is None:
        raise UnauthorizedError("Missing bearer token")
    container: AppContainer = request.app.state.container
    try:
        return container.auth_service.resolve_user_id(credentials.credentials)
    except UnauthorizedError as exc:
        _logger.warning("Rejected bearer token", extra={"reason": exc.message})
        raise


def expected_version(if_match: str | None = Header(default=None)) -> int | None:
    """Parse the collection version a client sent in If-Match."""
    if if_match is None or if_match.strip() == "*":
        return None
    raw = if_match.strip().removeprefix("W/").strip('"')
    if not raw.isdigit():
        raise ValidationError("If-Match must be a collection version")
    return int(raw)
