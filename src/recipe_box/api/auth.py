"""Account registration and login endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status

from recipe_box.api.schemas import CredentialsRequest, TokenResponse

if TYPE_CHECKING:
    from recipe_box.containers import AppContainer

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(payload: CredentialsRequest, request: Request) -> TokenResponse:
    """Create an account and return an access token."""
    container: AppContainer = request.app.state.container
    issued = container.auth_service.register(payload.email, payload.password)
    return TokenResponse(message="User registered successfully", token=issued.token)


@router.post("/login")
def login(payload: CredentialsRequest, request: Request) -> TokenResponse:
    """Exchange credentials for an access token."""
    container: AppContainer = request.app.state.container
    issued = container.auth_service.login(payload.email, payload.password)
    return TokenResponse(message="Login successful", token=issued.token)
