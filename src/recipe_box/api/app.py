"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from recipe_box.api.auth import router as auth_router
from recipe_box.api.recipes import router as recipes_router
from recipe_box.app_logging import configure_logging
from recipe_box.config import parse_cors_origins
from recipe_box.containers import AppContainer
from recipe_box.domain.errors import (
    ConflictError,
    RecipeBoxError,
    UnauthorizedError,
    ValidationError,
    VersionConflictError,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_cors_origins(container.settings.cors_allowed_origins),
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["ETag"],
    )
    app.include_router(auth_router)
    app.include_router(recipes_router)

    @app.exception_handler(RecipeBoxError)
    async def recipe_box_error_handler(
        request: Request, exc: RecipeBoxError
    ) -> JSONResponse:
        """Render domain errors as structured JSON."""
        headers: dict[str, str] = {}
        if isinstance(exc, UnauthorizedError):
            headers["WWW-Authenticate"] = "Bearer"
        if isinstance(exc, VersionConflictError) and exc.current_version is not None:
            headers["ETag"] = f'"{exc.current_version}"'
        if isinstance(exc, ConflictError):
            logger.warning(
                "Request conflicted with stored state",
                extra={"path": request.url.path, "kind": exc.kind},
            )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_dict(), headers=headers
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Render malformed requests in the same shape as domain errors."""
        error = ValidationError(_describe_validation_errors(exc.errors()))
        return JSONResponse(status_code=error.http_status, content=error.to_dict())

    @app.exception_handler(Exception)
    async def unexpected_error_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Log unexpected failures and hide their details from clients."""
        logger.exception("Unhandled error", extra={"path": request.url.path})
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"kind": "internal_error", "message": "Something went wrong!"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _describe_validation_errors(errors: Sequence[dict[str, Any]]) -> str:
    parts = []
    for error in errors:
        location = ".".join(
            str(part) for part in error.get("loc", ()) if part != "body"
        )
        message = str(error.get("msg", "Invalid value"))
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "Invalid request"
