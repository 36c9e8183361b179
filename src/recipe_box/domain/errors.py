"""Error taxonomy shared by services and the HTTP layer."""


class RecipeBoxError(Exception):
    """Base class for failures surfaced to API callers."""

    kind = "error"
    http_status = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        """Return the structured payload sent to clients."""
        return {"kind": self.kind, "message": self.message}


class NotFoundError(RecipeBoxError):
    """Raised when a referenced user or recipe does not exist."""

    kind = "not_found"
    http_status = 404


class ConflictError(RecipeBoxError):
    """Raised when a write collides with existing state."""

    kind = "conflict"
    http_status = 409


class VersionConflictError(ConflictError):
    """Raised when the stored record changed since the caller read it."""

    kind = "version_conflict"

    def __init__(self, message: str, current_version: int | None = None) -> None:
        super().__init__(message)
        self.current_version = current_version


class ValidationError(RecipeBoxError):
    """Raised when input fails a precondition."""

    kind = "validation_error"
    http_status = 400


class UnauthorizedError(RecipeBoxError):
    """Raised when a credential is missing, invalid, or expired."""

    kind = "unauthorized"
    http_status = 401


class PersistenceError(RecipeBoxError):
    """Raised when the backing store fails a read or write."""

    kind = "persistence_failure"
    http_status = 503


class ProviderError(RecipeBoxError):
    """Raised when an upstream recipe or AI provider fails."""

    kind = "provider_error"
    http_status = 502
