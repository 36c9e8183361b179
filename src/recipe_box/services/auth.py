"""Account registration, login, and bearer token verification."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID

import bcrypt
import jwt

from recipe_box.domain.errors import NotFoundError, UnauthorizedError, ValidationError
from recipe_box.services.users import UserService

_MIN_PASSWORD_LENGTH = 6
_BCRYPT_MAX_BYTES = 72

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthToken:
    """Signed access token issued to a user."""

    token: str
    user_id: UUID
    expires_at: datetime


@dataclass
class AuthService:
    """Issues and verifies bearer credentials for users."""

    user_service: UserService
    secret: str
    algorithm: str = "HS256"
    expires_hours: int = 24
    bcrypt_rounds: int = 12

    def register(self, email: str, password: str) -> AuthToken:
        """Create an account and return an access token for it."""
        if not email.strip():
            raise ValidationError("Email is required")
        if len(password) < _MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {_MIN_PASSWORD_LENGTH} characters"
            )
        if len(password.encode("utf-8")) > _BCRYPT_MAX_BYTES:
            raise ValidationError(
                f"Password must be at most {_BCRYPT_MAX_BYTES} bytes"
            )
        user = self.user_service.create_user(email, self._hash(password))
        return self.issue_token(user.id)

    def login(self, email: str, password: str) -> AuthToken:
        """Verify credentials and return a fresh access token."""
        user = self.user_service.find_by_email(email)
        if user is None:
            raise UnauthorizedError("No user found. Please sign up first.")
        if not self._verify(password, user.password_hash):
            _logger.warning("Invalid login attempt", extra={"user_id": str(user.id)})
            raise UnauthorizedError("Invalid credentials")
        return self.issue_token(user.id)

    def issue_token(self, user_id: UUID) -> AuthToken:
        """Sign an access token for a user id."""
        expires_at = datetime.now(tz=UTC) + timedelta(hours=self.expires_hours)
        token = jwt.encode(
            {"sub": str(user_id), "exp": expires_at},
            self.secret,
            algorithm=self.algorithm,
        )
        return AuthToken(token=token, user_id=user_id, expires_at=expires_at)

    def resolve_user_id(self, token: str) -> UUID:
        """Return the id of the live user a token was issued to."""
        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise UnauthorizedError("Token expired") from exc
        except jwt.InvalidTokenError as exc:
            raise UnauthorizedError("Invalid token") from exc
        try:
            user_id = UUID(str(claims["sub"]))
        except ValueError as exc:
            raise UnauthorizedError("Invalid token subject") from exc
        try:
            self.user_service.get_user(user_id)
        except NotFoundError as exc:
            raise UnauthorizedError("Token user no longer exists") from exc
        return user_id

    def _hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.bcrypt_rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    @staticmethod
    def _verify(password: str, password_hash: str) -> bool:
        encoded = password.encode("utf-8")
        if len(encoded) > _BCRYPT_MAX_BYTES:
            return False
        return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))
