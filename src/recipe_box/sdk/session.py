"""Explicit session state for API callers."""

from collections.abc import Callable
from dataclasses import dataclass, field

from recipe_box.domain.errors import UnauthorizedError

SessionListener = Callable[["Session"], None]


@dataclass
class Session:
    """Holds the current identity; changes only through sign_in and sign_out."""

    token: str | None = None
    email: str | None = None
    _listeners: list[SessionListener] = field(default_factory=list, repr=False)

    @property
    def is_authenticated(self) -> bool:
        """Return True when a token is held."""
        return self.token is not None

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a listener for identity changes and return an unsubscriber."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def sign_in(self, token: str, email: str | None = None) -> None:
        """Adopt a new identity and notify listeners."""
        self.token = token
        self.email = email
        self._notify()

    def sign_out(self) -> None:
        """Drop the current identity and notify listeners."""
        if self.token is None and self.email is None:
            return
        self.token = None
        self.email = None
        self._notify()

    def authorization_header(self) -> dict[str, str]:
        """Return the bearer header for the current identity."""
        if self.token is None:
            raise UnauthorizedError("Not signed in")
        return {"Authorization": f"Bearer {self.token}"}

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
