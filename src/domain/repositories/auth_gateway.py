"""Auth gateway protocol."""

from typing import Callable, Protocol

from domain.entities.session import AuthChangeEvent, AuthUser, Session, SignUpResult

AuthStateListener = Callable[[AuthChangeEvent, Session | None], None]


class Subscription(Protocol):
    """Handle returned by a change subscription."""

    def unsubscribe(self) -> None:
        ...


class IAuthGateway(Protocol):
    """Authentication sub-interface of the remote service.

    The gateway holds the current session, like a client SDK does, and
    notifies listeners on every session change.
    """

    async def sign_up(self, email: str, password: str) -> SignUpResult:
        """Create an auth identity."""
        ...

    async def sign_in_with_password(self, email: str, password: str) -> Session:
        """Authenticate and store the session."""
        ...

    async def sign_out(self) -> None:
        """Invalidate the session; the local session is cleared even on failure."""
        ...

    async def get_session(self) -> Session | None:
        """Return the current session, if any."""
        ...

    def set_session(self, session: Session) -> None:
        """Adopt an externally obtained session (e.g. a bearer token)."""
        ...

    async def update_user(
        self, email: str | None = None, password: str | None = None
    ) -> AuthUser:
        """Update the signed-in identity's e-mail or password."""
        ...

    def on_auth_state_change(self, listener: AuthStateListener) -> Subscription:
        """Subscribe to session changes."""
        ...
