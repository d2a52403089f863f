"""Current-user state mirrored from the auth service."""

import logging
from typing import Callable

from domain.entities.session import AuthChangeEvent, AuthUser, Session
from domain.repositories.auth_gateway import IAuthGateway, Subscription

logger = logging.getLogger(__name__)

SessionListener = Callable[[AuthChangeEvent, AuthUser | None], None]


class SessionState:
    """Single slot holding the current session, or none.

    The slot is a cache: every auth notification overwrites it and the
    remote service stays authoritative. Mount subscribes, unmount
    unsubscribes.
    """

    def __init__(self) -> None:
        self._session: Session | None = None
        self._subscription: Subscription | None = None
        self._listeners: list[SessionListener] = []

    @property
    def session(self) -> Session | None:
        return self._session

    @property
    def user(self) -> AuthUser | None:
        return self._session.user if self._session else None

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    @property
    def is_mounted(self) -> bool:
        return self._subscription is not None

    async def mount(self, auth: IAuthGateway) -> None:
        """Read the current session once, then follow change notifications."""
        if self._subscription is not None:
            return
        self._session = await auth.get_session()
        self._subscription = auth.on_auth_state_change(self.apply)

    def unmount(self) -> None:
        """Stop following change notifications."""
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def apply(self, event: AuthChangeEvent, session: Session | None) -> None:
        """Overwrite the slot from a change notification."""
        self._session = session
        logger.debug("Session changed: %s", event.value)
        for listener in list(self._listeners):
            listener(event, self.user)

    def add_listener(self, listener: SessionListener) -> Callable[[], None]:
        """Register a change listener and return a function that removes it."""
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove
