"""GoTrue implementation of the auth gateway.

Holds the current session in memory the way the Supabase client SDKs do, and
notifies listeners on every change.
"""

import logging
from typing import Any, Callable

import httpx

from core.exceptions import RemoteServiceError
from domain.entities.session import AuthChangeEvent, AuthUser, Session, SignUpResult
from domain.repositories.auth_gateway import AuthStateListener
from infrastructure.supabase.http import send
from infrastructure.supabase.records import session_from_payload, user_from_payload

logger = logging.getLogger(__name__)

SESSION_MISSING_MESSAGE = "Auth session missing!"


class _ListenerSubscription:
    def __init__(self, remove: Callable[[], None]) -> None:
        self._remove = remove

    def unsubscribe(self) -> None:
        self._remove()


class SupabaseAuthGateway:
    """Supabase Auth (GoTrue) over httpx."""

    def __init__(self, http: httpx.AsyncClient, api_key: str) -> None:
        self._http = http
        self._api_key = api_key
        self._session: Session | None = None
        self._listeners: list[AuthStateListener] = []

    @property
    def access_token(self) -> str | None:
        return self._session.access_token if self._session else None

    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self.access_token or self._api_key}",
        }

    async def sign_up(self, email: str, password: str) -> SignUpResult:
        response = await send(
            self._http,
            "POST",
            "/auth/v1/signup",
            headers=self._headers(),
            json={"email": email, "password": password},
        )
        body: dict[str, Any] = response.json()

        if body.get("access_token"):
            session = session_from_payload(body)
            self._set_session(AuthChangeEvent.SIGNED_IN, session)
            return SignUpResult(user=session.user, session=session)

        # E-mail confirmation pending: GoTrue returns the bare user.
        user_payload = body.get("user") or body
        user = user_from_payload(user_payload) if user_payload.get("id") else None
        return SignUpResult(user=user)

    async def sign_in_with_password(self, email: str, password: str) -> Session:
        response = await send(
            self._http,
            "POST",
            "/auth/v1/token",
            headers=self._headers(),
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        session = session_from_payload(response.json())
        self._set_session(AuthChangeEvent.SIGNED_IN, session)
        return session

    async def sign_out(self) -> None:
        if self._session is None:
            return
        try:
            await send(self._http, "POST", "/auth/v1/logout", headers=self._headers())
        finally:
            self._set_session(AuthChangeEvent.SIGNED_OUT, None)

    async def get_session(self) -> Session | None:
        return self._session

    def set_session(self, session: Session) -> None:
        self._set_session(AuthChangeEvent.SIGNED_IN, session)

    async def update_user(
        self, email: str | None = None, password: str | None = None
    ) -> AuthUser:
        if self._session is None:
            raise RemoteServiceError(SESSION_MISSING_MESSAGE)

        attributes: dict[str, str] = {}
        if email is not None:
            attributes["email"] = email
        if password is not None:
            attributes["password"] = password

        response = await send(
            self._http, "PUT", "/auth/v1/user", headers=self._headers(), json=attributes
        )
        user = user_from_payload(response.json())
        self._set_session(
            AuthChangeEvent.USER_UPDATED,
            Session(
                access_token=self._session.access_token,
                refresh_token=self._session.refresh_token,
                expires_in=self._session.expires_in,
                token_type=self._session.token_type,
                user=user,
            ),
        )
        return user

    def on_auth_state_change(self, listener: AuthStateListener) -> _ListenerSubscription:
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _ListenerSubscription(remove)

    def _set_session(self, event: AuthChangeEvent, session: Session | None) -> None:
        self._session = session
        for listener in list(self._listeners):
            listener(event, session)
