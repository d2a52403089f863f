"""Authentication dependencies for FastAPI."""

from typing import Annotated, AsyncIterator

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from api.dependencies.remote import get_remote_service
from core.exceptions import AuthenticationError, ErrorCode
from domain.entities.session import AuthUser, Session
from domain.repositories.remote_service import IRemoteDataService
from domain.state.session_state import SessionState
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import IAuthProvider

# Security scheme for OpenAPI docs
security = HTTPBearer(auto_error=False)

# Singleton auth provider
_auth_provider: JWTAuthProvider | None = None


def get_auth_provider() -> JWTAuthProvider:
    """Get or create the auth provider singleton."""
    global _auth_provider
    if _auth_provider is None:
        _auth_provider = JWTAuthProvider()
    return _auth_provider


async def get_session_state(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security),
    ],
    remote: IRemoteDataService = Depends(get_remote_service),
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> AsyncIterator[SessionState]:
    """
    Session state for the lifetime of one request.

    A valid bearer token is adopted as the remote client's session before
    the state mounts; the subscription is dropped when the request ends.
    """
    if credentials:
        user = await auth_provider.validate_token(credentials.credentials)
        if user:
            remote.auth.set_session(Session(access_token=credentials.credentials, user=user))

    state = SessionState()
    await state.mount(remote.auth)
    try:
        yield state
    finally:
        state.unmount()


async def get_current_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security),
    ],
    session: SessionState = Depends(get_session_state),
) -> AuthUser:
    """
    Dependency to get the current authenticated user.

    Raises:
        AuthenticationError: If no token provided or token is invalid
    """
    if not credentials:
        raise AuthenticationError(
            message="Authorization header required",
            error_code=ErrorCode.UNAUTHORIZED,
        )

    if session.user is None:
        raise AuthenticationError(
            message="Invalid or expired token",
            error_code=ErrorCode.INVALID_TOKEN,
        )

    return session.user


async def get_optional_user(
    session: SessionState = Depends(get_session_state),
) -> AuthUser | None:
    """
    Dependency to get the current user if authenticated.

    Returns:
        AuthUser if authenticated, None otherwise (no exception raised)
    """
    return session.user


# Type alias for convenience in route handlers
CurrentUser = Annotated[AuthUser, Depends(get_current_user)]
OptionalUser = Annotated[AuthUser | None, Depends(get_optional_user)]
CurrentSession = Annotated[SessionState, Depends(get_session_state)]
