"""Sign-up, sign-in and sign-out routes."""

import structlog
from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentSession
from api.v1.dependencies import get_auth_service
from api.v1.schemas.auth import (
    CurrentSessionResponse,
    SessionResponse,
    SignInRequest,
    SignUpRequest,
    SignUpResponse,
    UserResponse,
)
from api.v1.schemas.common import MessageResponse, ensure_ok
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.auth_service import AuthService

logger = structlog.get_logger()

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/signup",
    response_model=SignUpResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
    responses={400: {"description": "Sign-up or profile creation failed"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def sign_up(
    request: Request,
    body: SignUpRequest,
    service: AuthService = Depends(get_auth_service),
) -> SignUpResponse:
    """
    Create an auth identity and its profile.

    If the profile insert fails the identity is kept; the error names the
    failed step in `details.steps`.
    """
    result = await service.sign_up(body.email, body.password, body.name)
    ensure_ok(result)
    user = result.data.user if result.data else None
    session = result.data.session if result.data else None
    logger.info("user_signed_up", user_id=str(user.id) if user else None)
    return SignUpResponse(
        user=UserResponse.from_entity(user) if user else None,
        session=SessionResponse.from_entity(session) if session else None,
        confirmation_required=session is None,
    )


@router.post(
    "/signin",
    response_model=SessionResponse,
    summary="Sign in with e-mail and password",
    responses={400: {"description": "Invalid credentials"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def sign_in(
    request: Request,
    body: SignInRequest,
    service: AuthService = Depends(get_auth_service),
) -> SessionResponse:
    """Exchange credentials for a session."""
    result = await service.sign_in(body.email, body.password)
    ensure_ok(result)
    return SessionResponse.from_entity(result.data)  # type: ignore[arg-type]


@router.post(
    "/signout",
    response_model=MessageResponse,
    summary="Sign out",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def sign_out(
    request: Request,
    session: CurrentSession,
    service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Invalidate the caller's session."""
    ensure_ok(await service.sign_out())
    return MessageResponse(message="Signed out")


@router.get(
    "/session",
    response_model=CurrentSessionResponse,
    summary="Current session",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_session(request: Request, session: CurrentSession) -> CurrentSessionResponse:
    """Report who the bearer token belongs to, if anyone."""
    user = session.user
    return CurrentSessionResponse(
        authenticated=user is not None,
        user=UserResponse.from_entity(user) if user else None,
    )
