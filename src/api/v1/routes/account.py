"""Account page routes: profile, password, deletion."""

import structlog
from fastapi import APIRouter, Depends, Query, Request

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_auth_service
from api.v1.schemas.account import (
    AccountDeleteResponse,
    PasswordUpdate,
    ProfileDetailResponse,
    ProfileResponse,
    ProfileUpdate,
)
from api.v1.schemas.common import OperationResponse, ensure_ok
from core.exceptions import ConfirmationRequiredError, ProfileNotFoundError
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.auth_service import AuthService

logger = structlog.get_logger()

router = APIRouter(prefix="/account", tags=["account"])


@router.get(
    "/profile",
    response_model=ProfileDetailResponse,
    summary="Get own profile",
    responses={404: {"description": "Profile could not be loaded"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_profile(
    request: Request,
    user: CurrentUser,
    service: AuthService = Depends(get_auth_service),
) -> ProfileDetailResponse:
    """Get the signed-in user's profile."""
    result = await service.get_profile(user.id)
    if result.data is None:
        raise ProfileNotFoundError(str(user.id), result.error or "Failed to load profile")
    profile = result.data
    return ProfileDetailResponse(
        data=ProfileResponse(
            id=profile.id,
            name=profile.name,
            email=profile.email,
            created_at=profile.created_at,
        )
    )


@router.patch(
    "/profile",
    response_model=OperationResponse,
    summary="Update own profile",
    responses={400: {"description": "One of the update steps failed"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_profile(
    request: Request,
    body: ProfileUpdate,
    user: CurrentUser,
    service: AuthService = Depends(get_auth_service),
) -> OperationResponse:
    """
    Update name and/or e-mail.

    A new e-mail is written to the profile row first and to the auth
    identity second; the two writes are not atomic.
    """
    result = await service.update_profile(user.id, name=body.name, email=body.email)
    steps = ensure_ok(result)
    return OperationResponse(message="Profile updated successfully", steps=steps)


@router.put(
    "/password",
    response_model=OperationResponse,
    summary="Change password",
    responses={400: {"description": "Passwords do not match or the update failed"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_password(
    request: Request,
    body: PasswordUpdate,
    user: CurrentUser,
    service: AuthService = Depends(get_auth_service),
) -> OperationResponse:
    """Change the signed-in user's password."""
    result = await service.update_password(body.new_password, body.confirm_password)
    steps = ensure_ok(result)
    return OperationResponse(message="Password updated successfully", steps=steps)


@router.delete(
    "",
    response_model=AccountDeleteResponse,
    summary="Delete own account",
    responses={
        400: {"description": "Confirmation missing or a delete step failed"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_account(
    request: Request,
    user: CurrentUser,
    confirm: bool = Query(False, description="Must be true; the confirmation step"),
    service: AuthService = Depends(get_auth_service),
) -> AccountDeleteResponse:
    """
    Delete the user's projects, then the profile, then sign out.

    The auth identity is not removed.
    """
    if not confirm:
        raise ConfirmationRequiredError("delete your account")

    result = await service.delete_account(user.id)
    steps = ensure_ok(result)
    logger.info("account_deleted", user_id=str(user.id), deleted_projects=result.data)

    signed_out = (await service.sign_out()).ok
    return AccountDeleteResponse(
        message="Account deleted",
        deleted_projects=result.data or 0,
        signed_out=signed_out,
        steps=steps,
    )
