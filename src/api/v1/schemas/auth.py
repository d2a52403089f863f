"""Pydantic schemas for sign-up and sign-in."""

from uuid import UUID

from pydantic import BaseModel, Field

from domain.entities.session import AuthUser, Session


class SignInRequest(BaseModel):
    """Schema for signing in."""

    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=1)


class SignUpRequest(SignInRequest):
    """Schema for signing up; the name goes to the profile row."""

    name: str = Field(..., min_length=1, max_length=100)


class UserResponse(BaseModel):
    """Schema for an authenticated identity."""

    id: UUID
    email: str

    @classmethod
    def from_entity(cls, user: AuthUser) -> "UserResponse":
        return cls(id=user.id, email=user.email)


class SessionResponse(BaseModel):
    """Schema for an issued session."""

    access_token: str
    refresh_token: str | None = None
    expires_in: int | None = None
    token_type: str = "bearer"
    user: UserResponse

    @classmethod
    def from_entity(cls, session: Session) -> "SessionResponse":
        return cls(
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            expires_in=session.expires_in,
            token_type=session.token_type,
            user=UserResponse.from_entity(session.user),
        )


class SignUpResponse(BaseModel):
    """Schema for sign-up; ``session`` is absent while e-mail confirmation is pending."""

    user: UserResponse | None = None
    session: SessionResponse | None = None
    confirmation_required: bool = False


class CurrentSessionResponse(BaseModel):
    """Schema for the current session state."""

    authenticated: bool
    user: UserResponse | None = None
