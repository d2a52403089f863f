"""Auth session domain entities."""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID


class AuthChangeEvent(StrEnum):
    """Session lifecycle notifications emitted by the auth service."""

    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    USER_UPDATED = "USER_UPDATED"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"


@dataclass(frozen=True, slots=True)
class AuthUser:
    """Authenticated identity."""

    id: UUID
    email: str


@dataclass(frozen=True, slots=True)
class Session:
    """Opaque session issued by the auth service."""

    access_token: str
    user: AuthUser
    refresh_token: str | None = None
    expires_in: int | None = None
    token_type: str = "bearer"


@dataclass(frozen=True, slots=True)
class SignUpResult:
    """Identity created by sign-up.

    ``session`` is None when the project requires e-mail confirmation.
    """

    user: AuthUser | None
    session: Session | None = None
