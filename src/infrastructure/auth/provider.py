"""Access-token verification protocol."""

from typing import Protocol

from domain.entities.session import AuthUser


class IAuthProvider(Protocol):
    """Verifies access tokens issued by the auth service."""

    async def validate_token(self, token: str) -> AuthUser | None:
        """
        Validate an access token.

        Args:
            token: The bearer token to validate

        Returns:
            AuthUser if valid, None if invalid or expired
        """
        ...

    def create_token(self, user: AuthUser) -> str:
        """
        Issue a token for a user (tests and local development only).

        Args:
            user: The user to create a token for

        Returns:
            The generated token string
        """
        ...
