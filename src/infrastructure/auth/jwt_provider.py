"""JWT verification of Supabase access tokens.

Supabase signs access tokens with ES256 (asymmetric keys, published as
JWKS) or, on older projects, with the HS256 project secret. Tokens created
locally for tests use HS256 too.

Supabase JWT payload structure:
    {
        "sub": "user-uuid",
        "email": "user@example.com",
        "role": "authenticated",
        "aud": "authenticated",
        "exp": 1234567890
    }
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional
from uuid import UUID

import httpx
from jose import JWTError, jwt
from jose.backends import ECKey

from core.config import settings
from domain.entities.session import AuthUser

logger = logging.getLogger(__name__)

# Module-level JWKS cache (fetched once, reused across requests)
_jwks_cache: dict[str, Any] | None = None


async def _get_jwks_keys() -> dict[str, Any]:
    """Fetch and cache JWKS keys from Supabase."""
    global _jwks_cache
    if _jwks_cache is not None:
        return _jwks_cache

    jwks_url = settings.supabase_jwks_url
    if not jwks_url:
        return {}

    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(jwks_url, timeout=10.0)
            response.raise_for_status()
            keys = {
                key_data["kid"]: key_data
                for key_data in response.json().get("keys", [])
                if key_data.get("kid")
            }
    except (httpx.HTTPError, ValueError):
        logger.exception("Failed to fetch JWKS from %s", jwks_url)
        return {}

    _jwks_cache = keys
    logger.info("Fetched %d JWKS keys from Supabase", len(keys))
    return keys


class JWTAuthProvider:
    """Validates bearer tokens without a round trip to the auth service."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    async def validate_token(self, token: str) -> Optional[AuthUser]:
        """
        Validate a JWT and extract the user.

        Args:
            token: The JWT to validate

        Returns:
            AuthUser if valid, None if invalid or expired
        """
        try:
            header = jwt.get_unverified_header(token)
            if header.get("alg") == "ES256":
                payload = await self._validate_es256(token, header)
            else:
                payload = jwt.decode(
                    token,
                    self._secret_key,
                    algorithms=[self._algorithm],
                    options={"verify_aud": False},
                )
        except JWTError:
            return None

        if payload is None:
            return None

        user_id = payload.get("sub")
        email = payload.get("email")
        if not user_id or not email:
            return None

        try:
            return AuthUser(id=UUID(user_id), email=email)
        except ValueError:
            return None

    async def _validate_es256(self, token: str, header: dict) -> Optional[dict]:
        """Validate an ES256-signed JWT using JWKS public keys."""
        kid = header.get("kid")
        if not kid:
            return None

        jwks_keys = await _get_jwks_keys()
        key_data = jwks_keys.get(kid)
        if not key_data:
            # Unknown kid: the project may have rotated keys
            global _jwks_cache
            _jwks_cache = None
            key_data = (await _get_jwks_keys()).get(kid)
            if not key_data:
                logger.warning("JWKS key not found for kid=%s", kid)
                return None

        return jwt.decode(
            token,
            ECKey(key_data, algorithm="ES256"),
            algorithms=["ES256"],
            options={"verify_aud": False},
        )

    def create_token(self, user: AuthUser) -> str:
        """Create an HS256 access token shaped like a Supabase one."""
        expire = datetime.now(timezone.utc) + timedelta(minutes=self._expire_minutes)
        payload: dict[str, Any] = {
            "sub": str(user.id),
            "email": user.email,
            "aud": "authenticated",
            "role": "authenticated",
            "exp": expire,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
