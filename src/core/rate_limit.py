"""Rate limiting configuration using slowapi."""

from fastapi import Request
from fastapi.responses import ORJSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from core.config import settings
from core.exceptions import ErrorCode

# Per client address
READ_LIMIT = "30/minute"
WRITE_LIMIT = "10/minute"

limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.rate_limit_enabled,
)


async def rate_limit_exceeded_handler(request: Request, exc: Exception) -> ORJSONResponse:
    """Answer 429 in the shared error format."""
    detail = exc.detail if isinstance(exc, RateLimitExceeded) else str(exc)
    return ORJSONResponse(
        status_code=429,
        content={
            "error_code": ErrorCode.RATE_LIMIT_EXCEEDED.value,
            "message": "Too many requests, please slow down",
            "details": {
                "limit": str(detail),
                "request_id": getattr(request.state, "request_id", None),
            },
        },
    )
