"""Exception handlers for the FastAPI application.

Every error leaves the API as ``{error_code, message, details}`` with one
human-readable message, whatever layer raised it.
"""

from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import settings
from core.exceptions import AppException, ErrorCode
from core.rate_limit import rate_limit_exceeded_handler

logger = structlog.get_logger()

REQUIRED_FIELDS_MESSAGE = "Please fill in all required fields"
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


def error_response(
    status_code: int, error_code: str, message: str, details: Any | None = None
) -> ORJSONResponse:
    return ORJSONResponse(
        status_code=status_code,
        content={"error_code": error_code, "message": message, "details": details},
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> ORJSONResponse:
        # Remote failures are worth a look; user mistakes are not.
        log = logger.warning if exc.status_code >= 500 else logger.info
        log(
            "app_exception",
            error_code=exc.error_code.value,
            message=exc.message,
            status_code=exc.status_code,
            path=request.url.path,
        )
        return error_response(exc.status_code, exc.error_code.value, exc.message, exc.details)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> ORJSONResponse:
        return error_response(exc.status_code, "HTTP_ERROR", str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> ORJSONResponse:
        """A missing or malformed form field; the details name each one."""
        fields = [
            {
                "field": ".".join(str(part) for part in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
            }
            for error in exc.errors()
        ]
        logger.info("validation_error", fields=[f["field"] for f in fields])
        return error_response(
            422, ErrorCode.VALIDATION_ERROR.value, REQUIRED_FIELDS_MESSAGE, fields
        )

    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> ORJSONResponse:
        """Last resort: log with traceback and answer 500; the API stays up."""
        request_id = getattr(request.state, "request_id", "unknown")
        logger.error(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=request_id,
            exc_info=True,
        )
        message = UNEXPECTED_ERROR_MESSAGE if settings.is_production else str(exc)
        return error_response(
            500, ErrorCode.INTERNAL_ERROR.value, message, {"request_id": request_id}
        )
