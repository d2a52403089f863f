"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    SIGN_IN_REQUIRED = "SIGN_IN_REQUIRED"

    # Not found errors (404)
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFIRMATION_REQUIRED = "CONFIRMATION_REQUIRED"
    OPERATION_FAILED = "OPERATION_FAILED"

    # Remote service errors (502/503)
    PROJECT_CREATION_FAILED = "PROJECT_CREATION_FAILED"
    CATALOG_UNAVAILABLE = "CATALOG_UNAVAILABLE"
    REMOTE_SERVICE_ERROR = "REMOTE_SERVICE_ERROR"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class SignInRequiredError(AppException):
    """An action needs a signed-in user; the client should open the sign-in prompt."""

    def __init__(self, message: str = "You must be logged in to create a project") -> None:
        super().__init__(
            error_code=ErrorCode.SIGN_IN_REQUIRED,
            message=message,
            status_code=401,
            details={"prompt": "sign_in"},
        )


class RemoteServiceError(AppException):
    """The remote data service rejected a call or could not be reached."""

    def __init__(self, message: str, remote_status: int | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.REMOTE_SERVICE_ERROR,
            message=message,
            status_code=502,
            details={"remote_status": remote_status} if remote_status else None,
        )
        self.remote_status = remote_status


class ProjectCreationError(AppException):
    """Inserting a project failed."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.PROJECT_CREATION_FAILED,
            message="Failed to create project",
            status_code=502,
        )


class CatalogUnavailableError(AppException):
    """The catalog could not be loaded; the grid is replaced by this error."""

    def __init__(self, message: str = "Failed to fetch projects") -> None:
        super().__init__(
            error_code=ErrorCode.CATALOG_UNAVAILABLE,
            message=message,
            status_code=503,
        )


class ProfileNotFoundError(AppException):
    """Profile not found."""

    def __init__(self, user_id: str, message: str = "Failed to load profile") -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message=message,
            status_code=404,
            details={"user_id": user_id},
        )


class ConfirmationRequiredError(AppException):
    """A destructive action was requested without its confirmation step."""

    def __init__(self, action: str) -> None:
        super().__init__(
            error_code=ErrorCode.CONFIRMATION_REQUIRED,
            message=f"Please confirm before you {action}",
            status_code=400,
            details={"action": action},
        )


class OperationFailedError(AppException):
    """A facade operation returned an error result."""

    def __init__(self, message: str, steps: list[dict[str, Any]] | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.OPERATION_FAILED,
            message=message,
            status_code=400,
            details={"steps": steps or []},
        )
