"""Common Pydantic schemas shared across the API."""

from typing import Any

from pydantic import BaseModel

from core.exceptions import OperationFailedError
from domain.entities.operation import OperationResult


class ErrorResponse(BaseModel):
    """Standardized error response."""

    error_code: str
    message: str
    details: Any | None = None


class MessageResponse(BaseModel):
    """Simple message response."""

    message: str


class StepResponse(BaseModel):
    """Outcome of one remote step."""

    name: str
    status: str
    error: str | None = None


class OperationResponse(BaseModel):
    """Success message plus the steps that produced it."""

    message: str
    steps: list[StepResponse] = []


def ensure_ok(result: OperationResult[Any]) -> list[StepResponse]:
    """Raise ``OperationFailedError`` for a failed result, else return its steps."""
    if result.error is not None:
        raise OperationFailedError(
            result.error, steps=[step.as_dict() for step in result.steps]
        )
    return [StepResponse(**step.as_dict()) for step in result.steps]
