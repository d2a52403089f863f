"""Pydantic schemas for the account page."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from api.v1.schemas.common import StepResponse


class ProfileResponse(BaseModel):
    """Schema for Profile response."""

    id: UUID
    name: str
    email: str
    created_at: datetime


class ProfileDetailResponse(BaseModel):
    """Schema for single Profile."""

    data: ProfileResponse


class ProfileUpdate(BaseModel):
    """Schema for updating a Profile."""

    name: str | None = Field(None, min_length=1, max_length=100)
    email: str | None = Field(None, min_length=3, max_length=254)


class PasswordUpdate(BaseModel):
    """Schema for changing the password."""

    new_password: str = Field(..., min_length=1)
    confirm_password: str | None = None


class AccountDeleteResponse(BaseModel):
    """Schema for account deletion."""

    message: str
    deleted_projects: int
    signed_out: bool
    steps: list[StepResponse] = []
