"""Pydantic schemas for the recent-updates feed."""

import datetime

from pydantic import BaseModel


class RecentUpdateResponse(BaseModel):
    """Schema for one announcement."""

    date: datetime.date
    text: str


class RecentUpdateListResponse(BaseModel):
    """Schema for the feed."""

    data: list[RecentUpdateResponse]
