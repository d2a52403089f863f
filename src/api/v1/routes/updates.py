"""Recent updates feed."""

from fastapi import APIRouter, Request

from api.v1.schemas.update import RecentUpdateListResponse, RecentUpdateResponse
from core.rate_limit import READ_LIMIT, limiter
from domain.entities.update import RECENT_UPDATES

router = APIRouter(prefix="/updates", tags=["updates"])


@router.get("", response_model=RecentUpdateListResponse, summary="Recent updates")
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_updates(request: Request) -> RecentUpdateListResponse:
    """Newest announcements first."""
    return RecentUpdateListResponse(
        data=[RecentUpdateResponse(date=u.date, text=u.text) for u in RECENT_UPDATES]
    )
