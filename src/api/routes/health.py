"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from api.dependencies.remote import get_remote_service
from core.config import settings
from domain.repositories.remote_service import IRemoteDataService

router = APIRouter(tags=["health"])

VERSION = "1.0.0"


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str
    environment: str
    remote: str | None = None
    catalog: str | None = None


def _catalog_status(request: Request) -> str:
    controller = getattr(request.app.state, "controller", None)
    if controller is None:
        return "not mounted"
    catalog = controller.catalog
    if catalog.error:
        return f"unhealthy: {catalog.error}"
    if catalog.is_loading:
        return "loading"
    live = "live" if controller.is_mounted else "detached"
    return f"healthy ({len(catalog)} projects, {live})"


@router.get("/health", response_model=HealthResponse, summary="Basic health check")
async def health_check() -> HealthResponse:
    """
    Basic health check for load balancers.

    Returns service status without checking dependencies. Fast and lightweight.
    """
    return HealthResponse(
        status="healthy",
        version=VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
        environment=settings.app_env,
    )


@router.get(
    "/health/detailed",
    response_model=HealthResponse,
    summary="Detailed health check",
)
async def detailed_health_check(
    request: Request,
    remote: IRemoteDataService = Depends(get_remote_service),
) -> HealthResponse:
    """
    Detailed health check including the remote service and the catalog.

    Use for monitoring dashboards that need to verify all dependencies.
    """
    remote_status = "healthy" if await remote.health() else "unreachable"
    catalog_status = _catalog_status(request)

    healthy = remote_status == "healthy" and catalog_status.startswith("healthy")
    return HealthResponse(
        status="healthy" if healthy else "degraded",
        version=VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
        environment=settings.app_env,
        remote=remote_status,
        catalog=catalog_status,
    )
