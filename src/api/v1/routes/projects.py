"""Project catalog API routes."""

import asyncio
from typing import AsyncIterator

import structlog
from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import StreamingResponse

from api.dependencies.auth import OptionalUser
from api.v1.dependencies import get_controller, get_project_service
from api.v1.schemas.project import (
    ProjectCreate,
    ProjectDetailResponse,
    ProjectListResponse,
    ProjectResponse,
)
from core.exceptions import CatalogUnavailableError
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.project_service import ProjectService
from domain.services.showcase_controller import ShowcaseController
from domain.state.catalog_state import CatalogEvent, ProjectInserted, ProjectsLoaded

logger = structlog.get_logger()

router = APIRouter(prefix="/projects", tags=["projects"])

KEEPALIVE_SECONDS = 15.0


def format_event(event: CatalogEvent) -> str | None:
    """Render a catalog event as a server-sent event frame."""
    if isinstance(event, ProjectInserted):
        data = ProjectResponse.from_entity(event.project).model_dump_json()
        return f"event: project_inserted\ndata: {data}\n\n"
    if isinstance(event, ProjectsLoaded):
        return f"event: catalog_loaded\ndata: {{\"total\": {len(event.projects)}}}\n\n"
    return None


@router.get(
    "",
    response_model=ProjectListResponse,
    summary="Browse the catalog",
    responses={
        200: {"description": "Projects whose title matches the search"},
        503: {"description": "The catalog could not be fetched"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_projects(
    request: Request,
    controller: ShowcaseController = Depends(get_controller),
    search: str = Query("", max_length=200, description="Case-insensitive title filter"),
) -> ProjectListResponse:
    """
    Get the catalog grid.

    Order is the initial fetch (newest first) followed by projects pushed
    since, in arrival order.
    """
    catalog = controller.catalog
    if catalog.error:
        raise CatalogUnavailableError(catalog.error)
    if catalog.is_loading:
        return ProjectListResponse(data=[], total=0, search=search, loading=True)

    projects = controller.visible_projects(search)
    return ProjectListResponse(
        data=[ProjectResponse.from_entity(p) for p in projects],
        total=len(projects),
        search=search,
    )


@router.post(
    "",
    response_model=ProjectDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a project",
    responses={
        201: {"description": "Project created"},
        401: {"description": "Sign in required"},
        502: {"description": "The remote service rejected the insert"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_project(
    request: Request,
    body: ProjectCreate,
    user: OptionalUser,
    service: ProjectService = Depends(get_project_service),
) -> ProjectDetailResponse:
    """
    Submit a project with rating 0.

    The new card reaches the grid through the realtime channel, not through
    this response.
    """
    project = await service.submit(user, body.title, body.link, body.image)
    logger.info("project_created", project_id=str(project.id), user_id=str(project.user_id))
    return ProjectDetailResponse(data=ProjectResponse.from_entity(project))


@router.get(
    "/stream",
    summary="Stream catalog changes",
    response_class=StreamingResponse,
    responses={200: {"content": {"text/event-stream": {}}}},
)
async def stream_projects(
    request: Request,
    controller: ShowcaseController = Depends(get_controller),
) -> StreamingResponse:
    """Server-sent events for every project appended to the catalog."""
    queue: asyncio.Queue[CatalogEvent] = asyncio.Queue()
    remove = controller.add_listener(queue.put_nowait)

    async def events() -> AsyncIterator[str]:
        try:
            while True:
                try:
                    event = await asyncio.wait_for(queue.get(), timeout=KEEPALIVE_SECONDS)
                except asyncio.TimeoutError:
                    if await request.is_disconnected():
                        break
                    yield ": keep-alive\n\n"
                    continue
                frame = format_event(event)
                if frame:
                    yield frame
        finally:
            remove()

    return StreamingResponse(
        events(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
