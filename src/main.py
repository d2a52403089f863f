"""Main FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi.middleware import SlowAPIMiddleware

from api.exception_handlers import setup_exception_handlers
from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import RequestIDMiddleware
from api.middleware.security import SecurityHeadersMiddleware
from api.routes.health import router as health_router
from api.v1 import router as v1_router
from core.config import settings
from core.logging import setup_logging
from core.rate_limit import limiter
from domain.services.showcase_controller import ShowcaseController
from infrastructure.supabase.client import SupabaseClient

logger = structlog.get_logger()

# Initialize structured logging
setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Mount the catalog controller on startup and unmount it on shutdown."""
    if not settings.supabase_url:
        logger.warning("supabase_not_configured")

    remote = SupabaseClient()
    controller = ShowcaseController(remote)
    app.state.controller = controller

    await controller.mount()
    logger.info(
        "catalog_mounted",
        projects=len(controller.catalog),
        error=controller.catalog.error,
    )
    try:
        yield
    finally:
        await controller.unmount()
        await remote.aclose()
        app.state.controller = None
        logger.info("catalog_unmounted")


def _openapi_tags() -> list[dict[str, str]]:
    return [
        {"name": name, "description": description}
        for name, description in (
            ("health", "Liveness and dependency checks"),
            ("projects", "Catalog browsing, live stream and project submission"),
            ("auth", "Sign-up, sign-in and sign-out"),
            ("account", "Profile, password and account deletion"),
            ("updates", "Recent updates feed"),
        )
    ]


def _install_middleware(app: FastAPI) -> None:
    # Last added runs outermost: CORS, gzip, request id, headers, logging, limits.
    app.state.limiter = limiter
    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def create_app() -> FastAPI:
    """Build the showcase API: middleware, error envelope and routers."""
    app = FastAPI(
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        title=settings.app_name,
        description=(
            "## Project Showcase\n\n"
            "Browse, search and submit apps and games. Storage, authentication "
            "and realtime delivery are provided by Supabase.\n\n"
            "New submissions reach every open catalog through "
            "`GET /api/v1/projects/stream` (server-sent events).\n\n"
            "Authenticated endpoints take the Supabase access token as "
            "`Authorization: Bearer <access_token>`. Reads are limited to "
            "30 requests/minute and writes to 10 requests/minute per client."
        ),
        version="1.0.0",
        debug=settings.debug,
        license_info={"name": "MIT"},
        openapi_tags=_openapi_tags(),
    )

    _install_middleware(app)
    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(v1_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )
