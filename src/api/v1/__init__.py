"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.account import router as account_router
from api.v1.routes.auth import router as auth_router
from api.v1.routes.projects import router as projects_router
from api.v1.routes.updates import router as updates_router

router = APIRouter()
router.include_router(projects_router)
router.include_router(auth_router)
router.include_router(account_router)
router.include_router(updates_router)
