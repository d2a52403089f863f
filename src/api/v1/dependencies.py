"""Dependency injection factories for API v1."""

from fastapi import Depends, Request

from api.dependencies.remote import get_remote_service
from core.exceptions import CatalogUnavailableError
from domain.repositories.remote_service import IRemoteDataService
from domain.services.auth_service import AuthService
from domain.services.project_service import ProjectService
from domain.services.showcase_controller import ShowcaseController


def get_auth_service(
    remote: IRemoteDataService = Depends(get_remote_service),
) -> AuthService:
    """Get Auth service bound to the request's remote client."""
    return AuthService(remote)


def get_project_service(
    remote: IRemoteDataService = Depends(get_remote_service),
) -> ProjectService:
    """Get Project service bound to the request's remote client."""
    return ProjectService(remote)


def get_controller(request: Request) -> ShowcaseController:
    """Get the controller mounted by the application lifespan."""
    controller: ShowcaseController | None = getattr(request.app.state, "controller", None)
    if controller is None:
        raise CatalogUnavailableError("Catalog is not available")
    return controller
