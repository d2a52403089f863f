"""Project submission."""

import logging

from core.config import settings
from core.exceptions import (
    AppException,
    ErrorCode,
    ProjectCreationError,
    SignInRequiredError,
)
from domain.entities.project import Project, ProjectDraft
from domain.entities.session import AuthUser
from domain.repositories.remote_service import IRemoteDataService

logger = logging.getLogger(__name__)


class ProjectService:
    """Builds and inserts projects on behalf of the signed-in user."""

    def __init__(
        self,
        remote: IRemoteDataService,
        default_image: str = settings.default_project_image,
    ) -> None:
        self._remote = remote
        self._default_image = default_image

    async def submit(
        self,
        user: AuthUser | None,
        title: str,
        link: str,
        image: str | None = None,
    ) -> Project:
        """Insert a new project with rating 0.

        The returned row is for the caller only. The catalog picks the
        project up from the push channel, so applying this row as well
        would show it twice.

        Raises:
            SignInRequiredError: no user is signed in (no remote call is made)
            ProjectCreationError: the insert failed
        """
        if user is None:
            raise SignInRequiredError()

        if not title or not link:
            raise AppException(
                ErrorCode.VALIDATION_ERROR,
                "Project name and link are required",
                400,
                {"fields": [f for f, v in (("title", title), ("link", link)) if not v]},
            )

        draft = ProjectDraft(
            title=title,
            link=link,
            image=image or self._default_image,
            rating=0,
            user_id=user.id,
        )

        try:
            return await self._remote.projects.insert(draft)
        except AppException as exc:
            logger.warning("Creating project for user %s failed: %s", user.id, exc.message)
            raise ProjectCreationError() from exc
