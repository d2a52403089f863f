"""Project repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.project import Project, ProjectDraft


class IProjectRepository(Protocol):
    """Remote ``projects`` table."""

    async def list_all(self) -> list[Project]:
        """Get every project, newest first (ordered by created_at desc)."""
        ...

    async def insert(self, draft: ProjectDraft) -> Project:
        """Insert a project and return the stored row."""
        ...

    async def delete_for_user(self, user_id: UUID) -> int:
        """Delete all projects owned by a user and return how many went."""
        ...
