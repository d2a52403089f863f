"""PostgREST implementation of the Project repository."""

from typing import Callable
from uuid import UUID

import httpx

from core.exceptions import RemoteServiceError
from domain.entities.project import Project, ProjectDraft
from infrastructure.supabase.http import MALFORMED_MESSAGE, read_rows, send
from infrastructure.supabase.records import project_from_record, project_to_record

PATH = "/rest/v1/projects"


class SupabaseProjectRepository:
    """PostgREST implementation of IProjectRepository."""

    def __init__(self, http: httpx.AsyncClient, headers: Callable[[], dict[str, str]]) -> None:
        self._http = http
        self._headers = headers

    async def list_all(self) -> list[Project]:
        """Get every project, newest first."""
        response = await send(
            self._http,
            "GET",
            PATH,
            headers=self._headers(),
            params={"select": "*", "order": "created_at.desc"},
        )
        return read_rows(response, project_from_record)

    async def insert(self, draft: ProjectDraft) -> Project:
        """Insert a project and return the stored row."""
        response = await send(
            self._http,
            "POST",
            PATH,
            headers={**self._headers(), "Prefer": "return=representation"},
            json=[project_to_record(draft)],
        )
        rows = read_rows(response, project_from_record)
        if not rows:
            raise RemoteServiceError(MALFORMED_MESSAGE, remote_status=response.status_code)
        return rows[0]

    async def delete_for_user(self, user_id: UUID) -> int:
        """Delete all of a user's projects."""
        response = await send(
            self._http,
            "DELETE",
            PATH,
            headers={**self._headers(), "Prefer": "return=representation"},
            params={"user_id": f"eq.{user_id}"},
        )
        return len(read_rows(response, dict))
