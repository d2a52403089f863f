"""PostgREST implementation of the Profile repository."""

from typing import Any, Callable
from uuid import UUID

import httpx

from domain.entities.profile import Profile
from infrastructure.supabase.http import read_rows, send
from infrastructure.supabase.records import profile_from_record

PATH = "/rest/v1/profiles"


class SupabaseProfileRepository:
    """PostgREST implementation of IProfileRepository."""

    def __init__(self, http: httpx.AsyncClient, headers: Callable[[], dict[str, str]]) -> None:
        self._http = http
        self._headers = headers

    async def get(self, id: UUID) -> Profile | None:
        """Get a profile by user ID."""
        response = await send(
            self._http,
            "GET",
            PATH,
            headers=self._headers(),
            params={"select": "id,name,email,created_at", "id": f"eq.{id}"},
        )
        rows = read_rows(response, profile_from_record)
        return rows[0] if rows else None

    async def create(self, profile: Profile) -> None:
        """Insert a profile row."""
        await send(
            self._http,
            "POST",
            PATH,
            headers={**self._headers(), "Prefer": "return=minimal"},
            json=[{"id": str(profile.id), "name": profile.name, "email": profile.email}],
        )

    async def update(
        self, id: UUID, name: str | None = None, email: str | None = None
    ) -> None:
        """Update the given fields of a profile row."""
        changes: dict[str, Any] = {}
        if name is not None:
            changes["name"] = name
        if email is not None:
            changes["email"] = email
        if not changes:
            return

        await send(
            self._http,
            "PATCH",
            PATH,
            headers={**self._headers(), "Prefer": "return=minimal"},
            params={"id": f"eq.{id}"},
            json=changes,
        )

    async def delete(self, id: UUID) -> None:
        """Delete a profile row."""
        await send(
            self._http,
            "DELETE",
            PATH,
            headers=self._headers(),
            params={"id": f"eq.{id}"},
        )
