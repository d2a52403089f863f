"""Supabase implementation of the remote data service."""

from typing import Any

import httpx

from core.config import settings
from infrastructure.supabase.auth import SupabaseAuthGateway
from infrastructure.supabase.realtime import SupabaseRealtimeChannel
from infrastructure.supabase.repositories.profile_repo import SupabaseProfileRepository
from infrastructure.supabase.repositories.project_repo import SupabaseProjectRepository


class SupabaseClient:
    """Tables, auth and realtime of one Supabase project.

    Table calls carry the signed-in user's access token when there is one,
    so row-level security applies; otherwise they go out with the anon key.
    """

    def __init__(
        self,
        url: str = settings.supabase_url,
        api_key: str = settings.supabase_anon_key,
        realtime_url: str = settings.supabase_realtime_url,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key
        self._realtime_url = realtime_url
        self._http = http or httpx.AsyncClient(base_url=url.rstrip("/"))
        self.auth = SupabaseAuthGateway(self._http, api_key)
        self.projects = SupabaseProjectRepository(self._http, self._headers)
        self.profiles = SupabaseProfileRepository(self._http, self._headers)

    def _headers(self) -> dict[str, str]:
        token = self.auth.access_token or self._api_key
        return {"apikey": self._api_key, "Authorization": f"Bearer {token}"}

    def channel(self, name: str) -> SupabaseRealtimeChannel:
        return SupabaseRealtimeChannel(
            self._realtime_url,
            self._api_key,
            name,
            access_token=self.auth.access_token,
        )

    async def health(self) -> bool:
        """Ping the GoTrue health endpoint."""
        try:
            response = await self._http.get(
                "/auth/v1/health", headers={"apikey": self._api_key}
            )
        except httpx.HTTPError:
            return False
        return response.is_success

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "SupabaseClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()
