"""Per-request remote service."""

from typing import AsyncIterator

from domain.repositories.remote_service import IRemoteDataService
from infrastructure.supabase.client import SupabaseClient


async def get_remote_service() -> AsyncIterator[IRemoteDataService]:
    """Open a Supabase client for the request and close it afterwards.

    Each request gets its own client so the caller's session never leaks
    into another request.
    """
    client = SupabaseClient()
    try:
        yield client
    finally:
        await client.aclose()
